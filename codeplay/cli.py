"""Command-line entry point.

Usage::

    codeplay serve --port 8000
    codeplay export REACTJS -o react.json
    codeplay export ./my-starter -o starter.json
    codeplay materialize react.json ./react-copy
    codeplay templates
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.table import Table

from codeplay.config import Config
from codeplay.playgrounds import StoreError
from codeplay.templates import list_templates, parse_template_id, resolve_template_path
from codeplay.tree import (
    TemplateStructureError,
    load_template_structure,
    save_template_structure_to_json,
    write_template_structure,
)
from codeplay.utils import console, print_error, print_success, print_summary_table, setup_logging


def _resolve_source(source: str, config: Config) -> Path:
    """A template id resolves through the registry; anything else is a path."""
    if parse_template_id(source) is not None:
        return resolve_template_path(source, config.templates_root)
    return Path(source)


def _cmd_serve(args: argparse.Namespace, config: Config) -> int:
    import uvicorn

    from codeplay.api import create_app

    host = args.host or config.server.host
    port = args.port or config.server.port
    uvicorn.run(create_app(config), host=host, port=port, log_level=config.server.log_level.lower())
    return 0


def _cmd_export(args: argparse.Namespace, config: Config) -> int:
    source = _resolve_source(args.source, config)
    output = Path(args.output)
    tree = asyncio.run(save_template_structure_to_json(source, output, config.scan))
    folders, files = tree.count()
    print_summary_table(
        {"Source": str(source), "Output": str(output), "Folders": str(folders), "Files": str(files)},
        title="Template exported",
    )
    return 0


def _cmd_materialize(args: argparse.Namespace, config: Config) -> int:
    tree = load_template_structure(args.json_file)
    written = write_template_structure(tree, args.target)
    print_success(f"Wrote {len(written)} file(s) to {args.target}")
    return 0


def _cmd_templates(args: argparse.Namespace, config: Config) -> int:
    table = Table(title="Templates", show_header=True, header_style="bold cyan")
    table.add_column("Id", no_wrap=True)
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Directory", style="dim")
    for info in list_templates(args.category):
        table.add_row(
            info.id.value,
            info.name,
            info.category.value,
            str(resolve_template_path(info.id, config.templates_root)),
        )
    console.print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codeplay",
        description="CodePlay -- playground projects from starter templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", default=None, help="Load configuration from a JSON file")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(handler=_cmd_serve)

    export = sub.add_parser("export", help="Serialize a template or directory to JSON")
    export.add_argument("source", help="Template id (e.g. REACTJS) or directory path")
    export.add_argument("--output", "-o", required=True, help="Destination JSON file")
    export.set_defaults(handler=_cmd_export)

    materialize = sub.add_parser("materialize", help="Write a JSON tree back to files")
    materialize.add_argument("json_file", help="JSON file produced by 'export'")
    materialize.add_argument("target", help="Directory to write into")
    materialize.set_defaults(handler=_cmd_materialize)

    templates = sub.add_parser("templates", help="List the available templates")
    templates.add_argument("--category", choices=["frontend", "backend", "fullstack"], default=None)
    templates.set_defaults(handler=_cmd_templates)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``codeplay`` / ``python -m codeplay``."""
    args = build_parser().parse_args(argv)

    try:
        config = Config.load(Path(args.config)) if args.config else Config.from_env()
    except (OSError, ValidationError, ValueError) as exc:
        print_error(f"Invalid configuration: {exc}")
        return 1
    if args.log_level:
        config.server.log_level = args.log_level
    setup_logging(config.server.log_level)

    try:
        return args.handler(args, config)
    except (TemplateStructureError, StoreError, OSError) as exc:
        print_error(f"Error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
