"""Shared utility functions for CodePlay.

Provides logging setup, JSON I/O, file-system helpers, a scoped temporary
output file, and Rich-based console reporting used by the CLI.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

console = Console()

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

_LOG_FORMAT = "%(name)s: %(message)s"


def setup_logging(level: str | int = "INFO") -> None:
    """Configure the ``codeplay`` logger hierarchy with a Rich handler.

    Safe to call more than once; the handler is only attached the first time.
    """
    root = logging.getLogger("codeplay")
    root.setLevel(level if isinstance(level, int) else level.upper())
    if any(isinstance(h, RichHandler) for h in root.handlers):
        return
    handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(handler)
    root.propagate = False


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def write_json(data: dict[str, Any] | list[Any], path: str | Path) -> None:
    """Atomically replace *path* with *data* as pretty-printed JSON.

    The document is written to a hidden sibling file first and then moved
    over *path* with ``os.replace``, so readers see either the old file or
    the complete new one.

    Args:
        data: A JSON-serialisable dict or list.
        path: Destination file.  Parent directories are created as needed.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=2, ensure_ascii=False, default=str)
    tmp_path = file_path.with_name(f".{file_path.name}.{uuid.uuid4().hex[:8]}.tmp")
    try:
        tmp_path.write_text(content, encoding="utf-8")
        os.replace(tmp_path, file_path)
    finally:
        tmp_path.unlink(missing_ok=True)


async def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> None:
    """Save data as pretty-printed JSON.

    The write is performed in a worker thread to avoid blocking the event
    loop on large files.

    Args:
        data: A JSON-serialisable dict or list.
        path: Destination file path.
    """
    await asyncio.to_thread(write_json, data, path)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Args:
        path: Directory to create.

    Returns:
        The resolved ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


def temporary_output_name(prefix: str, suffix: str = ".json") -> str:
    """Build a collision-resistant file name: ``<prefix>-<epoch-ms>-<hex><suffix>``."""
    stamp = int(time.time() * 1000)
    return f"{prefix}-{stamp}-{uuid.uuid4().hex[:8]}{suffix}"


@contextmanager
def temporary_output_file(directory: str | Path, prefix: str) -> Iterator[Path]:
    """Yield a unique file path under *directory* and delete it on exit.

    The file itself is not created; whatever the body writes there is removed
    when the block exits, whether normally or through an exception.  Failure
    to delete is logged and never raised.

    Args:
        directory: Scratch directory; created if missing.
        prefix: Leading part of the file name, usually the template id.

    Yields:
        The path the caller may write to.
    """
    out_dir = ensure_dir(directory)
    path = out_dir / temporary_output_name(prefix)
    try:
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Failed to clean up temporary file %s: %s", path, exc)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")

