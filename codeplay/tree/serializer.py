"""Directory <-> tree <-> JSON conversion for template file structures.

The scan walks a directory into a ``TemplateFolder`` tree, reading every
regular file as UTF-8 text.  Entries are visited in name order so the same
directory always produces the same tree.  The tree can be written to a JSON
file, read back from one, or materialized as files on disk again.

Unsupported entries (symlinks, sockets/FIFOs, non-UTF-8 files, duplicate
sibling names on write) fail fast with ``UnsupportedEntryError``.  Any other
I/O error propagates unchanged and aborts the whole operation.
"""

from __future__ import annotations

import asyncio
import fnmatch
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from .models import TemplateFile, TemplateFolder

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TemplateStructureError(Exception):
    """Raised when a template tree cannot be built, parsed, or written."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class UnsupportedEntryError(TemplateStructureError):
    """Raised for entries the serializer deliberately does not handle."""


# ---------------------------------------------------------------------------
# Scan options
# ---------------------------------------------------------------------------

DEFAULT_IGNORE_FILES: list[str] = [
    "package-lock.json",
    "yarn.lock",
    ".DS_Store",
    "thumbs.db",
    ".gitignore",
    ".npmrc",
    ".yarnrc",
    ".env",
    ".env.local",
    ".env.development",
    ".env.production",
    ".env.test",
]

DEFAULT_IGNORE_FOLDERS: list[str] = [
    "node_modules",
    ".git",
    ".vscode",
    ".idea",
    "dist",
    "build",
    "coverage",
    ".next",
]

DEFAULT_MAX_FILE_SIZE = 1024 * 1024


class ScanOptions(BaseModel):
    """What to leave out when walking a template directory."""

    ignore_files: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE_FILES))
    ignore_folders: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE_FOLDERS))
    ignore_patterns: list[str] = Field(
        default_factory=list, description="fnmatch-style patterns matched against entry names"
    )
    max_file_size: int = Field(
        default=DEFAULT_MAX_FILE_SIZE, ge=0, description="Files larger than this (bytes) are skipped"
    )

    def skips_file(self, name: str) -> bool:
        return name in self.ignore_files or self._matches_pattern(name)

    def skips_folder(self, name: str) -> bool:
        return name in self.ignore_folders or self._matches_pattern(name)

    def _matches_pattern(self, name: str) -> bool:
        return any(fnmatch.fnmatch(name, pattern) for pattern in self.ignore_patterns)


# ---------------------------------------------------------------------------
# Directory -> tree
# ---------------------------------------------------------------------------


def scan_template_directory(
    path: str | Path,
    options: ScanOptions | None = None,
) -> TemplateFolder:
    """Walk *path* recursively and return it as a ``TemplateFolder``.

    The root folder is named after the directory itself.

    Raises:
        TemplateStructureError: If *path* is not a directory.
        UnsupportedEntryError: On symlinks, special files, or binary files.
        OSError: If any entry cannot be listed or read.
    """
    root = Path(path)
    if not root.is_dir():
        raise TemplateStructureError(f"Template directory not found: {root}", root)
    return _scan_folder(root, options or ScanOptions())


def _scan_folder(folder: Path, options: ScanOptions) -> TemplateFolder:
    items: list[TemplateFile | TemplateFolder] = []

    for entry in sorted(folder.iterdir(), key=lambda p: p.name):
        if entry.is_symlink():
            raise UnsupportedEntryError(f"Symbolic links are not supported: {entry}", entry)

        if entry.is_dir():
            if options.skips_folder(entry.name):
                continue
            items.append(_scan_folder(entry, options))
        elif entry.is_file():
            if options.skips_file(entry.name):
                continue
            size = entry.stat().st_size
            if size > options.max_file_size:
                logger.warning(
                    "Skipping %s: %d bytes exceeds the %d byte limit",
                    entry, size, options.max_file_size,
                )
                continue
            items.append(TemplateFile.from_name(entry.name, _read_text(entry)))
        else:
            raise UnsupportedEntryError(f"Not a regular file or directory: {entry}", entry)

    return TemplateFolder(folder_name=folder.name, items=items)


def _read_text(path: Path) -> str:
    # Bytes are decoded directly so line endings survive untouched.
    raw = path.read_bytes()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise UnsupportedEntryError(f"Binary or non-UTF-8 file is not supported: {path}", path) from exc


# ---------------------------------------------------------------------------
# Tree <-> JSON file
# ---------------------------------------------------------------------------


def _save_structure(source_dir: Path, output_file: Path, options: ScanOptions | None) -> TemplateFolder:
    tree = scan_template_directory(source_dir, options)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(tree.to_json(), encoding="utf-8")
    return tree


async def save_template_structure_to_json(
    source_dir: str | Path,
    output_file: str | Path,
    options: ScanOptions | None = None,
) -> TemplateFolder:
    """Scan *source_dir* and write the tree as JSON to *output_file*.

    The walk and write run in a worker thread.  Parent directories of
    *output_file* are created as needed.

    Returns:
        The tree that was written.
    """
    tree = await asyncio.to_thread(
        _save_structure, Path(source_dir), Path(output_file), options
    )
    folders, files = tree.count()
    logger.debug("Saved %s (%d folders, %d files) to %s", source_dir, folders, files, output_file)
    return tree


def parse_template_structure(raw: str | bytes, source: str | Path | None = None) -> TemplateFolder:
    """Parse a JSON document into a ``TemplateFolder``.

    Raises:
        TemplateStructureError: If the text is not JSON or not a folder tree.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise TemplateStructureError(f"Invalid JSON in template structure: {exc}", source) from exc

    if not isinstance(data, dict) or "items" not in data:
        raise TemplateStructureError("Template structure root must be a folder", source)

    try:
        return TemplateFolder.model_validate(data)
    except ValidationError as exc:
        raise TemplateStructureError(
            f"Template structure does not match the folder/file shape: {exc.error_count()} error(s)",
            source,
        ) from exc


def load_template_structure(path: str | Path) -> TemplateFolder:
    """Synchronous counterpart of ``read_template_structure_from_json``."""
    file_path = Path(path)
    return parse_template_structure(file_path.read_text(encoding="utf-8"), file_path)


async def read_template_structure_from_json(path: str | Path) -> TemplateFolder:
    """Read a JSON file written by ``save_template_structure_to_json``."""
    return await asyncio.to_thread(load_template_structure, path)


# ---------------------------------------------------------------------------
# Tree -> directory
# ---------------------------------------------------------------------------


def write_template_structure(folder: TemplateFolder, target_dir: str | Path) -> list[Path]:
    """Materialize *folder*'s children as files and directories in *target_dir*.

    The root folder's own name is not used; its items land directly in
    *target_dir*, which is created if missing.

    Returns:
        Every file path written, in tree order.
    """
    target = Path(target_dir)
    target.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    _write_folder(folder, target, written)
    return written


def _write_folder(folder: TemplateFolder, target: Path, written: list[Path]) -> None:
    seen: set[str] = set()
    for item in folder.items:
        name = item.folder_name if isinstance(item, TemplateFolder) else item.full_name
        _check_segment(name, target)
        if name in seen:
            raise UnsupportedEntryError(f"Duplicate entry name '{name}' in {target}", target / name)
        seen.add(name)

        destination = target / name
        if isinstance(item, TemplateFolder):
            destination.mkdir(exist_ok=True)
            _write_folder(item, destination, written)
        else:
            destination.write_bytes(item.content.encode("utf-8"))
            written.append(destination)


def _check_segment(name: str, parent: Path) -> None:
    if name in ("", ".", "..") or "/" in name or "\\" in name:
        raise UnsupportedEntryError(f"Invalid entry name '{name}' in {parent}", parent)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def is_json_serializable(data: Any) -> bool:
    """Return ``True`` if *data* survives a JSON dump/load round trip."""
    try:
        json.loads(json.dumps(data))
    except (TypeError, ValueError) as exc:
        logger.error("Invalid JSON structure: %s", exc)
        return False
    return True
