"""Pydantic v2 models for a template's file tree.

A tree is made of two node kinds: ``TemplateFile`` leaves holding raw text,
and ``TemplateFolder`` nodes holding an ordered list of children.  The wire
format uses camelCase keys (``folderName``, ``fileExtension``); a node with an
``items`` key is a folder, anything else is a file.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag


# ---------------------------------------------------------------------------
# Leaf
# ---------------------------------------------------------------------------


class TemplateFile(BaseModel):
    """A single text file inside a template tree."""

    model_config = ConfigDict(populate_by_name=True)

    filename: str = Field(..., description="File name without its extension")
    file_extension: str = Field(
        default="", alias="fileExtension", description="Extension without the dot"
    )
    content: str = Field(default="", description="Raw UTF-8 text content")

    @property
    def full_name(self) -> str:
        """The on-disk name, e.g. ``App.tsx``."""
        if self.file_extension:
            return f"{self.filename}.{self.file_extension}"
        return self.filename

    @classmethod
    def from_name(cls, name: str, content: str = "") -> "TemplateFile":
        """Split an on-disk name into stem and extension.

        Dotfiles keep their full name as the stem: ``.env`` has no extension.
        """
        stem, dot, ext = name.rpartition(".")
        if not dot or not stem or not ext:
            return cls(filename=name, file_extension="", content=content)
        return cls(filename=stem, file_extension=ext, content=content)


# ---------------------------------------------------------------------------
# Folder + tagged union
# ---------------------------------------------------------------------------


def _node_kind(value: Any) -> str:
    if isinstance(value, dict):
        return "folder" if "items" in value else "file"
    return "folder" if isinstance(value, TemplateFolder) else "file"


TemplateItem = Annotated[
    Union[
        Annotated[TemplateFile, Tag("file")],
        Annotated["TemplateFolder", Tag("folder")],
    ],
    Discriminator(_node_kind),
]


class TemplateFolder(BaseModel):
    """A folder node; ``items`` order mirrors the order the tree was built in."""

    model_config = ConfigDict(populate_by_name=True)

    folder_name: str = Field(..., alias="folderName", description="Folder display name")
    items: list[TemplateItem] = Field(default_factory=list, description="Child nodes")

    # -- Traversal ---------------------------------------------------------

    def iter_files(self, prefix: str = "") -> Iterator[tuple[str, TemplateFile]]:
        """Yield ``(relative_path, file)`` for every file below this folder.

        Paths are relative to this folder and use ``/`` separators.
        """
        for item in self.items:
            if isinstance(item, TemplateFolder):
                yield from item.iter_files(f"{prefix}{item.folder_name}/")
            else:
                yield f"{prefix}{item.full_name}", item

    def file_map(self) -> dict[str, str]:
        """Return ``{relative_path: content}`` for every file in the tree."""
        return {path: node.content for path, node in self.iter_files()}

    def count(self) -> tuple[int, int]:
        """Return ``(folders, files)`` below this folder (the root excluded)."""
        folders = files = 0
        for item in self.items:
            if isinstance(item, TemplateFolder):
                sub_folders, sub_files = item.count()
                folders += 1 + sub_folders
                files += sub_files
            else:
                files += 1
        return folders, files

    # -- Serialisation -----------------------------------------------------

    def to_wire(self) -> dict[str, Any]:
        """Dump to the camelCase wire format."""
        return self.model_dump(by_alias=True)

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)


TemplateFolder.model_rebuild()
