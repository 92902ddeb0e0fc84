"""Template file trees: the folder/file model and its serializer.

Key names:
    TemplateFile / TemplateFolder     - tree nodes
    scan_template_directory           - directory -> tree
    save_template_structure_to_json   - directory -> JSON file
    read_template_structure_from_json - JSON file -> tree
    write_template_structure          - tree -> directory
"""

from .models import TemplateFile, TemplateFolder, TemplateItem
from .serializer import (
    ScanOptions,
    TemplateStructureError,
    UnsupportedEntryError,
    is_json_serializable,
    load_template_structure,
    parse_template_structure,
    read_template_structure_from_json,
    save_template_structure_to_json,
    scan_template_directory,
    write_template_structure,
)

__all__ = [
    # Models
    "TemplateFile",
    "TemplateFolder",
    "TemplateItem",
    # Serializer
    "ScanOptions",
    "TemplateStructureError",
    "UnsupportedEntryError",
    "is_json_serializable",
    "load_template_structure",
    "parse_template_structure",
    "read_template_structure_from_json",
    "save_template_structure_to_json",
    "scan_template_directory",
    "write_template_structure",
]
