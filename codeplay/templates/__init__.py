"""Starter template registry and the bundled starter files.

The starter directories live in ``codeplay/templates/starters/``; the
registry maps each ``TemplateId`` to one of them.
"""

from pathlib import Path

from .registry import (
    TEMPLATE_PATHS,
    TemplateCategory,
    TemplateId,
    TemplateInfo,
    get_template_info,
    list_templates,
    parse_template_id,
    resolve_template_path,
)

DEFAULT_TEMPLATES_ROOT = Path(__file__).parent / "starters"

__all__ = [
    "DEFAULT_TEMPLATES_ROOT",
    "TEMPLATE_PATHS",
    "TemplateCategory",
    "TemplateId",
    "TemplateInfo",
    "get_template_info",
    "list_templates",
    "parse_template_id",
    "resolve_template_path",
]
