"""Static registry of starter templates.

Maps each ``TemplateId`` to the directory holding that template's starter
files (relative to the configured templates root) and to the catalog entry
shown in the template picker.  Both tables are read-only.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class TemplateId(str, Enum):
    """Project kinds a playground can be created from."""
    REACTJS = "REACTJS"
    NEXTJS = "NEXTJS"
    EXPRESS = "EXPRESS"
    VUE = "VUE"
    HONO = "HONO"
    ANGULAR = "ANGULAR"


class TemplateCategory(str, Enum):
    """Picker tab a template is listed under."""
    FRONTEND = "frontend"
    BACKEND = "backend"
    FULLSTACK = "fullstack"


# ---------------------------------------------------------------------------
# Path table
# ---------------------------------------------------------------------------

TEMPLATE_PATHS: Mapping[TemplateId, str] = MappingProxyType({
    TemplateId.REACTJS: "react-ts",
    TemplateId.NEXTJS: "nextjs-new",
    TemplateId.EXPRESS: "express-simple",
    TemplateId.VUE: "vue",
    TemplateId.HONO: "hono-nodejs-starter",
    TemplateId.ANGULAR: "angular",
})


def parse_template_id(value: str | TemplateId | None) -> TemplateId | None:
    """Return the ``TemplateId`` for *value*, or ``None`` if unrecognized.

    Lookup is case-insensitive so picker ids like ``"reactjs"`` resolve too.
    """
    if value is None:
        return None
    if isinstance(value, TemplateId):
        return value
    try:
        return TemplateId(value.strip().upper())
    except ValueError:
        return None


def resolve_template_path(
    template: str | TemplateId | None,
    templates_root: str | Path,
) -> Path | None:
    """Return the starter directory for *template*, or ``None`` if unknown."""
    template_id = parse_template_id(template)
    if template_id is None:
        return None
    relative = TEMPLATE_PATHS.get(template_id)
    if relative is None:
        return None
    return Path(templates_root) / relative


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class TemplateInfo(BaseModel):
    """A template as presented in the picker."""
    id: TemplateId = Field(..., description="Registry key")
    name: str = Field(..., description="Display name")
    description: str = Field(default="")
    category: TemplateCategory = Field(...)
    popularity: int = Field(default=3, ge=1, le=5)
    tags: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)


_CATALOG: Mapping[TemplateId, TemplateInfo] = MappingProxyType({
    info.id: info
    for info in (
        TemplateInfo(
            id=TemplateId.REACTJS,
            name="React",
            description="A JavaScript library for building user interfaces with component-based architecture",
            category=TemplateCategory.FRONTEND,
            popularity=5,
            tags=["UI", "Frontend", "JavaScript"],
            features=["Component-Based", "Virtual DOM", "JSX Support"],
        ),
        TemplateInfo(
            id=TemplateId.NEXTJS,
            name="Next.js",
            description="The React framework for production with server-side rendering and static site generation",
            category=TemplateCategory.FULLSTACK,
            popularity=4,
            tags=["React", "SSR", "Fullstack"],
            features=["Server Components", "API Routes", "File-based Routing"],
        ),
        TemplateInfo(
            id=TemplateId.EXPRESS,
            name="Express",
            description="Fast, unopinionated, minimalist web framework for Node.js to build APIs and web applications",
            category=TemplateCategory.BACKEND,
            popularity=4,
            tags=["Node.js", "API", "Backend"],
            features=["Middleware", "Routing", "HTTP Utilities"],
        ),
        TemplateInfo(
            id=TemplateId.VUE,
            name="Vue.js",
            description="Progressive JavaScript framework for building user interfaces with an approachable learning curve",
            category=TemplateCategory.FRONTEND,
            popularity=4,
            tags=["UI", "Frontend", "JavaScript"],
            features=["Reactive Data Binding", "Component System", "Virtual DOM"],
        ),
        TemplateInfo(
            id=TemplateId.HONO,
            name="Hono",
            description="Fast, lightweight, built on Web Standards. Support for any JavaScript runtime.",
            category=TemplateCategory.BACKEND,
            popularity=3,
            tags=["Node.js", "TypeScript", "Backend"],
            features=["Dependency Injection", "TypeScript Support", "Modular Architecture"],
        ),
        TemplateInfo(
            id=TemplateId.ANGULAR,
            name="Angular",
            description="Angular is a web framework that empowers developers to build fast, reliable applications.",
            category=TemplateCategory.FULLSTACK,
            popularity=3,
            tags=["TypeScript", "Fullstack", "Enterprise"],
            features=["Reactive Data Binding", "Component System", "Dependency Injection", "TypeScript Support"],
        ),
    )
})


def list_templates(category: TemplateCategory | str | None = None) -> list[TemplateInfo]:
    """Return catalog entries, optionally filtered to one category."""
    entries = list(_CATALOG.values())
    if category is None:
        return entries
    wanted = TemplateCategory(category)
    return [info for info in entries if info.category is wanted]


def get_template_info(template: str | TemplateId | None) -> TemplateInfo | None:
    template_id = parse_template_id(template)
    if template_id is None:
        return None
    return _CATALOG.get(template_id)
