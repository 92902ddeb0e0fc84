"""HTTP boundary: the FastAPI app, template endpoint, and playground routes."""

from .app import build_store, create_app
from .errors import TemplateApiError
from .template_routes import generate_template_json

__all__ = [
    "TemplateApiError",
    "build_store",
    "create_app",
    "generate_template_json",
]
