"""Playground records: models, persistence, and ownership-checked actions.

Key classes:
    PlaygroundActions       - create/list/edit/duplicate/delete/star/save
    PlaygroundStore         - async persistence interface
    InMemoryPlaygroundStore - dictionary-backed store
    JsonPlaygroundStore     - store persisted to a single JSON file
"""

from .actions import PlaygroundActions
from .models import (
    FailureReason,
    Playground,
    PlaygroundCreate,
    PlaygroundDetail,
    PlaygroundListResult,
    PlaygroundResult,
    PlaygroundSummary,
    PlaygroundUpdate,
    SaveCodeResult,
    StarMark,
    TemplateFileRecord,
    ToggleFavoriteResult,
    User,
    UserRole,
)
from .store import (
    InMemoryPlaygroundStore,
    JsonPlaygroundStore,
    PlaygroundStore,
    StoreError,
    StoreSnapshot,
)

__all__ = [
    # Actions
    "PlaygroundActions",
    # Models
    "FailureReason",
    "Playground",
    "PlaygroundCreate",
    "PlaygroundDetail",
    "PlaygroundListResult",
    "PlaygroundResult",
    "PlaygroundSummary",
    "PlaygroundUpdate",
    "SaveCodeResult",
    "StarMark",
    "TemplateFileRecord",
    "ToggleFavoriteResult",
    "User",
    "UserRole",
    # Stores
    "InMemoryPlaygroundStore",
    "JsonPlaygroundStore",
    "PlaygroundStore",
    "StoreError",
    "StoreSnapshot",
]
