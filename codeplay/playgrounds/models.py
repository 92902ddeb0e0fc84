"""Pydantic v2 models for playground records and action results."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field

from codeplay.templates import TemplateId

MAX_TITLE_LENGTH = 100


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

class UserRole(str, Enum):
    """Role assigned by the auth provider."""
    USER = "USER"
    ADMIN = "ADMIN"
    PREMIUM_USER = "PREMIUM_USER"


class User(BaseModel):
    """An authenticated principal, as known to the store."""
    id: str = Field(..., min_length=1)
    name: str = Field(default="Anonymous User")
    email: str = Field(default="")
    image: Optional[str] = Field(default=None)
    role: UserRole = Field(default=UserRole.USER)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)


class Playground(BaseModel):
    """A user-owned project created from a template."""
    id: str = Field(default_factory=_new_id)
    title: str = Field(...)
    description: str = Field(default="")
    # Records written before a template was retired keep the raw id; the
    # template endpoint answers INVALID_TEMPLATE for those.
    template: Union[TemplateId, str] = Field(default=TemplateId.REACTJS, union_mode="left_to_right")
    user_id: str = Field(...)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)


class StarMark(BaseModel):
    """A user's star on a playground; at most one per (user, playground)."""
    user_id: str
    playground_id: str
    is_marked: bool = True


class TemplateFileRecord(BaseModel):
    """The edited file tree of a playground, stored as a JSON string."""
    playground_id: str
    filename: str = Field(default="template")
    content: str = Field(default="")
    updated_at: datetime = Field(default_factory=_now)


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

class PlaygroundCreate(BaseModel):
    title: str = Field(default="")
    description: Optional[str] = Field(default=None)
    template: TemplateId = Field(default=TemplateId.REACTJS)


class PlaygroundUpdate(BaseModel):
    title: str = Field(default="")
    description: Optional[str] = Field(default=None)


# ---------------------------------------------------------------------------
# Action results
# ---------------------------------------------------------------------------

class FailureReason(str, Enum):
    """Why an action failed; the HTTP layer maps these to status codes."""
    UNAUTHENTICATED = "unauthenticated"
    INVALID = "invalid"
    NOT_FOUND = "not_found"
    ERROR = "error"


class PlaygroundSummary(Playground):
    """A playground as listed on the dashboard."""
    is_bookmarked_by_user: bool = False


class PlaygroundResult(BaseModel):
    success: bool
    playground: Optional[Playground] = None
    error: Optional[str] = None
    reason: Optional[FailureReason] = None


class PlaygroundListResult(BaseModel):
    success: bool
    playgrounds: list[PlaygroundSummary] = Field(default_factory=list)
    error: Optional[str] = None
    reason: Optional[FailureReason] = None


class ToggleFavoriteResult(BaseModel):
    success: bool
    is_marked: bool = False
    error: Optional[str] = None
    reason: Optional[FailureReason] = None


class SaveCodeResult(BaseModel):
    success: bool
    template_file: Optional[TemplateFileRecord] = None
    error: Optional[str] = None
    reason: Optional[FailureReason] = None


class PlaygroundDetail(BaseModel):
    """A playground together with its saved file tree, if any."""
    playground: Playground
    template_file: Optional[TemplateFileRecord] = None
