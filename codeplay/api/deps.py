"""FastAPI dependencies resolving per-app services from ``app.state``."""

from __future__ import annotations

from fastapi import Request

from codeplay.auth import principal_from_headers
from codeplay.config import Config
from codeplay.playgrounds import PlaygroundActions, PlaygroundStore, User


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_store(request: Request) -> PlaygroundStore:
    return request.app.state.store


def get_actions(request: Request) -> PlaygroundActions:
    return request.app.state.actions


def get_current_user(request: Request) -> User | None:
    """The signed-in user forwarded by the auth proxy, or ``None``."""
    return principal_from_headers(request.headers)
