"""REST routes for playground records and the template catalog."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from codeplay.playgrounds import (
    FailureReason,
    PlaygroundActions,
    PlaygroundCreate,
    PlaygroundUpdate,
    User,
)
from codeplay.templates import TemplateCategory, list_templates
from codeplay.tree import TemplateFolder

from .deps import get_actions, get_current_user

router = APIRouter(prefix="/api", tags=["playgrounds"])

_STATUS_BY_REASON: dict[FailureReason, int] = {
    FailureReason.UNAUTHENTICATED: 401,
    FailureReason.INVALID: 400,
    FailureReason.NOT_FOUND: 404,
    FailureReason.ERROR: 500,
}


def _respond(result: BaseModel, success_status: int = 200) -> JSONResponse:
    """Render an action result, choosing the status from its ``reason``."""
    body = result.model_dump(mode="json", exclude_none=True)
    if getattr(result, "success", False):
        return JSONResponse(status_code=success_status, content=body)
    reason: Optional[FailureReason] = getattr(result, "reason", None)
    return JSONResponse(status_code=_STATUS_BY_REASON.get(reason, 500), content=body)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


@router.get("/templates")
async def get_templates(category: Optional[TemplateCategory] = None) -> list[dict]:
    """List the templates a playground can be created from."""
    return [info.model_dump(mode="json") for info in list_templates(category)]


# ---------------------------------------------------------------------------
# Playgrounds
# ---------------------------------------------------------------------------


@router.post("/playgrounds")
async def create_playground(
    data: PlaygroundCreate,
    user: Optional[User] = Depends(get_current_user),
    actions: PlaygroundActions = Depends(get_actions),
) -> JSONResponse:
    return _respond(await actions.create_playground(user, data), success_status=201)


@router.get("/playgrounds")
async def list_playgrounds(
    user: Optional[User] = Depends(get_current_user),
    actions: PlaygroundActions = Depends(get_actions),
) -> JSONResponse:
    return _respond(await actions.get_playgrounds_for_user(user))


@router.get("/playgrounds/{playground_id}")
async def get_playground(
    playground_id: str,
    actions: PlaygroundActions = Depends(get_actions),
) -> dict:
    detail = await actions.get_playground_by_id(playground_id)
    if detail is None:
        raise HTTPException(status_code=404, detail="Playground not found")
    return detail.model_dump(mode="json")


@router.patch("/playgrounds/{playground_id}")
async def edit_playground(
    playground_id: str,
    data: PlaygroundUpdate,
    user: Optional[User] = Depends(get_current_user),
    actions: PlaygroundActions = Depends(get_actions),
) -> JSONResponse:
    return _respond(await actions.edit_project_by_id(user, playground_id, data))


@router.post("/playgrounds/{playground_id}/duplicate")
async def duplicate_playground(
    playground_id: str,
    user: Optional[User] = Depends(get_current_user),
    actions: PlaygroundActions = Depends(get_actions),
) -> JSONResponse:
    return _respond(await actions.duplicate_project_by_id(user, playground_id), success_status=201)


@router.delete("/playgrounds/{playground_id}")
async def delete_playground(
    playground_id: str,
    user: Optional[User] = Depends(get_current_user),
    actions: PlaygroundActions = Depends(get_actions),
) -> JSONResponse:
    return _respond(await actions.delete_project_by_id(user, playground_id))


@router.post("/playgrounds/{playground_id}/star")
async def toggle_star(
    playground_id: str,
    user: Optional[User] = Depends(get_current_user),
    actions: PlaygroundActions = Depends(get_actions),
) -> JSONResponse:
    return _respond(await actions.toggle_favorite(user, playground_id))


@router.put("/playgrounds/{playground_id}/code")
async def save_code(
    playground_id: str,
    data: TemplateFolder,
    user: Optional[User] = Depends(get_current_user),
    actions: PlaygroundActions = Depends(get_actions),
) -> JSONResponse:
    return _respond(await actions.save_updated_code(user, playground_id, data))
