"""Ownership-checked playground operations.

Every action takes the current principal (``None`` when anonymous) and
returns a result model instead of raising: missing auth, validation problems,
ownership failures and store errors all come back as ``success=False`` with
an ``error`` message and a ``reason`` the HTTP layer can map to a status.
"""

from __future__ import annotations

import logging

from codeplay.tree.models import TemplateFolder

from .models import (
    MAX_TITLE_LENGTH,
    FailureReason,
    Playground,
    PlaygroundCreate,
    PlaygroundDetail,
    PlaygroundListResult,
    PlaygroundResult,
    PlaygroundSummary,
    PlaygroundUpdate,
    SaveCodeResult,
    ToggleFavoriteResult,
    User,
)
from .store import PlaygroundStore

logger = logging.getLogger(__name__)


def _validate_title(title: str | None) -> str | None:
    """Return an error message for *title*, or ``None`` if it is acceptable."""
    if not title or not title.strip():
        return "Title is required"
    if len(title) > MAX_TITLE_LENGTH:
        return f"Title must be less than {MAX_TITLE_LENGTH} characters"
    return None


def _signed_in(user: User | None) -> bool:
    return user is not None and bool(user.id)


class PlaygroundActions:
    """Server-side operations behind the dashboard and editor."""

    def __init__(self, store: PlaygroundStore) -> None:
        self.store = store

    # ------------------------------------------------------------------
    # Create / list
    # ------------------------------------------------------------------

    async def create_playground(self, user: User | None, data: PlaygroundCreate) -> PlaygroundResult:
        title_error = _validate_title(data.title)
        if title_error:
            return PlaygroundResult(success=False, error=title_error, reason=FailureReason.INVALID)

        if not _signed_in(user):
            return PlaygroundResult(
                success=False,
                error="You must be logged in to create a playground",
                reason=FailureReason.UNAUTHENTICATED,
            )

        try:
            owner = await self.store.upsert_user(user)
            playground = await self.store.create_playground(
                Playground(
                    title=data.title.strip(),
                    description=(data.description or "").strip(),
                    template=data.template,
                    user_id=owner.id,
                )
            )
        except Exception as exc:
            logger.exception("Error creating playground")
            return PlaygroundResult(
                success=False,
                error=f"Failed to create playground: {exc}",
                reason=FailureReason.ERROR,
            )

        logger.info("User %s created playground %s (%s)", owner.id, playground.id, data.template.value)
        return PlaygroundResult(success=True, playground=playground)

    async def get_playgrounds_for_user(self, user: User | None) -> PlaygroundListResult:
        if not _signed_in(user):
            return PlaygroundListResult(
                success=False,
                error="You must be logged in to get your playgrounds",
                reason=FailureReason.UNAUTHENTICATED,
            )

        try:
            playgrounds = await self.store.list_playgrounds(user.id)
            summaries: list[PlaygroundSummary] = []
            for playground in playgrounds:
                mark = await self.store.get_star_mark(user.id, playground.id)
                summaries.append(
                    PlaygroundSummary(
                        **playground.model_dump(),
                        is_bookmarked_by_user=bool(mark and mark.is_marked),
                    )
                )
        except Exception as exc:
            logger.exception("Error getting playgrounds")
            return PlaygroundListResult(
                success=False,
                error=f"Failed to get playgrounds: {exc}",
                reason=FailureReason.ERROR,
            )

        return PlaygroundListResult(success=True, playgrounds=summaries)

    async def get_playground_by_id(self, playground_id: str) -> PlaygroundDetail | None:
        """Fetch a playground with its saved file tree; ``None`` if missing or on error."""
        try:
            playground = await self.store.get_playground(playground_id)
            if playground is None:
                return None
            template_file = await self.store.get_template_file(playground_id)
        except Exception:
            logger.exception("Error fetching playground %s", playground_id)
            return None
        return PlaygroundDetail(playground=playground, template_file=template_file)

    # ------------------------------------------------------------------
    # Edit / duplicate / delete
    # ------------------------------------------------------------------

    async def edit_project_by_id(
        self, user: User | None, playground_id: str, data: PlaygroundUpdate
    ) -> PlaygroundResult:
        title_error = _validate_title(data.title)
        if title_error:
            return PlaygroundResult(success=False, error=title_error, reason=FailureReason.INVALID)

        if not _signed_in(user):
            return PlaygroundResult(
                success=False,
                error="You must be logged in to edit a playground",
                reason=FailureReason.UNAUTHENTICATED,
            )

        try:
            existing = await self.store.find_owned_playground(playground_id, user.id)
            if existing is None:
                return PlaygroundResult(
                    success=False,
                    error="You don't have access to edit this playground",
                    reason=FailureReason.NOT_FOUND,
                )
            fields = {"title": data.title.strip()}
            if data.description is not None:
                fields["description"] = data.description.strip()
            updated = await self.store.update_playground(playground_id, **fields)
        except Exception:
            logger.exception("Error editing playground %s", playground_id)
            return PlaygroundResult(
                success=False, error="Failed to edit playground", reason=FailureReason.ERROR
            )

        return PlaygroundResult(success=True, playground=updated)

    async def duplicate_project_by_id(self, user: User | None, playground_id: str) -> PlaygroundResult:
        if not _signed_in(user):
            return PlaygroundResult(
                success=False,
                error="You must be logged in to duplicate a playground",
                reason=FailureReason.UNAUTHENTICATED,
            )

        try:
            original = await self.store.find_owned_playground(playground_id, user.id)
            if original is None:
                return PlaygroundResult(
                    success=False,
                    error="You don't have access to duplicate this playground",
                    reason=FailureReason.NOT_FOUND,
                )
            duplicate = await self.store.create_playground(
                Playground(
                    title=f"{original.title} (copy)",
                    description=original.description,
                    template=original.template,
                    user_id=user.id,
                )
            )
        except Exception:
            logger.exception("Error duplicating playground %s", playground_id)
            return PlaygroundResult(
                success=False, error="Failed to duplicate playground", reason=FailureReason.ERROR
            )

        return PlaygroundResult(success=True, playground=duplicate)

    async def delete_project_by_id(self, user: User | None, playground_id: str) -> PlaygroundResult:
        if not _signed_in(user):
            return PlaygroundResult(
                success=False,
                error="You must be logged in to delete a playground",
                reason=FailureReason.UNAUTHENTICATED,
            )

        try:
            playground = await self.store.find_owned_playground(playground_id, user.id)
            if playground is None:
                return PlaygroundResult(
                    success=False,
                    error="Playground not found or you don't have permission to delete it",
                    reason=FailureReason.NOT_FOUND,
                )
            await self.store.delete_playground(playground_id)
        except Exception:
            logger.exception("Error deleting playground %s", playground_id)
            return PlaygroundResult(
                success=False, error="Failed to delete playground", reason=FailureReason.ERROR
            )

        logger.info("User %s deleted playground %s", user.id, playground_id)
        return PlaygroundResult(success=True)

    # ------------------------------------------------------------------
    # Stars
    # ------------------------------------------------------------------

    async def toggle_favorite(self, user: User | None, playground_id: str) -> ToggleFavoriteResult:
        if not _signed_in(user):
            return ToggleFavoriteResult(
                success=False,
                error="You must be logged in to toggle a playground star",
                reason=FailureReason.UNAUTHENTICATED,
            )

        try:
            if await self.store.find_owned_playground(playground_id, user.id) is None:
                return ToggleFavoriteResult(
                    success=False,
                    error="You don't have access to star this playground",
                    reason=FailureReason.NOT_FOUND,
                )
            existing = await self.store.get_star_mark(user.id, playground_id)
            new_state = not (existing is not None and existing.is_marked)
            if new_state:
                await self.store.set_star_mark(user.id, playground_id, True)
            else:
                await self.store.delete_star_marks(user.id, playground_id)
        except Exception as exc:
            logger.exception("Error toggling favorite on %s", playground_id)
            return ToggleFavoriteResult(
                success=False,
                error=f"Failed to toggle favorite: {exc}",
                reason=FailureReason.ERROR,
            )

        return ToggleFavoriteResult(success=True, is_marked=new_state)

    # ------------------------------------------------------------------
    # Editor
    # ------------------------------------------------------------------

    async def save_updated_code(
        self, user: User | None, playground_id: str, data: TemplateFolder
    ) -> SaveCodeResult:
        """Store the edited tree as the playground's template file."""
        if not _signed_in(user):
            return SaveCodeResult(
                success=False,
                error="You must be logged in to save a playground",
                reason=FailureReason.UNAUTHENTICATED,
            )

        try:
            if await self.store.find_owned_playground(playground_id, user.id) is None:
                return SaveCodeResult(
                    success=False,
                    error="You don't have access to save this playground",
                    reason=FailureReason.NOT_FOUND,
                )
            record = await self.store.upsert_template_file(
                playground_id, data.to_json(indent=None)
            )
            await self.store.update_playground(playground_id)
        except Exception as exc:
            logger.exception("Error saving playground %s", playground_id)
            return SaveCodeResult(
                success=False,
                error=f"Failed to save playground: {exc}",
                reason=FailureReason.ERROR,
            )

        return SaveCodeResult(success=True, template_file=record)
