"""Persistence for playground records.

``PlaygroundStore`` is the interface the actions are written against.  Two
implementations ship with the package: ``InMemoryPlaygroundStore`` for tests
and throwaway servers, and ``JsonPlaygroundStore``, which keeps the same
in-memory tables and rewrites a single JSON file after every mutation.

Stores return copies of their records, so callers may mutate what they get
back without affecting stored state.
"""

from __future__ import annotations

import abc
import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from codeplay.utils import save_json

from .models import Playground, StarMark, TemplateFileRecord, User

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the backing store cannot be read or written."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


# ---------------------------------------------------------------------------
# Interface
# ---------------------------------------------------------------------------


class PlaygroundStore(abc.ABC):
    """Async CRUD over users, playgrounds, star marks and template files."""

    # -- Users -------------------------------------------------------------

    @abc.abstractmethod
    async def upsert_user(self, user: User) -> User:
        """Insert *user* if its id is unknown; existing users are left as they are."""

    @abc.abstractmethod
    async def get_user(self, user_id: str) -> User | None: ...

    # -- Playgrounds -------------------------------------------------------

    @abc.abstractmethod
    async def create_playground(self, playground: Playground) -> Playground: ...

    @abc.abstractmethod
    async def get_playground(self, playground_id: str) -> Playground | None: ...

    @abc.abstractmethod
    async def find_owned_playground(self, playground_id: str, user_id: str) -> Playground | None:
        """Return the playground only if *user_id* owns it."""

    @abc.abstractmethod
    async def list_playgrounds(self, user_id: str) -> list[Playground]:
        """All playgrounds owned by *user_id*, most recently updated first."""

    @abc.abstractmethod
    async def update_playground(self, playground_id: str, **fields: Any) -> Playground | None: ...

    @abc.abstractmethod
    async def delete_playground(self, playground_id: str) -> bool:
        """Delete a playground with its star marks and template file."""

    # -- Star marks --------------------------------------------------------

    @abc.abstractmethod
    async def get_star_mark(self, user_id: str, playground_id: str) -> StarMark | None: ...

    @abc.abstractmethod
    async def set_star_mark(self, user_id: str, playground_id: str, is_marked: bool = True) -> StarMark: ...

    @abc.abstractmethod
    async def delete_star_marks(self, user_id: str, playground_id: str) -> int: ...

    # -- Template files ----------------------------------------------------

    @abc.abstractmethod
    async def get_template_file(self, playground_id: str) -> TemplateFileRecord | None: ...

    @abc.abstractmethod
    async def upsert_template_file(self, playground_id: str, content: str) -> TemplateFileRecord: ...


# ---------------------------------------------------------------------------
# In-memory implementation
# ---------------------------------------------------------------------------


class StoreSnapshot(BaseModel):
    """Serialisable image of every table in a store."""

    users: list[User] = Field(default_factory=list)
    playgrounds: list[Playground] = Field(default_factory=list)
    star_marks: list[StarMark] = Field(default_factory=list)
    template_files: list[TemplateFileRecord] = Field(default_factory=list)


class InMemoryPlaygroundStore(PlaygroundStore):
    """Dictionary-backed store; state lives as long as the instance."""

    def __init__(self, snapshot: StoreSnapshot | None = None) -> None:
        self._users: dict[str, User] = {}
        self._playgrounds: dict[str, Playground] = {}
        self._star_marks: dict[tuple[str, str], StarMark] = {}
        self._template_files: dict[str, TemplateFileRecord] = {}
        if snapshot is not None:
            self._restore(snapshot)

    def _restore(self, snapshot: StoreSnapshot) -> None:
        self._users = {u.id: u for u in snapshot.users}
        self._playgrounds = {p.id: p for p in snapshot.playgrounds}
        self._star_marks = {(s.user_id, s.playground_id): s for s in snapshot.star_marks}
        self._template_files = {t.playground_id: t for t in snapshot.template_files}

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            users=list(self._users.values()),
            playgrounds=list(self._playgrounds.values()),
            star_marks=list(self._star_marks.values()),
            template_files=list(self._template_files.values()),
        )

    async def _changed(self) -> None:
        """Hook called after every mutation."""

    # -- Users -------------------------------------------------------------

    async def upsert_user(self, user: User) -> User:
        existing = self._users.get(user.id)
        if existing is not None:
            return existing.model_copy()
        self._users[user.id] = user.model_copy()
        await self._changed()
        return user.model_copy()

    async def get_user(self, user_id: str) -> User | None:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    # -- Playgrounds -------------------------------------------------------

    async def create_playground(self, playground: Playground) -> Playground:
        if playground.id in self._playgrounds:
            raise StoreError(f"Playground {playground.id} already exists")
        self._playgrounds[playground.id] = playground.model_copy()
        await self._changed()
        return playground.model_copy()

    async def get_playground(self, playground_id: str) -> Playground | None:
        playground = self._playgrounds.get(playground_id)
        return playground.model_copy() if playground else None

    async def find_owned_playground(self, playground_id: str, user_id: str) -> Playground | None:
        playground = self._playgrounds.get(playground_id)
        if playground is None or playground.user_id != user_id:
            return None
        return playground.model_copy()

    async def list_playgrounds(self, user_id: str) -> list[Playground]:
        owned = [p for p in self._playgrounds.values() if p.user_id == user_id]
        owned.sort(key=lambda p: p.updated_at, reverse=True)
        return [p.model_copy() for p in owned]

    async def update_playground(self, playground_id: str, **fields: Any) -> Playground | None:
        playground = self._playgrounds.get(playground_id)
        if playground is None:
            return None
        updated = playground.model_copy(
            update={**fields, "updated_at": datetime.now(timezone.utc)}
        )
        self._playgrounds[playground_id] = updated
        await self._changed()
        return updated.model_copy()

    async def delete_playground(self, playground_id: str) -> bool:
        if self._playgrounds.pop(playground_id, None) is None:
            return False
        self._star_marks = {
            key: mark for key, mark in self._star_marks.items() if key[1] != playground_id
        }
        self._template_files.pop(playground_id, None)
        await self._changed()
        return True

    # -- Star marks --------------------------------------------------------

    async def get_star_mark(self, user_id: str, playground_id: str) -> StarMark | None:
        mark = self._star_marks.get((user_id, playground_id))
        return mark.model_copy() if mark else None

    async def set_star_mark(self, user_id: str, playground_id: str, is_marked: bool = True) -> StarMark:
        mark = StarMark(user_id=user_id, playground_id=playground_id, is_marked=is_marked)
        self._star_marks[(user_id, playground_id)] = mark
        await self._changed()
        return mark.model_copy()

    async def delete_star_marks(self, user_id: str, playground_id: str) -> int:
        removed = 1 if self._star_marks.pop((user_id, playground_id), None) else 0
        if removed:
            await self._changed()
        return removed

    # -- Template files ----------------------------------------------------

    async def get_template_file(self, playground_id: str) -> TemplateFileRecord | None:
        record = self._template_files.get(playground_id)
        return record.model_copy() if record else None

    async def upsert_template_file(self, playground_id: str, content: str) -> TemplateFileRecord:
        existing = self._template_files.get(playground_id)
        if existing is None:
            record = TemplateFileRecord(playground_id=playground_id, content=content)
        else:
            record = existing.model_copy(
                update={"content": content, "updated_at": datetime.now(timezone.utc)}
            )
        self._template_files[playground_id] = record
        await self._changed()
        return record.model_copy()


# ---------------------------------------------------------------------------
# JSON-file implementation
# ---------------------------------------------------------------------------


class JsonPlaygroundStore(InMemoryPlaygroundStore):
    """In-memory store that persists every change to one JSON file.

    The file is read once at construction.  A missing file starts an empty
    store; an unreadable one raises ``StoreError``.  Writes are serialised
    with a lock and each one atomically replaces the file with the state at
    the time the lock was taken.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._write_lock = asyncio.Lock()
        super().__init__(self._read_snapshot())

    def _read_snapshot(self) -> StoreSnapshot | None:
        if not self.path.exists():
            return None
        try:
            return StoreSnapshot.model_validate_json(self.path.read_text(encoding="utf-8"))
        except ValueError as exc:
            raise StoreError(f"Corrupted playground store: {self.path}", self.path) from exc

    async def _changed(self) -> None:
        async with self._write_lock:
            await save_json(self.snapshot().model_dump(mode="json"), self.path)
        logger.debug("Persisted playground store to %s", self.path)
