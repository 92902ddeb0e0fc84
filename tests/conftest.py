"""Shared pytest fixtures for the CodePlay test suite.

Provides reusable fixtures for:
- A temporary templates root with a small React starter
- Configuration pointing at temporary directories
- Seeded playground stores and users
- A FastAPI app and TestClient wired to those
"""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from codeplay.api import create_app
from codeplay.config import Config
from codeplay.playgrounds import (
    InMemoryPlaygroundStore,
    Playground,
    PlaygroundActions,
    StoreSnapshot,
    User,
)
from codeplay.templates import TemplateId


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def templates_root(tmp_path: Path) -> Path:
    """Templates root holding only a ``react-ts`` starter.

    Layout::

        react-ts/
            package.json
            src/App.js      -> "hello"
    """
    root = tmp_path / "starters"
    react = root / "react-ts"
    (react / "src").mkdir(parents=True)
    (react / "src" / "App.js").write_text("hello", encoding="utf-8")
    (react / "package.json").write_text('{"name": "react-ts"}\n', encoding="utf-8")
    return root


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "output"


@pytest.fixture
def config(templates_root: Path, output_dir: Path) -> Config:
    return Config(templates_root=templates_root, output_dir=output_dir)


# ---------------------------------------------------------------------------
# Users & Playgrounds
# ---------------------------------------------------------------------------

@pytest.fixture
def alice() -> User:
    return User(id="user-alice", name="Alice", email="alice@example.com")


@pytest.fixture
def bob() -> User:
    return User(id="user-bob", name="Bob", email="bob@example.com")


@pytest.fixture
def react_playground(alice: User) -> Playground:
    return Playground(
        id="pg-react",
        title="My React App",
        description="Counter demo",
        template=TemplateId.REACTJS,
        user_id=alice.id,
    )


@pytest.fixture
def angular_playground(alice: User) -> Playground:
    """An ANGULAR playground; the fixture templates root has no angular starter."""
    return Playground(
        id="pg-angular",
        title="Angular thing",
        template=TemplateId.ANGULAR,
        user_id=alice.id,
    )


@pytest.fixture
def store(alice: User, react_playground: Playground, angular_playground: Playground) -> InMemoryPlaygroundStore:
    """In-memory store seeded with Alice and two of her playgrounds."""
    return InMemoryPlaygroundStore(
        StoreSnapshot(users=[alice], playgrounds=[react_playground, angular_playground])
    )


@pytest.fixture
def empty_store() -> InMemoryPlaygroundStore:
    return InMemoryPlaygroundStore()


@pytest.fixture
def actions(store: InMemoryPlaygroundStore) -> PlaygroundActions:
    return PlaygroundActions(store)


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

def _auth_headers(user: User) -> dict[str, str]:
    return {"X-User-Id": user.id, "X-User-Name": user.name, "X-User-Email": user.email}


@pytest.fixture
def alice_headers(alice: User) -> dict[str, str]:
    """Headers the auth proxy would forward for Alice."""
    return _auth_headers(alice)


@pytest.fixture
def bob_headers(bob: User) -> dict[str, str]:
    return _auth_headers(bob)


@pytest.fixture
def app(config: Config, store: InMemoryPlaygroundStore):
    return create_app(config, store)


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client
