"""Shared fixtures: test app over a temporary storage root."""
import tempfile
import threading

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from piecestore.api.routes_pieces import router as pieces_router
from piecestore.settings import Settings
from piecestore.storage.pieces import PieceStore


class FakeOwnerProvider:
    """Owner provider returning a fixed uid for every path."""

    def __init__(self, uid: int | None) -> None:
        self.uid = uid
        self.calls: list[str] = []

    def owner_of(self, path) -> int | None:
        self.calls.append(str(path))
        return self.uid


class TickClock:
    """Clock for BoundedCache: every call returns the next millisecond."""

    def __init__(self, start: int = 0) -> None:
        self.now = start

    def __call__(self) -> int:
        self.now += 1
        return self.now


def create_test_app(*, require_auth: bool = False, storage_root: str | None = None, cache_size: int = 8) -> FastAPI:
    """Creates a FastAPI test app backed by a store in a temporary directory."""
    app = FastAPI(title="Piece store test", version="0.1.0")
    app.include_router(pieces_router)

    root = storage_root or tempfile.mkdtemp(prefix="piecestore_test_")
    settings = Settings(
        require_auth=require_auth,
        api_key="test-secret-key",
        storage_root=root,
        cache_size=cache_size,
    )

    app.state.settings = settings
    app.state.store = PieceStore.create(settings.storage_root, settings.cache_size)
    app.state.store_lock = threading.Lock()

    return app


@pytest.fixture
def store(tmp_path) -> PieceStore:
    """Store rooted at a fresh directory under tmp_path."""
    return PieceStore.create(tmp_path / "store", cache_size=7)


@pytest.fixture
def app():
    """App without authentication."""
    return create_test_app(require_auth=False)


@pytest.fixture
def app_with_auth():
    """App with authentication enabled."""
    return create_test_app(require_auth=True)


@pytest.fixture
def client(app: FastAPI):
    """HTTP client for the app without authentication."""
    return TestClient(app)


@pytest.fixture
def client_with_auth(app_with_auth: FastAPI):
    """HTTP client for the app with authentication."""
    return TestClient(app_with_auth)
