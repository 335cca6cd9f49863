"""
Shared fixtures and configuration for the test suite.

The application reads its configuration at import time, so the environment is
pointed at a throwaway SQLite database before anything from ``app`` is
imported. Every test starts from empty tables.
"""

import os
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

_TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="persona_morph_tests_")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["GENERATION_CONCURRENCY"] = "2"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402

from app.models.base import Base  # noqa: E402

BASE_URL = "https://testserver"


@pytest.fixture(scope="session")
def sync_engine() -> Generator[Engine, None, None]:
    """Blocking engine on the test database, for setup and direct inspection."""
    engine = create_engine(f"sqlite:///{_TEST_DB_PATH}")
    yield engine
    engine.dispose()


@pytest.fixture(autouse=True)
def reset_database(sync_engine: Engine) -> None:
    Base.metadata.drop_all(sync_engine)
    Base.metadata.create_all(sync_engine)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    """
    Create a new application instance for the test session.
    """
    from main import create_app

    return create_app()


@pytest.fixture
def client_factory(app: FastAPI) -> Generator[Callable[[], TestClient], None, None]:
    """Build independent clients, each with its own cookie jar."""
    clients: list[TestClient] = []

    def make() -> TestClient:
        c = TestClient(app, base_url=BASE_URL)
        c.__enter__()
        clients.append(c)
        return c

    yield make

    for c in clients:
        c.__exit__(None, None, None)


@pytest.fixture
def client(client_factory: Callable[[], TestClient]) -> TestClient:
    return client_factory()

