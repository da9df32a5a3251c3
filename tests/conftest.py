from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from todolist.config import Settings
from todolist.database import Database
from todolist.main import create_app
from todolist.store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings built directly rather than from the environment,
    so tests never pick up a developer's .env.
    """
    return Settings(database_url=f"sqlite:///{tmp_path / 'tasks.sqlite3'}")


@pytest.fixture()
def database(settings: Settings):
    db = Database(settings.database_url)
    db.create_schema()
    yield db
    db.dispose()


@pytest.fixture()
def store(database: Database):
    session = database.session()
    yield TaskStore(session)
    session.close()


@pytest.fixture()
def app(settings: Settings, database: Database):
    return create_app(settings, database)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c
