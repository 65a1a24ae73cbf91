# conftest.py
import os

# must be set before app.config builds its settings
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("LOG_JSON", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.db import Base, get_db
from app.repositories import Repositories


def _engine(url: str = "sqlite://"):
    kwargs = {"connect_args": {"check_same_thread": False}}
    if url == "sqlite://":
        # one shared connection so every session sees the same in-memory db
        kwargs["poolclass"] = StaticPool
    eng = create_engine(url, **kwargs)
    Base.metadata.create_all(bind=eng)
    return eng


@pytest.fixture()
def engine():
    eng = _engine()
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db(session_factory):
    s = session_factory()
    yield s
    s.close()


@pytest.fixture()
def repos(db):
    return Repositories.from_session(db)


@pytest.fixture()
def file_session_factory(tmp_path):
    """Two sessions from this factory use separate connections, like two workers."""
    eng = _engine(f"sqlite:///{tmp_path / 'kitchenpos.db'}")
    yield sessionmaker(bind=eng, autoflush=False, expire_on_commit=False)
    eng.dispose()


@pytest.fixture()
def client(session_factory):
    from app.main import app

    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
