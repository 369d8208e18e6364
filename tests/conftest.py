from __future__ import annotations

import os

# Settings are read once at import time, so point them at throwaway storage
# before any fitplan module is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LEGACY_TASKS_PATH"] = "tests/__missing__/tasks.json"
os.environ["OPIK_ENABLED"] = "false"
os.environ.pop("OPENAI_API_KEY", None)

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fitplan.db.base import Base
from fitplan.db import models  # noqa: F401  ensure models are loaded


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
