"""Engine and session factory for the embedded task database."""
from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker

from fitplan.core.config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    """Create an engine, making sure the SQLite file's directory exists."""
    url = make_url(database_url)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(database_url, connect_args=connect_args, future=True)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def init_db(bind: Engine | None = None) -> None:
    """Create missing tables and pull in any legacy JSON task file."""
    from fitplan.db.base import Base
    from fitplan.db import models  # noqa: F401  (register tables)
    from fitplan.services.task_store import import_legacy_tasks

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.debug("Task tables ensured on %s", target.url)

    session = sessionmaker(bind=target, autoflush=False, autocommit=False, future=True)()
    try:
        import_legacy_tasks(session, settings.legacy_tasks_path)
    finally:
        session.close()
