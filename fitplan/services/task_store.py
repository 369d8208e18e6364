"""Persistence operations for the flat task list."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from uuid import uuid4

from sqlalchemy import asc, delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fitplan.db.models.task import Task

logger = logging.getLogger(__name__)


class TaskNotFoundError(LookupError):
    """Raised when an update targets an id that is not stored."""

    def __init__(self, task_id: str):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class InvalidParentError(ValueError):
    """Raised when parent validation is enabled and a parentId is unusable."""


def list_tasks(db: Session) -> List[Task]:
    """Return every task in insertion order; storage errors yield an empty list."""
    try:
        return list(db.scalars(select(Task).order_by(asc(Task.seq))))
    except SQLAlchemyError:
        logger.warning("Task storage unreadable; returning an empty list", exc_info=True)
        db.rollback()
        return []


def create_task(
    db: Session,
    *,
    title: str = "",
    completed: bool = False,
    parent_id: Optional[str] = None,
    validate_parent: bool = False,
) -> Task:
    """Insert a task under a freshly generated id."""
    task_id = str(uuid4())
    if validate_parent:
        _check_parent(db, task_id, parent_id)

    task = Task(id=task_id, title=title, completed=completed, parent_id=parent_id)
    db.add(task)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(task)
    logger.info("Created task %s (parent=%s)", task.id, parent_id or "-")
    return task


def update_task(
    db: Session,
    task_id: str,
    *,
    title: str = "",
    completed: bool = False,
    parent_id: Optional[str] = None,
    validate_parent: bool = False,
) -> Task:
    """Replace the stored fields of ``task_id`` wholesale."""
    task = _find_task(db, task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    if validate_parent:
        _check_parent(db, task_id, parent_id)

    task.title = title
    task.completed = completed
    task.parent_id = parent_id
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(task)
    return task


def delete_task(db: Session, task_id: str) -> int:
    """Remove every task with ``task_id``; returns how many rows went away."""
    try:
        result = db.execute(delete(Task).where(Task.id == task_id))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    removed = result.rowcount or 0
    if removed:
        logger.info("Deleted task %s", task_id)
    return removed


def count_tasks(db: Session) -> int:
    return int(db.scalar(select(func.count()).select_from(Task)) or 0)


def import_legacy_tasks(db: Session, path: str | Path) -> int:
    """
    Load a JSON-array task file into an empty table.

    The file is the flat blob format written by earlier releases: one object
    per task with ``id``, ``title``, ``completed`` and optional ``parentId``.
    Nothing happens when the table already holds tasks or the file is absent.
    A malformed file is logged and skipped.
    """
    legacy_path = Path(path)
    if not legacy_path.is_file() or count_tasks(db) > 0:
        return 0

    try:
        payload = json.loads(legacy_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable legacy task file %s: %s", legacy_path, exc)
        return 0
    if not isinstance(payload, list):
        logger.warning("Ignoring legacy task file %s: expected a JSON array", legacy_path)
        return 0

    seen: set[str] = set()
    imported = 0
    for entry in payload:
        if not isinstance(entry, dict):
            continue
        task = _task_from_legacy(entry)
        if task.id in seen:
            continue
        seen.add(task.id)
        db.add(task)
        imported += 1

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("Imported %d task(s) from %s", imported, legacy_path)
    return imported


def _find_task(db: Session, task_id: str) -> Optional[Task]:
    return db.scalars(select(Task).where(Task.id == task_id).limit(1)).first()


def _task_from_legacy(entry: Dict[str, Any]) -> Task:
    raw_id = entry.get("id")
    parent = entry.get("parentId")
    return Task(
        id=str(raw_id) if raw_id else str(uuid4()),
        title=str(entry.get("title") or ""),
        completed=bool(entry.get("completed", False)),
        parent_id=str(parent) if parent else None,
    )


def _check_parent(db: Session, task_id: str, parent_id: Optional[str]) -> None:
    if parent_id is None:
        return
    if parent_id == task_id:
        raise InvalidParentError("A task cannot be its own parent")
    parent = _find_task(db, parent_id)
    if parent is None:
        raise InvalidParentError(f"Parent task {parent_id} does not exist")
    if parent.parent_id is not None:
        raise InvalidParentError("Subtasks cannot have subtasks of their own")
