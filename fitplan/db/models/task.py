"""Task ORM model."""
from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Boolean, Column, Index, Integer, String, Text, text as sa_text

from fitplan.db.base import Base


def _new_task_id() -> str:
    return str(uuid4())


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_task_id", "task_id", unique=True),
        Index("ix_tasks_parent_id", "parent_id"),
    )

    # Surrogate key; also the list order.
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column("task_id", String(64), nullable=False, default=_new_task_id)
    title = Column(Text, nullable=False, default="")
    completed = Column(Boolean, nullable=False, default=False, server_default=sa_text("0"))
    # No foreign key: dangling parent ids are stored as given.
    parent_id = Column(String(64), nullable=True)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"Task(id={self.id!r}, title={self.title!r}, completed={self.completed!r})"
