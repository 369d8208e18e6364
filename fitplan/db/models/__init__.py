"""ORM models exposed for metadata discovery."""
from fitplan.db.models.task import Task

__all__ = ["Task"]
