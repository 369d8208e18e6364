"""Database utilities and models."""

from fitplan.db.base import Base
from fitplan.db import models  # noqa: F401  (imported for side effects)

__all__ = ["Base"]
