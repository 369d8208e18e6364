"""Request-scoped context shared between middleware and logging."""
from __future__ import annotations

from contextvars import ContextVar

request_id_ctx_var: ContextVar[str | None] = ContextVar("fitplan_request_id", default=None)


def get_request_id() -> str | None:
    """Return the id of the request being served, if any."""
    return request_id_ctx_var.get()
