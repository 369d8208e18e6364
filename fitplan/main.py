"""Main FastAPI application for the FitPlan backend."""
from fastapi import FastAPI, Request

from fitplan.api.routes.plans import router as plans_router
from fitplan.api.routes.tasks import router as tasks_router
from fitplan.core.config import settings
from fitplan.core.logging import configure_logging
from fitplan.core.middleware import RequestIDMiddleware
from fitplan.db.session import init_db
from fitplan.observability.client import init_opik
from fitplan.observability.tracing import trace

configure_logging(log_level=settings.log_level)

app = FastAPI(title=settings.app_name, version="0.1.0", debug=settings.debug)
app.add_middleware(RequestIDMiddleware)
app.include_router(tasks_router)
app.include_router(plans_router)


@app.on_event("startup")
async def startup_storage() -> None:
    """Create the task tables and import any legacy JSON task file."""
    init_db()


@app.on_event("startup")
async def startup_observability() -> None:
    """Initialize observability backends after the event loop starts."""
    init_opik()


@app.get("/health", tags=["health"], summary="Readiness probe")
async def health_check(request: Request) -> dict[str, str]:
    """Return a simple status payload so automation can probe the API."""
    with trace("http.health_check", metadata={"route": "/health"}, request_id=request.state.request_id):
        return {"status": "ok"}
