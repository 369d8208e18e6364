"""Workout and meal plan generation endpoints."""
from __future__ import annotations

from time import perf_counter

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from fitplan.api.schemas.plan import MealPlanResponse, Profile, WorkoutPlanResponse
from fitplan.observability.metrics import log_metric
from fitplan.observability.tracing import trace
from fitplan.services.completion import CompletionClient, get_completion_client
from fitplan.services.plan_generator import generate_meal_plan, generate_workout_plan

router = APIRouter()


def _profile_metadata(profile: Profile) -> dict:
    return {
        "goal": profile.goal.value,
        "plan_length": str(profile.plan_length),
        "has_limitations": bool((profile.limitations or "").strip()),
    }


@router.post(
    "/motivate",
    response_model=WorkoutPlanResponse,
    responses={500: {"model": WorkoutPlanResponse, "description": "Completion service failed"}},
    tags=["plans"],
)
def motivate(
    profile: Profile,
    http_request: Request,
    client: CompletionClient = Depends(get_completion_client),
):
    """Generate an activity, a workout plan summary and a motivational message."""
    request_id = getattr(http_request.state, "request_id", None)
    start = perf_counter()

    with trace("plan.workout", metadata=_profile_metadata(profile), request_id=request_id) as span:
        plan = generate_workout_plan(profile, client)
        if span:
            try:
                span.update(metadata={"degraded": plan.degraded, "upstream_failed": plan.upstream_failed})
            except Exception:  # pragma: no cover - best-effort
                pass

    log_metric("plan.workout.success", 0 if plan.upstream_failed else 1, metadata={"goal": profile.goal.value})
    log_metric("plan.workout.degraded", 1 if plan.degraded else 0, metadata={"goal": profile.goal.value})
    log_metric("plan.workout.latency_ms", (perf_counter() - start) * 1000)

    body = WorkoutPlanResponse(activity=plan.activity, weekly_plan=plan.weekly_plan, message=plan.message)
    if plan.upstream_failed:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(by_alias=True),
        )
    return body


@router.post(
    "/mealprep",
    response_model=MealPlanResponse,
    responses={500: {"model": MealPlanResponse, "description": "Completion service failed"}},
    tags=["plans"],
)
def mealprep(
    profile: Profile,
    http_request: Request,
    client: CompletionClient = Depends(get_completion_client),
):
    """Generate a 7-day breakfast/lunch/dinner plan."""
    request_id = getattr(http_request.state, "request_id", None)
    start = perf_counter()

    with trace("plan.meal", metadata=_profile_metadata(profile), request_id=request_id):
        plan = generate_meal_plan(profile, client)

    log_metric("plan.meal.success", 0 if plan.upstream_failed else 1, metadata={"goal": profile.goal.value})
    log_metric("plan.meal.days", len(plan.days))
    log_metric("plan.meal.latency_ms", (perf_counter() - start) * 1000)

    body = MealPlanResponse(meal_plan=plan.text, days=plan.days)
    if plan.upstream_failed:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(by_alias=True),
        )
    return body
