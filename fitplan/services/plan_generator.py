"""Prompt building and response shaping for workout and meal plans."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, List

from fitplan.api.schemas.plan import Profile
from fitplan.services.completion import CompletionClient, CompletionError
from fitplan.services.meal_plan_parser import split_meal_plan

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
WORKOUT_EMPTY_MESSAGE = "Unable to generate response."
WORKOUT_FAILURE_MESSAGE = "Something went wrong"
MEAL_EMPTY_MESSAGE = "Meal plan not available."
MEAL_FAILURE_MESSAGE = "⚠️ Could not generate meal plan. Please try again later."


@dataclass
class WorkoutPlan:
    activity: str
    weekly_plan: str
    message: str
    upstream_failed: bool = False

    @property
    def degraded(self) -> bool:
        return self.upstream_failed or (
            self.activity == NOT_AVAILABLE and self.weekly_plan == NOT_AVAILABLE
        )


@dataclass
class MealPlan:
    text: str
    days: List[str] = field(default_factory=list)
    upstream_failed: bool = False


def _limitations_text(profile: Profile) -> str:
    return (profile.limitations or "").strip() or "none"


def build_workout_prompt(profile: Profile) -> str:
    return f"""
You are a motivating fitness assistant. The user's name is {profile.name}, height is {profile.height}, weight is {profile.weight}, goal is {profile.goal.phrase}, and limitations are {_limitations_text(profile)}.

Provide a personalized fitness plan with:
- A recommended activity tailored to the user's goal and limitations.
- A {profile.plan_length}-day workout plan summary.
- A short motivational message.

Respond in this strict JSON format (no extra text):

{{
  "activity": "personalized activity here",
  "weeklyPlan": "day-by-day workout summary",
  "message": "motivational message"
}}
""".strip()


def build_meal_prompt(profile: Profile) -> str:
    return f"""
You are a helpful and health-conscious AI assistant. The user is named {profile.name} and their goal is to {profile.goal.phrase}.
They are {profile.height} inches tall, weigh {profile.weight} lbs, and have this limitation: {_limitations_text(profile)}.

Based on this, suggest a healthy 7-day meal plan. Make sure to provide:
- Breakfast
- Lunch
- Dinner

Format it like this:

Day 1 - Breakfast: ..., Lunch: ..., Dinner: ...
Day 2 - Breakfast: ..., Lunch: ..., Dinner: ...
... (repeat for 7 days)

Only return the meal plan text. Do not include anything else.
""".strip()


def parse_workout_response(raw: str | None) -> WorkoutPlan:
    """
    Shape a completion reply into a :class:`WorkoutPlan`.

    A reply that is not a JSON object yields ``N/A`` for the activity and plan,
    with the raw text kept as the message so the user still sees something.
    """
    text = raw or ""
    try:
        payload = json.loads(text)
    except (ValueError, RecursionError):
        logger.warning("Workout reply was not valid JSON; raw content: %r", text[:500])
        return WorkoutPlan(
            activity=NOT_AVAILABLE,
            weekly_plan=NOT_AVAILABLE,
            message=text or WORKOUT_EMPTY_MESSAGE,
        )

    if not isinstance(payload, dict):
        logger.warning("Workout reply was JSON but not an object: %r", text[:500])
        return WorkoutPlan(activity=NOT_AVAILABLE, weekly_plan=NOT_AVAILABLE, message=text)

    return WorkoutPlan(
        activity=_as_text(payload.get("activity")),
        weekly_plan=_as_text(payload.get("weeklyPlan")),
        message=_as_text(payload.get("message")),
    )


def _as_text(value: Any) -> str:
    if value is None or value == "":
        return NOT_AVAILABLE
    if isinstance(value, str):
        return value
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def generate_workout_plan(profile: Profile, client: CompletionClient) -> WorkoutPlan:
    """Ask the completion service for a workout plan; never raises on upstream errors."""
    prompt = build_workout_prompt(profile)
    try:
        raw = client.complete(prompt, json_response=True)
    except CompletionError:
        logger.exception("Workout plan request failed")
        return WorkoutPlan(
            activity=NOT_AVAILABLE,
            weekly_plan=NOT_AVAILABLE,
            message=WORKOUT_FAILURE_MESSAGE,
            upstream_failed=True,
        )
    return parse_workout_response(raw)


def generate_meal_plan(profile: Profile, client: CompletionClient) -> MealPlan:
    """Ask the completion service for a 7-day meal plan as free text."""
    prompt = build_meal_prompt(profile)
    try:
        raw = client.complete(prompt)
    except CompletionError:
        logger.exception("Meal plan request failed")
        return MealPlan(text=MEAL_FAILURE_MESSAGE, upstream_failed=True)

    text = (raw or "").strip()
    if not text:
        return MealPlan(text=MEAL_EMPTY_MESSAGE)
    return MealPlan(text=text, days=split_meal_plan(text))
