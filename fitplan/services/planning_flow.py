"""State machine for the profile -> workout -> meal planning session."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from fitplan.api.schemas.plan import Profile
from fitplan.services.plan_generator import MealPlan, WorkoutPlan

HEIGHT_RANGE = (54, 90)
WEIGHT_RANGE = (85, 400)


class PlanningState(str, Enum):
    AWAITING_PROFILE = "awaiting_profile"
    AWAITING_WORKOUT_RESULT = "awaiting_workout_result"
    AWAITING_MEAL_CHOICE = "awaiting_meal_choice"
    AWAITING_MEAL_RESULT = "awaiting_meal_result"
    DONE = "done"


class InvalidTransitionError(RuntimeError):
    def __init__(self, event: str, state: PlanningState):
        super().__init__(f"Cannot handle {event!r} while {state.value}")
        self.event = event
        self.state = state


class ProfileRejectedError(ValueError):
    """The profile is outside the bounds the form accepts."""

    def __init__(self, problems: List[str]):
        super().__init__("; ".join(problems))
        self.problems = problems


def _as_int(value: object) -> Optional[int]:
    try:
        return int(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return None


def check_profile_bounds(profile: Profile) -> List[str]:
    """Return human-readable problems with the profile's height and weight."""
    problems: List[str] = []
    height = _as_int(profile.height)
    if height is None or not HEIGHT_RANGE[0] <= height <= HEIGHT_RANGE[1]:
        problems.append(
            f"Please enter a valid height between {HEIGHT_RANGE[0]} and {HEIGHT_RANGE[1]} inches."
        )
    weight = _as_int(profile.weight)
    if weight is None or not WEIGHT_RANGE[0] <= weight <= WEIGHT_RANGE[1]:
        problems.append(
            "Please consult with a physician before proceeding. "
            "This app may not provide safe advice for your current weight."
        )
    return problems


@dataclass
class PlanningSession:
    """
    One user's pass through the planning form.

    Events move the session forward; anything out of order raises
    :class:`InvalidTransitionError` and leaves the session untouched.
    ``reset`` is accepted from every state.
    """

    state: PlanningState = PlanningState.AWAITING_PROFILE
    profile: Optional[Profile] = None
    workout: Optional[WorkoutPlan] = None
    meal_plan: Optional[str] = None
    meal_days: List[str] = field(default_factory=list)

    def _require(self, event: str, expected: PlanningState) -> None:
        if self.state is not expected:
            raise InvalidTransitionError(event, self.state)

    def submit_profile(self, profile: Profile) -> None:
        self._require("submit_profile", PlanningState.AWAITING_PROFILE)
        problems = check_profile_bounds(profile)
        if problems:
            raise ProfileRejectedError(problems)
        self.profile = profile
        self.state = PlanningState.AWAITING_WORKOUT_RESULT

    def workout_received(self, plan: WorkoutPlan) -> None:
        self._require("workout_received", PlanningState.AWAITING_WORKOUT_RESULT)
        self.workout = plan
        self.state = PlanningState.AWAITING_MEAL_CHOICE

    def choose_meal_plan(self, wants_meal_plan: bool) -> None:
        self._require("choose_meal_plan", PlanningState.AWAITING_MEAL_CHOICE)
        self.state = PlanningState.AWAITING_MEAL_RESULT if wants_meal_plan else PlanningState.DONE

    def meal_received(self, plan: MealPlan) -> None:
        self._require("meal_received", PlanningState.AWAITING_MEAL_RESULT)
        self.meal_plan = plan.text
        self.meal_days = list(plan.days)
        self.state = PlanningState.DONE

    def reset(self) -> None:
        self.state = PlanningState.AWAITING_PROFILE
        self.profile = None
        self.workout = None
        self.meal_plan = None
        self.meal_days = []
