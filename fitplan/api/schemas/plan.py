"""Pydantic schemas for workout and meal plan generation."""
from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Goal(str, Enum):
    LOSE_WEIGHT = "lose_weight"
    GAIN_MUSCLE = "gain_muscle"
    INCREASE_STAMINA = "increase_stamina"
    MOVE_BETTER = "move_better"

    @property
    def phrase(self) -> str:
        """Goal as prose, e.g. ``lose weight``."""
        return self.value.replace("_", " ")


class Profile(BaseModel):
    """Biometrics and goal collected by the planning form."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., min_length=1)
    height: Union[int, float, str]
    weight: Union[int, float, str]
    goal: Goal
    limitations: Optional[str] = None
    plan_length: Union[int, str] = Field(default=7, alias="planLength")


class WorkoutPlanResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    activity: str
    weekly_plan: str = Field(..., alias="weeklyPlan")
    message: str


class MealPlanResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    meal_plan: str = Field(..., alias="mealPlan")
    days: List[str] = Field(default_factory=list)
