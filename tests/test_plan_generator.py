from __future__ import annotations

import json

from fitplan.api.schemas.plan import Goal, Profile
from fitplan.services import plan_generator
from fitplan.services.plan_generator import (
    MEAL_EMPTY_MESSAGE,
    MEAL_FAILURE_MESSAGE,
    NOT_AVAILABLE,
    WORKOUT_EMPTY_MESSAGE,
    WORKOUT_FAILURE_MESSAGE,
)

from .fakes import FakeCompletionClient


def _profile(**overrides) -> Profile:
    data = {
        "name": "Sam",
        "height": 70,
        "weight": 180,
        "goal": "lose_weight",
        "limitations": "",
        "planLength": "7",
    }
    data.update(overrides)
    return Profile.model_validate(data)


def test_workout_prompt_embeds_profile():
    prompt = plan_generator.build_workout_prompt(_profile(goal="increase_stamina"))

    assert "name is Sam" in prompt
    assert "height is 70" in prompt
    assert "weight is 180" in prompt
    assert "goal is increase stamina" in prompt
    assert "limitations are none" in prompt
    assert "A 7-day workout plan summary" in prompt
    assert '"weeklyPlan"' in prompt


def test_goal_phrase_replaces_every_separator():
    assert Goal.MOVE_BETTER.phrase == "move better"
    assert Goal.INCREASE_STAMINA.phrase == "increase stamina"


def test_meal_prompt_uses_day_format_and_limitations():
    prompt = plan_generator.build_meal_prompt(_profile(limitations="knee injury"))

    assert "their goal is to lose weight" in prompt
    assert "They are 70 inches tall, weigh 180 lbs" in prompt
    assert "this limitation: knee injury" in prompt
    assert "Day 1 - Breakfast: ..., Lunch: ..., Dinner: ..." in prompt


def test_workout_plan_from_well_formed_json():
    reply = json.dumps(
        {
            "activity": "Brisk walking",
            "weeklyPlan": "Mon: walk 30 min; Tue: rest",
            "message": "You've got this, Sam!",
        }
    )
    client = FakeCompletionClient(reply)

    plan = plan_generator.generate_workout_plan(_profile(), client)

    assert plan.activity == "Brisk walking"
    assert plan.weekly_plan == "Mon: walk 30 min; Tue: rest"
    assert plan.message == "You've got this, Sam!"
    assert not plan.degraded
    assert client.calls[0]["json_response"] is True


def test_workout_plan_invalid_json_keeps_raw_text():
    client = FakeCompletionClient("Sure! Here is your plan: walk daily.")

    plan = plan_generator.generate_workout_plan(_profile(), client)

    assert plan.activity == NOT_AVAILABLE
    assert plan.weekly_plan == NOT_AVAILABLE
    assert plan.message == "Sure! Here is your plan: walk daily."
    assert plan.degraded
    assert not plan.upstream_failed


def test_workout_plan_empty_reply_uses_generic_message():
    plan = plan_generator.generate_workout_plan(_profile(), FakeCompletionClient(""))

    assert plan.message == WORKOUT_EMPTY_MESSAGE
    assert plan.activity == NOT_AVAILABLE


def test_workout_plan_upstream_failure():
    plan = plan_generator.generate_workout_plan(_profile(), FakeCompletionClient(fail=True))

    assert plan.upstream_failed
    assert (plan.activity, plan.weekly_plan, plan.message) == (
        NOT_AVAILABLE,
        NOT_AVAILABLE,
        WORKOUT_FAILURE_MESSAGE,
    )


def test_parse_workout_response_fills_missing_and_stringifies():
    plan = plan_generator.parse_workout_response(
        json.dumps({"activity": "Swimming", "weeklyPlan": ["Mon swim", "Wed swim"]})
    )

    assert plan.activity == "Swimming"
    assert plan.weekly_plan == '["Mon swim", "Wed swim"]'
    assert plan.message == NOT_AVAILABLE


def test_parse_workout_response_non_object_json():
    plan = plan_generator.parse_workout_response("[1, 2]")

    assert plan.activity == NOT_AVAILABLE
    assert plan.message == "[1, 2]"


def test_meal_plan_trimmed_and_split():
    reply = "\n  Day 1 - Breakfast: oats, Lunch: salad, Dinner: fish\nDay 2 - Breakfast: eggs, Lunch: wrap, Dinner: tofu  \n"
    client = FakeCompletionClient(reply)

    plan = plan_generator.generate_meal_plan(_profile(), client)

    assert plan.text == reply.strip()
    assert plan.days == [
        "Day 1 - Breakfast: oats, Lunch: salad, Dinner: fish",
        "Day 2 - Breakfast: eggs, Lunch: wrap, Dinner: tofu",
    ]
    assert client.calls[0]["json_response"] is False


def test_meal_plan_empty_reply():
    plan = plan_generator.generate_meal_plan(_profile(), FakeCompletionClient("   "))

    assert plan.text == MEAL_EMPTY_MESSAGE
    assert plan.days == []
    assert not plan.upstream_failed


def test_meal_plan_upstream_failure_does_not_raise():
    plan = plan_generator.generate_meal_plan(_profile(), FakeCompletionClient(fail=True))

    assert plan.text == MEAL_FAILURE_MESSAGE
    assert plan.upstream_failed


def test_parse_workout_response_deeply_nested_json_degrades():
    raw = "[" * 100_000 + "]" * 100_000

    plan = plan_generator.parse_workout_response(raw)

    assert plan.activity == NOT_AVAILABLE
    assert plan.weekly_plan == NOT_AVAILABLE
    assert plan.message == raw
