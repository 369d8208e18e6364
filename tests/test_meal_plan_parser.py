import pytest

from fitplan.services.meal_plan_parser import split_meal_plan


def test_splits_on_newlines_and_drops_blank_lines():
    text = "Day 1 - Breakfast: oats\n\n   \nDay 2 - Breakfast: eggs\n"

    assert split_meal_plan(text) == ["Day 1 - Breakfast: oats", "Day 2 - Breakfast: eggs"]


def test_splits_single_line_on_day_markers():
    text = "Day 1 - Breakfast: oats, Lunch: soup Day 2 - Breakfast: eggs day 3 - Breakfast: toast"

    assert split_meal_plan(text) == [
        "Day 1 - Breakfast: oats, Lunch: soup",
        "Day 2 - Breakfast: eggs",
        "day 3 - Breakfast: toast",
    ]


def test_text_without_markers_is_one_segment():
    assert split_meal_plan("  Eat more vegetables and drink water.  ") == [
        "Eat more vegetables and drink water."
    ]


def test_leading_chatter_is_kept_as_its_own_segment():
    assert split_meal_plan("Here you go: Day 1 - oats Day 2 - eggs") == [
        "Here you go:",
        "Day 1 - oats",
        "Day 2 - eggs",
    ]


@pytest.mark.parametrize("text", [None, "", "   \n  "])
def test_empty_input_yields_no_days(text):
    assert split_meal_plan(text) == []
