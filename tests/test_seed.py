"""Tests for demo data."""

import random
from datetime import date

from food_diary.services.seed import seed_meals, seed_time_slots


def test_seed_meals_are_deterministic_for_a_seed() -> None:
    today = date(2024, 3, 15)

    first = seed_meals(today, random.Random(7))
    second = seed_meals(today, random.Random(7))

    assert [(m.food_name, m.calories) for m in first] == [
        (m.food_name, m.calories) for m in second
    ]


def test_seed_meals_cover_previous_days() -> None:
    today = date(2024, 3, 15)

    meals = seed_meals(today, random.Random(1))

    days = {meal.timestamp.date() for meal in meals}
    assert days == {date(2024, 3, day) for day in range(6, 16)}
    todays = [meal for meal in meals if meal.timestamp.date() == today]
    assert sorted(meal.calories for meal in todays) == [320, 450]
    assert all(meal.calories >= 0 for meal in meals)


def test_seed_time_slots_total() -> None:
    slots = seed_time_slots()

    assert [slot.current for slot in slots] == [800, 450, 0]
    assert sum(slot.current for slot in slots) == 1250
