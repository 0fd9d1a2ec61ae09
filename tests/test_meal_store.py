"""Tests for the meal store."""

from datetime import UTC, date, datetime

import pytest

from food_diary.adapters.memory_meal_repository import InMemoryMealRepository
from food_diary.config import DateMatch
from food_diary.domain.errors import InvalidMealError
from food_diary.services.analysis import fallback_analysis
from food_diary.services.meals import MealStore
from tests.conftest import BANGKOK, NOW, make_meal


def test_add_meal_prepends(meal_store: MealStore) -> None:
    first = meal_store.add_meal(make_meal(100))
    second = meal_store.add_meal(make_meal(200))

    assert meal_store.all_meals() == [second, first]


def test_add_meal_rejects_negative_calories(meal_store: MealStore) -> None:
    with pytest.raises(InvalidMealError):
        meal_store.add_meal(make_meal(-1))

    assert meal_store.all_meals() == []


def test_add_meal_keeps_duplicates(meal_store: MealStore) -> None:
    meal = make_meal(100)
    meal_store.add_meal(meal)
    meal_store.add_meal(meal)

    assert len(meal_store.all_meals()) == 2


def test_meals_for_date_matches_full_calendar_day(meal_store: MealStore) -> None:
    today = meal_store.add_meal(make_meal(100, NOW))
    meal_store.add_meal(make_meal(200, NOW.replace(month=2)))
    meal_store.add_meal(make_meal(300, NOW.replace(day=14)))

    assert meal_store.meals_for_date(date(2024, 3, 15)) == [today]


def test_meals_for_date_day_of_month_mode_merges_months() -> None:
    store = MealStore(
        repository=InMemoryMealRepository(),
        tz=BANGKOK,
        date_match=DateMatch.DAY_OF_MONTH,
    )
    march = store.add_meal(make_meal(100, NOW))
    february = store.add_meal(make_meal(200, NOW.replace(month=2)))

    assert store.meals_for_date(date(2024, 3, 15)) == [february, march]


def test_meals_for_date_uses_local_timezone(meal_store: MealStore) -> None:
    # 20:00 UTC on the 14th is already the 15th in Bangkok.
    late = meal_store.add_meal(make_meal(100, datetime(2024, 3, 14, 20, tzinfo=UTC)))

    assert meal_store.meals_for_date(date(2024, 3, 15)) == [late]
    assert meal_store.meals_for_date(date(2024, 3, 14)) == []


def test_meals_grouped_by_date_sorted_descending(meal_store: MealStore) -> None:
    meal_store.add_meal(make_meal(100, NOW.replace(day=13)))
    meal_store.add_meal(make_meal(200, NOW))
    meal_store.add_meal(make_meal(300, NOW.replace(day=13)))
    meal_store.add_meal(make_meal(400, NOW.replace(month=2, day=20)))

    groups = meal_store.meals_grouped_by_date()

    assert [group.day for group in groups] == [
        date(2024, 3, 15),
        date(2024, 3, 13),
        date(2024, 2, 20),
    ]
    assert [meal.calories for meal in groups[1].meals] == [300, 100]
    assert groups[1].total_calories == 400
    grouped_ids = [meal.id for group in groups for meal in group.meals]
    assert sorted(grouped_ids) == sorted(meal.id for meal in meal_store.all_meals())


def test_log_analysis_creates_snack_meal(meal_store: MealStore) -> None:
    analysis = fallback_analysis()

    meal = meal_store.log_analysis(analysis, "data:image/jpeg;base64,AAAA", NOW)

    assert meal.type == "ของว่าง"
    assert meal.food_name == "ไม่สามารถระบุได้"
    assert meal.calories == 0
    assert meal.tags == ("ลองใหม่",)
    assert meal_store.meals_for_date(NOW.date()) == [meal]


def test_meal_ids_are_unique(meal_store: MealStore) -> None:
    for _ in range(50):
        meal_store.add_meal(make_meal())

    ids = {meal.id for meal in meal_store.all_meals()}

    assert len(ids) == 50
