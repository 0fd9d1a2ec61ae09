"""Tests for container wiring."""

import asyncio

import pytest
from pydantic import ValidationError

from food_diary.config import MealStorage, Settings
from food_diary.containers import build_container


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.controller.meal_store is container.meal_store
    assert container.meal_store.all_meals() == []
    assert container.hydration.current_total() == 0
    asyncio.run(container.close_resources())


def test_build_container_seeds_demo_data() -> None:
    container = build_container(Settings(openai_api_key="key", seed_demo_data=True))

    assert container.hydration.current_total() == 1250
    assert container.hydration.goal() == 2500
    today = container.controller.today()
    todays = container.meal_store.meals_for_date(today)
    assert [meal.calories for meal in todays] == [320, 450]
    asyncio.run(container.close_resources())


def test_supabase_storage_requires_credentials() -> None:
    settings = Settings(openai_api_key="key", meal_storage=MealStorage.SUPABASE)

    with pytest.raises(ValueError):
        build_container(settings)


def test_non_positive_water_goal_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(openai_api_key="key", water_goal_ml=0)
