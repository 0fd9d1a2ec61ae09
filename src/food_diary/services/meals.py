"""Meal logging service."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import uuid4
from zoneinfo import ZoneInfo

from food_diary.config import DateMatch
from food_diary.domain.analysis import FoodAnalysis
from food_diary.domain.errors import InvalidMealError
from food_diary.domain.meals import SNACK, Meal, MealGroup

logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for logged meals."""

    def insert(self, meal: Meal) -> None:
        """Store a meal ahead of all existing ones."""

    def list_meals(self) -> list[Meal]:
        """Return all meals, most recently inserted first."""


@dataclass
class MealStore:
    """Owns the meal collection and answers per-day queries."""

    repository: MealRepository
    tz: ZoneInfo | None = None
    date_match: DateMatch = DateMatch.CALENDAR_DAY

    def add_meal(self, meal: Meal) -> Meal:
        """Prepend a meal after checking its invariants."""
        if meal.calories < 0:
            raise InvalidMealError(
                f"Meal calories must be non-negative, got {meal.calories}"
            )
        self.repository.insert(meal)
        logger.info("Logged meal %s (%s kcal)", meal.id, meal.calories)
        return meal

    def add_meals(self, meals: Iterable[Meal]) -> None:
        """Add meals in order, so the last one ends up first."""
        for meal in meals:
            self.add_meal(meal)

    def log_analysis(
        self,
        analysis: FoodAnalysis,
        image: str,
        logged_at: datetime,
        meal_type: str = SNACK,
    ) -> Meal:
        """Turn a confirmed analysis into a logged meal."""
        meal = new_meal(
            meal_type=meal_type,
            food_name=analysis.food_name,
            calories=round(analysis.calories),
            image=image,
            timestamp=logged_at,
            tags=analysis.tags,
        )
        return self.add_meal(meal)

    def all_meals(self) -> list[Meal]:
        """Return a snapshot of every meal, newest first."""
        return list(self.repository.list_meals())

    def meals_for_date(self, day: date) -> list[Meal]:
        """Return the meals logged on the given day, in store order."""
        return [
            meal
            for meal in self.repository.list_meals()
            if self._matches(local_day(meal.timestamp, self.tz), day)
        ]

    def meals_grouped_by_date(self) -> list[MealGroup]:
        """Group meals by calendar day, latest day first."""
        groups: dict[date, list[Meal]] = {}
        for meal in self.repository.list_meals():
            groups.setdefault(local_day(meal.timestamp, self.tz), []).append(meal)
        return [
            MealGroup(day=day, meals=groups[day])
            for day in sorted(groups, reverse=True)
        ]

    def _matches(self, meal_day: date, day: date) -> bool:
        if self.date_match is DateMatch.DAY_OF_MONTH:
            return meal_day.day == day.day
        return meal_day == day


def new_meal(  # noqa: PLR0913
    *,
    meal_type: str,
    food_name: str,
    calories: int,
    image: str,
    timestamp: datetime,
    tags: Sequence[str] = (),
) -> Meal:
    """Create a meal with a fresh identifier."""
    return Meal(
        id=uuid4(),
        type=meal_type,
        food_name=food_name,
        calories=calories,
        image=image,
        timestamp=timestamp,
        tags=tuple(tags),
    )


def local_day(timestamp: datetime, tz: ZoneInfo | None) -> date:
    """Return the calendar day of a timestamp in the given zone."""
    if tz is not None and timestamp.tzinfo is not None:
        return timestamp.astimezone(tz).date()
    return timestamp.date()
