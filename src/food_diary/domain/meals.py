"""Domain models for meal logging."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

SNACK = "ของว่าง"


@dataclass(frozen=True)
class Meal:
    """One logged eating event."""

    id: UUID
    type: str
    food_name: str
    calories: int
    image: str
    timestamp: datetime
    tags: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class MealGroup:
    """Meals logged on a single calendar day."""

    day: date
    meals: list[Meal]

    @property
    def total_calories(self) -> int:
        return sum(meal.calories for meal in self.meals)
