"""In-memory meal repository."""

from dataclasses import dataclass, field

from food_diary.domain.meals import Meal
from food_diary.services.meals import MealRepository


@dataclass
class InMemoryMealRepository(MealRepository):
    """Keeps meals for the lifetime of the process."""

    meals: list[Meal] = field(default_factory=list)

    def insert(self, meal: Meal) -> None:
        self.meals.insert(0, meal)

    def list_meals(self) -> list[Meal]:
        return list(self.meals)
