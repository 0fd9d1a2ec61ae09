"""Supabase repository for logged meals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from food_diary.domain.meals import Meal
from food_diary.services.meals import MealRepository

_COLUMNS = "id, meal_type, food_name, calories, image, logged_at, tags"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for the meal diary.

    Rows are ordered by the table's identity column ``seq`` so the newest
    insertion comes first regardless of ``logged_at``.
    """

    client: Client
    table_name: str = "meals"

    def insert(self, meal: Meal) -> None:
        """Insert a meal row."""
        response = (
            self.client.table(self.table_name)
            .insert(
                {
                    "id": str(meal.id),
                    "meal_type": meal.type,
                    "food_name": meal.food_name,
                    "calories": meal.calories,
                    "image": meal.image,
                    "logged_at": meal.timestamp.isoformat(),
                    "tags": list(meal.tags),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")

    def list_meals(self) -> list[Meal]:
        """Return all meals, newest insertion first."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .order("seq", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> Meal:
    logged_at_raw = row.get("logged_at")
    logged_at = (
        datetime.fromisoformat(logged_at_raw)
        if isinstance(logged_at_raw, str) and logged_at_raw
        else datetime.min
    )
    tags = row.get("tags")
    return Meal(
        id=UUID(str(row["id"])),
        type=str(row.get("meal_type") or ""),
        food_name=str(row.get("food_name") or ""),
        calories=int(row.get("calories") or 0),
        image=str(row.get("image") or ""),
        timestamp=logged_at,
        tags=tuple(str(tag) for tag in tags) if isinstance(tags, list) else (),
    )
