"""Pydantic models for API request payloads."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from food_diary.domain.hydration import SlotId
from food_diary.domain.meals import SNACK


class MealCreate(BaseModel):
    """Manually logged meal."""

    type: str = SNACK
    food_name: str
    calories: int
    image: str = ""
    timestamp: datetime | None = None
    tags: list[str] = Field(default_factory=list)


class ScanRequest(BaseModel):
    """Image to analyze, base64 with or without a data URL prefix."""

    image: str = Field(min_length=1)


class ConfirmRequest(BaseModel):
    """Meal label used when saving a scan to the diary."""

    meal_type: str = SNACK


class SelectDateRequest(BaseModel):
    """Day to show on the home feed."""

    day: date


class WaterRequest(BaseModel):
    """Water intake to record."""

    amount_ml: int
    slot: SlotId | None = None


class WaterGoalRequest(BaseModel):
    """New daily water goal."""

    goal_ml: int


class CoachRequest(BaseModel):
    """User message for the coach."""

    message: str
