"""Application configuration."""

import os
from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class MealStorage(str, Enum):
    """Backend used for the meal repository."""

    MEMORY = "memory"
    SUPABASE = "supabase"


class DateMatch(str, Enum):
    """How a meal timestamp is compared with a selected day."""

    CALENDAR_DAY = "calendar_day"
    DAY_OF_MONTH = "day_of_month"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_model: str = "gpt-4.1-mini"
    openai_store: bool = False
    meal_storage: MealStorage = MealStorage.MEMORY
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    timezone: str = "Asia/Bangkok"
    calorie_goal: int = 2000
    calorie_tolerance: int = 200
    water_goal_ml: int = Field(default=2500, gt=0)
    date_match: DateMatch = DateMatch.CALENDAR_DAY
    seed_demo_data: bool = True
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
