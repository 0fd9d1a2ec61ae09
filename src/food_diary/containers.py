"""Dependency container wiring for the application."""

import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from openai import AsyncOpenAI
from supabase import create_client

from food_diary.adapters.memory_meal_repository import InMemoryMealRepository
from food_diary.adapters.openai_chat_client import OpenAIChatClient
from food_diary.adapters.openai_vision_client import OpenAIVisionClient
from food_diary.adapters.supabase_meal_repository import SupabaseMealRepository
from food_diary.config import MealStorage, Settings
from food_diary.services.analysis import AnalysisClient
from food_diary.services.coach import CoachClient
from food_diary.services.controller import AppController, AppState
from food_diary.services.hydration import HydrationTracker
from food_diary.services.meals import MealRepository, MealStore
from food_diary.services.seed import seed_meals, seed_time_slots
from food_diary.services.stats import DayAggregator


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    meal_store: MealStore
    aggregator: DayAggregator
    analysis_client: AnalysisClient
    coach_client: CoachClient
    hydration: HydrationTracker
    controller: AppController
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    tz = ZoneInfo(resolved_settings.timezone)

    def clock() -> datetime:
        return datetime.now(tz=tz)

    meal_store = MealStore(
        repository=_build_meal_repository(resolved_settings),
        tz=tz,
        date_match=resolved_settings.date_match,
    )
    seed_demo = (
        resolved_settings.seed_demo_data
        and resolved_settings.meal_storage is MealStorage.MEMORY
    )
    if seed_demo:
        meal_store.add_meals(seed_meals(clock().date(), random.Random()))
        time_slots = seed_time_slots()
        hydration = HydrationTracker(
            goal_ml=resolved_settings.water_goal_ml,
            total_ml=sum(slot.current for slot in time_slots),
            time_slots=time_slots,
            clock=clock,
        )
    else:
        hydration = HydrationTracker(
            goal_ml=resolved_settings.water_goal_ml, clock=clock
        )

    openai_client = AsyncOpenAI(api_key=resolved_settings.openai_api_key)
    analysis_client = AnalysisClient(
        client=OpenAIVisionClient(client=openai_client),
        model=resolved_settings.openai_model,
        store=resolved_settings.openai_store,
    )
    coach_client = CoachClient(
        client=OpenAIChatClient(client=openai_client),
        model=resolved_settings.openai_model,
        store=resolved_settings.openai_store,
    )
    aggregator = DayAggregator(
        goal=resolved_settings.calorie_goal,
        tolerance=resolved_settings.calorie_tolerance,
        tz=tz,
    )
    controller = AppController(
        state=AppState(selected_date=clock().date()),
        meal_store=meal_store,
        aggregator=aggregator,
        analysis_client=analysis_client,
        coach_client=coach_client,
        hydration=hydration,
        clock=clock,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        meal_store=meal_store,
        aggregator=aggregator,
        analysis_client=analysis_client,
        coach_client=coach_client,
        hydration=hydration,
        controller=controller,
        close_resources=close_resources,
    )


def _build_meal_repository(settings: Settings) -> MealRepository:
    if settings.meal_storage is MealStorage.SUPABASE:
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage requires SUPABASE_URL and key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseMealRepository(client)
    return InMemoryMealRepository()
