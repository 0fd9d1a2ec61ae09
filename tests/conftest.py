"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from food_diary.adapters.memory_meal_repository import InMemoryMealRepository
from food_diary.config import Settings
from food_diary.containers import AppContainer
from food_diary.domain.errors import CameraPermissionError
from food_diary.domain.meals import Meal
from food_diary.services.analysis import AnalysisClient, VisionClient
from food_diary.services.camera import Camera
from food_diary.services.coach import ChatClient, CoachClient
from food_diary.services.controller import AppController, AppState
from food_diary.services.hydration import HydrationTracker
from food_diary.services.meals import MealStore, new_meal
from food_diary.services.stats import DayAggregator

BANGKOK = ZoneInfo("Asia/Bangkok")
NOW = datetime(2024, 3, 15, 13, 30, tzinfo=BANGKOK)


def fixed_clock(moment: datetime = NOW) -> Callable[[], datetime]:
    """Return a clock that always reports the same moment."""
    return lambda: moment


def make_meal(
    calories: int = 300,
    timestamp: datetime = NOW,
    food_name: str = "ข้าวผัด",
    tags: tuple[str, ...] = (),
) -> Meal:
    return new_meal(
        meal_type="มื้อเที่ยง",
        food_name=food_name,
        calories=calories,
        image="https://example.com/food.jpg",
        timestamp=timestamp,
        tags=tags,
    )


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed payload or raising."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "foodName": "ผัดกะเพราไก่",
            "calories": 550,
            "macros": {"carbs": 60, "protein": 30, "fat": 20},
            "ingredients": ["ไก่สับ", "ใบกะเพรา", "พริก", "กระเทียม"],
            "suggestion": "เพิ่มผักข้างจานเพื่อไฟเบอร์ที่มากขึ้น",
            "tags": ["โปรตีนสูง"],
        }
    )
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def analyze(  # noqa: PLR0913
        self,
        *,
        model: str,
        store: bool,
        image_base64: str,
        mime_type: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.calls.append(
            {"model": model, "image_base64": image_base64, "mime_type": mime_type}
        )
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeChatClient(ChatClient):
    """Fake chat client returning a fixed reply or raising."""

    reply: str | None = "ลองสลัดอกไก่ไหมคะ ประมาณ 350 kcal 🥗"
    error: Exception | None = None
    messages: list[str] = field(default_factory=list)

    async def generate(
        self, *, model: str, store: bool, instructions: str, message: str
    ) -> str | None:
        self.messages.append(message)
        if self.error is not None:
            raise self.error
        return self.reply


@dataclass
class FakeCamera(Camera):
    """Fake camera that records its lifecycle."""

    frame: bytes = b"\xff\xd8\xffframe"
    deny: bool = False
    fail_capture: bool = False
    events: list[str] = field(default_factory=list)

    async def start_stream(self, facing: str) -> None:
        if self.deny:
            raise CameraPermissionError("permission denied")
        self.events.append(f"start:{facing}")

    async def capture_frame(self) -> bytes:
        if self.fail_capture:
            raise RuntimeError("capture failed")
        self.events.append("capture")
        return self.frame

    async def stop_stream(self) -> None:
        self.events.append("stop")


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key", seed_demo_data=False)


@pytest.fixture
def meal_store() -> MealStore:
    return MealStore(repository=InMemoryMealRepository(), tz=BANGKOK)


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def controller(
    meal_store: MealStore,
    vision_client: FakeVisionClient,
    chat_client: FakeChatClient,
) -> AppController:
    clock = fixed_clock()
    return AppController(
        state=AppState(selected_date=date(2024, 3, 15)),
        meal_store=meal_store,
        aggregator=DayAggregator(tz=BANGKOK),
        analysis_client=AnalysisClient(client=vision_client, model="test-model"),
        coach_client=CoachClient(client=chat_client, model="test-model"),
        hydration=HydrationTracker(clock=clock),
        clock=clock,
    )


@pytest.fixture
def container(settings: Settings, controller: AppController) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        meal_store=controller.meal_store,
        aggregator=controller.aggregator,
        analysis_client=controller.analysis_client,
        coach_client=controller.coach_client,
        hydration=controller.hydration,
        controller=controller,
        close_resources=close_resources,
    )
