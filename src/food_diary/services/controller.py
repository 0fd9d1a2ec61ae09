"""Application state and the actions that mutate it."""

import calendar
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum

from food_diary.domain.analysis import FoodAnalysis
from food_diary.domain.chat import ChatMessage, Sender
from food_diary.domain.errors import (
    CameraPermissionError,
    InvalidDateError,
    ScanInProgressError,
)
from food_diary.domain.hydration import SlotId, TimeSlot
from food_diary.domain.meals import SNACK, Meal, MealGroup
from food_diary.domain.stats import CalendarDay, DayStat
from food_diary.services.analysis import AnalysisClient, to_data_url
from food_diary.services.camera import Camera, frame_to_data_url, open_camera
from food_diary.services.coach import CoachClient, CoachConversation
from food_diary.services.hydration import HydrationTracker
from food_diary.services.meals import MealStore
from food_diary.services.scans import ScanSession, Screen
from food_diary.services.stats import DayAggregator, calendar_strip

logger = logging.getLogger(__name__)

CAMERA_DENIED_ALERT = "ไม่สามารถเข้าถึงกล้องได้ กรุณาตรวจสอบสิทธิ์การใช้งาน"
CHART_DAYS = 7


class Tab(str, Enum):
    """Bottom navigation tabs."""

    HOME = "home"
    ANALYTICS = "analytics"
    INSIGHTS = "insights"
    PROFILE = "profile"
    HYDRATION = "hydration"


class Overlay(str, Enum):
    """Modal layers shown on top of the main screen."""

    CAMERA = "camera"
    CALENDAR = "calendar"
    COACH = "coach"
    ACTION_SHEET = "action_sheet"


class CalendarView(str, Enum):
    """Layouts of the calendar overlay."""

    GRID = "grid"
    LIST = "list"


@dataclass
class AppState:
    """Everything the client shows that is not derived from stored meals."""

    selected_date: date
    active_tab: Tab = Tab.HOME
    overlays: set[Overlay] = field(default_factory=set)
    calendar_view: CalendarView = CalendarView.GRID
    scan: ScanSession = field(default_factory=ScanSession)
    conversation: CoachConversation = field(default_factory=CoachConversation)
    alert: str | None = None


@dataclass
class AppController:
    """Root controller; the only place application state changes."""

    state: AppState
    meal_store: MealStore
    aggregator: DayAggregator
    analysis_client: AnalysisClient
    coach_client: CoachClient
    hydration: HydrationTracker
    clock: Callable[[], datetime] = datetime.now

    def today(self) -> date:
        return self.clock().date()

    def select_date(self, day: date) -> None:
        """Make a day the one shown on the home feed."""
        self.state.selected_date = day

    def select_day_of_month(self, day_number: int) -> None:
        """Pick a day from the month grid and close the calendar."""
        selected = self.state.selected_date
        _, days_in_month = calendar.monthrange(selected.year, selected.month)
        if not 1 <= day_number <= days_in_month:
            raise InvalidDateError(f"Day {day_number} is not in {selected:%Y-%m}")
        self.state.selected_date = selected.replace(day=day_number)
        self.close_overlay(Overlay.CALENDAR)

    def select_tab(self, tab: Tab) -> None:
        self.state.active_tab = tab

    def open_overlay(self, overlay: Overlay) -> None:
        self.state.overlays.add(overlay)

    def close_overlay(self, overlay: Overlay) -> None:
        self.state.overlays.discard(overlay)

    def set_calendar_view(self, view: CalendarView) -> None:
        self.state.calendar_view = view

    def clear_alert(self) -> None:
        self.state.alert = None

    async def submit_image(self, image: bytes | str) -> FoodAnalysis | None:
        """Analyze a picked or captured image.

        Returns None when the scan was abandoned before the model answered.
        """
        self.close_overlay(Overlay.ACTION_SHEET)
        image_ref = to_data_url(image)
        token = self.state.scan.begin(image_ref)
        try:
            analysis = await self.analysis_client.analyze(image)
        except BaseException:
            self.state.scan.abandon(token)
            raise
        if not self.state.scan.complete(token, analysis):
            return None
        return analysis

    async def capture_photo(self, camera: Camera) -> FoodAnalysis | None:
        """Take a picture with the device camera and analyze it."""
        if self.state.scan.screen is not Screen.MAIN:
            raise ScanInProgressError("A scan is already in progress")
        self.close_overlay(Overlay.ACTION_SHEET)
        self.open_overlay(Overlay.CAMERA)
        try:
            async with open_camera(camera) as active:
                frame = await active.capture_frame()
        except CameraPermissionError:
            logger.warning("Camera access denied")
            self.state.alert = CAMERA_DENIED_ALERT
            return None
        finally:
            self.close_overlay(Overlay.CAMERA)
        return await self.submit_image(frame_to_data_url(frame))

    def confirm_meal(self, meal_type: str = SNACK) -> Meal:
        """Save the pending analysis to the diary on the selected day."""
        analysis, image = self.state.scan.confirm()
        selected = self.state.selected_date
        logged_at = self.clock().replace(
            year=selected.year, month=selected.month, day=selected.day
        )
        meal = self.meal_store.log_analysis(analysis, image, logged_at, meal_type)
        self.state.active_tab = Tab.HOME
        return meal

    def add_meal(self, meal: Meal) -> Meal:
        """Log a meal entered without a scan."""
        return self.meal_store.add_meal(meal)

    def cancel_scan(self) -> None:
        self.state.scan.back()

    def add_water(self, amount_ml: int, slot_id: SlotId | None = None) -> TimeSlot:
        return self.hydration.add_water(amount_ml, slot_id)

    def set_water_goal(self, goal_ml: int) -> None:
        self.hydration.set_goal(goal_ml)

    async def send_coach_message(self, text: str) -> ChatMessage | None:
        """Append the user's message and the coach's answer to the transcript."""
        if not text.strip():
            return None
        self.state.conversation.add(text, Sender.USER)
        reply = await self.coach_client.ask(text)
        return self.state.conversation.add(reply, Sender.COACH)

    def home_meals(self) -> list[Meal]:
        return self.meal_store.meals_for_date(self.state.selected_date)

    def calendar_days(self) -> list[CalendarDay]:
        return calendar_strip(self.today(), self.state.selected_date)

    def month_stats(self, month: date | None = None) -> list[DayStat]:
        return self.aggregator.month_stats(
            self.meal_store.all_meals(), month or self.state.selected_date
        )

    def meal_groups(self) -> list[MealGroup]:
        return self.meal_store.meals_grouped_by_date()

    def calorie_series(self, days: int = CHART_DAYS) -> list[int]:
        """Return daily calories for the chart, ending today."""
        start = self.today() - timedelta(days=days - 1)
        return self.aggregator.daily_calories(self.meal_store.all_meals(), start, days)
