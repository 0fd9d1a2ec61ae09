"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from food_diary.api.models import (
    CoachRequest,
    ConfirmRequest,
    MealCreate,
    ScanRequest,
    SelectDateRequest,
    WaterGoalRequest,
    WaterRequest,
)
from food_diary.app_logging import configure_logging
from food_diary.containers import AppContainer
from food_diary.domain.analysis import FoodAnalysis
from food_diary.domain.chat import ChatMessage
from food_diary.domain.errors import (
    FoodDiaryError,
    InvalidDateError,
    InvalidMealError,
    InvalidWaterAmountError,
    NoPendingAnalysisError,
    ScanInProgressError,
)
from food_diary.domain.hydration import TimeSlot
from food_diary.domain.meals import Meal, MealGroup
from food_diary.domain.stats import CalendarDay, DayStat
from food_diary.services.controller import AppController
from food_diary.services.hydration import HydrationTracker
from food_diary.services.meals import new_meal

_UNPROCESSABLE = 422

_ERROR_STATUS: dict[type[FoodDiaryError], int] = {
    InvalidDateError: _UNPROCESSABLE,
    InvalidMealError: _UNPROCESSABLE,
    InvalidWaterAmountError: _UNPROCESSABLE,
    ScanInProgressError: status.HTTP_409_CONFLICT,
    NoPendingAnalysisError: status.HTTP_409_CONFLICT,
}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(FoodDiaryError)
    async def food_diary_error(request: Request, exc: FoodDiaryError) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    def controller(request: Request) -> AppController:
        return request.app.state.container.controller

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/meals")
    async def list_meals(
        request: Request, day: date | None = None
    ) -> dict[str, object]:
        """Return meals for a day, defaulting to the selected one."""
        ctrl = controller(request)
        selected = day or ctrl.state.selected_date
        meals = ctrl.meal_store.meals_for_date(selected)
        return {
            "day": selected.isoformat(),
            "total_calories": sum(meal.calories for meal in meals),
            "meals": [_meal_to_dict(meal) for meal in meals],
        }

    @app.get("/meals/grouped")
    async def grouped_meals(request: Request) -> dict[str, object]:
        """Return every meal grouped by day, latest day first."""
        groups = controller(request).meal_groups()
        return {"groups": [_group_to_dict(group) for group in groups]}

    @app.post("/meals", status_code=status.HTTP_201_CREATED)
    async def create_meal(payload: MealCreate, request: Request) -> dict[str, object]:
        """Log a meal without scanning."""
        ctrl = controller(request)
        meal = ctrl.add_meal(
            new_meal(
                meal_type=payload.type,
                food_name=payload.food_name,
                calories=payload.calories,
                image=payload.image,
                timestamp=payload.timestamp or ctrl.clock(),
                tags=payload.tags,
            )
        )
        return _meal_to_dict(meal)

    @app.get("/calendar")
    async def month_calendar(
        request: Request, month: date | None = None
    ) -> dict[str, object]:
        """Return the month grid with per-day status."""
        stats = controller(request).month_stats(month)
        return {"days": [_stat_to_dict(stat) for stat in stats]}

    @app.get("/calendar/strip")
    async def calendar_strip(request: Request) -> dict[str, object]:
        """Return the horizontal day strip around today."""
        days = controller(request).calendar_days()
        return {"days": [_calendar_day_to_dict(day) for day in days]}

    @app.post("/calendar/select")
    async def select_day(
        payload: SelectDateRequest, request: Request
    ) -> dict[str, object]:
        """Change the selected day."""
        ctrl = controller(request)
        ctrl.select_date(payload.day)
        return {"days": [_calendar_day_to_dict(day) for day in ctrl.calendar_days()]}

    @app.post("/scans")
    async def scan(payload: ScanRequest, request: Request) -> dict[str, object]:
        """Analyze a food photo."""
        analysis = await controller(request).submit_image(payload.image)
        if analysis is None:
            return {"status": "cancelled", "analysis": None}
        return {
            "status": analysis.status.value,
            "analysis": _analysis_to_dict(analysis),
        }

    @app.post("/scans/confirm", status_code=status.HTTP_201_CREATED)
    async def confirm_scan(
        payload: ConfirmRequest, request: Request
    ) -> dict[str, object]:
        """Save the analyzed meal to the diary."""
        meal = controller(request).confirm_meal(payload.meal_type)
        return _meal_to_dict(meal)

    @app.post("/scans/cancel")
    async def cancel_scan(request: Request) -> dict[str, str]:
        """Leave the scan flow."""
        ctrl = controller(request)
        ctrl.cancel_scan()
        return {"screen": ctrl.state.scan.screen.value}

    @app.get("/hydration")
    async def hydration(request: Request) -> dict[str, object]:
        """Return water intake and slots."""
        return _hydration_to_dict(controller(request).hydration)

    @app.post("/hydration/water")
    async def add_water(payload: WaterRequest, request: Request) -> dict[str, object]:
        """Record a drink."""
        ctrl = controller(request)
        ctrl.add_water(payload.amount_ml, payload.slot)
        return _hydration_to_dict(ctrl.hydration)

    @app.put("/hydration/goal")
    async def set_water_goal(
        payload: WaterGoalRequest, request: Request
    ) -> dict[str, object]:
        """Change the daily water goal."""
        ctrl = controller(request)
        ctrl.set_water_goal(payload.goal_ml)
        return _hydration_to_dict(ctrl.hydration)

    @app.get("/coach/messages")
    async def coach_messages(request: Request) -> dict[str, object]:
        """Return the coach transcript."""
        messages = controller(request).state.conversation.messages
        return {"messages": [_message_to_dict(message) for message in messages]}

    @app.post("/coach/messages")
    async def ask_coach(payload: CoachRequest, request: Request) -> dict[str, object]:
        """Send a message to the coach and return the reply."""
        reply = await controller(request).send_coach_message(payload.message)
        return {"reply": _message_to_dict(reply) if reply else None}

    return app


def _meal_to_dict(meal: Meal) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "type": meal.type,
        "food_name": meal.food_name,
        "calories": meal.calories,
        "image": meal.image,
        "timestamp": meal.timestamp.isoformat(),
        "tags": list(meal.tags),
    }


def _group_to_dict(group: MealGroup) -> dict[str, object]:
    return {
        "day": group.day.isoformat(),
        "total_calories": group.total_calories,
        "meals": [_meal_to_dict(meal) for meal in group.meals],
    }


def _stat_to_dict(stat: DayStat) -> dict[str, object]:
    return {
        "date": stat.date,
        "calories": stat.calories,
        "status": stat.status.value,
        "label": stat.label,
    }


def _calendar_day_to_dict(day: CalendarDay) -> dict[str, object]:
    return {
        "day": day.day,
        "date": day.date,
        "full_date": day.full_date.isoformat(),
        "is_active": day.is_active,
    }


def _analysis_to_dict(analysis: FoodAnalysis) -> dict[str, object]:
    return analysis.model_dump(by_alias=True)


def _slot_to_dict(slot: TimeSlot) -> dict[str, object]:
    return {
        "id": slot.id.value,
        "label": slot.label,
        "period": slot.period,
        "target": slot.target,
        "current": slot.current,
        "icon": slot.icon,
        "color": slot.color,
    }


def _hydration_to_dict(tracker: HydrationTracker) -> dict[str, object]:
    return {
        "current_ml": tracker.current_total(),
        "goal_ml": tracker.goal(),
        "fill_ratio": tracker.fill_ratio(),
        "slots": [_slot_to_dict(slot) for slot in tracker.slots()],
    }


def _message_to_dict(message: ChatMessage) -> dict[str, str]:
    return {"id": message.id, "text": message.text, "sender": message.sender.value}
