"""Hydration tracking against a daily goal."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime, time

from food_diary.domain.errors import InvalidWaterAmountError
from food_diary.domain.hydration import SlotId, TimeSlot

logger = logging.getLogger(__name__)


def default_time_slots() -> list[TimeSlot]:
    """Return the morning, afternoon and evening buckets."""
    return [
        TimeSlot(
            id=SlotId.MORNING,
            label="เช้า",
            starts_at=time(6),
            ends_at=time(11),
            target=1000,
            current=0,
            icon="🌅",
            color="bg-orange-50 text-orange-500",
        ),
        TimeSlot(
            id=SlotId.AFTERNOON,
            label="บ่าย",
            starts_at=time(11),
            ends_at=time(17),
            target=1000,
            current=0,
            icon="☀️",
            color="bg-yellow-50 text-yellow-500",
        ),
        TimeSlot(
            id=SlotId.EVENING,
            label="เย็น",
            starts_at=time(17),
            ends_at=time(22),
            target=500,
            current=0,
            icon="🌙",
            color="bg-indigo-50 text-indigo-500",
        ),
    ]


@dataclass
class HydrationTracker:
    """Accumulates water intake and spreads it over time-of-day slots."""

    goal_ml: int = 2500
    total_ml: int = 0
    time_slots: list[TimeSlot] = field(default_factory=default_time_slots)
    clock: Callable[[], datetime] = datetime.now

    def __post_init__(self) -> None:
        _check_goal(self.goal_ml)

    def add_water(self, amount_ml: int, slot_id: SlotId | None = None) -> TimeSlot:
        """Record a drink and return the slot it was credited to."""
        if amount_ml < 0:
            raise InvalidWaterAmountError(
                f"Water amount must be non-negative, got {amount_ml}"
            )
        target_id = slot_id or self.slot_for(self.clock().time())
        self.total_ml += amount_ml
        for index, slot in enumerate(self.time_slots):
            if slot.id is target_id:
                updated = replace(slot, current=slot.current + amount_ml)
                self.time_slots[index] = updated
                break
        else:
            raise InvalidWaterAmountError(f"Unknown hydration slot {target_id}")
        logger.info("Added %s ml to %s slot", amount_ml, target_id.value)
        return updated

    def slot_for(self, moment: time) -> SlotId:
        """Return the slot whose window contains the given time of day."""
        for slot in self.time_slots:
            if slot.contains(moment):
                return slot.id
        first = min(self.time_slots, key=lambda slot: slot.starts_at)
        if moment < first.starts_at:
            return first.id
        return max(self.time_slots, key=lambda slot: slot.ends_at).id

    def current_total(self) -> int:
        return self.total_ml

    def goal(self) -> int:
        return self.goal_ml

    def set_goal(self, goal_ml: int) -> None:
        """Change the daily goal."""
        _check_goal(goal_ml)
        self.goal_ml = goal_ml

    def fill_ratio(self) -> float:
        """Return progress towards the goal, clipped to 1.0 for display."""
        return min(self.total_ml / self.goal_ml, 1.0)

    def slots(self) -> list[TimeSlot]:
        return list(self.time_slots)


def _check_goal(goal_ml: int) -> None:
    if goal_ml <= 0:
        raise InvalidWaterAmountError(f"Water goal must be positive, got {goal_ml}")
