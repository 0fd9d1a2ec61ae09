"""Tests for hydration tracking."""

from datetime import datetime, time

import pytest

from food_diary.domain.errors import InvalidWaterAmountError
from food_diary.domain.hydration import SlotId
from food_diary.services.hydration import HydrationTracker
from tests.conftest import fixed_clock


def _slot(tracker: HydrationTracker, slot_id: SlotId) -> int:
    return next(slot.current for slot in tracker.slots() if slot.id is slot_id)


@pytest.mark.parametrize(("first", "second"), [(0, 0), (250, 500), (1000, 3000)])
def test_add_water_accumulates_in_afternoon(first: int, second: int) -> None:
    tracker = HydrationTracker(clock=fixed_clock(datetime(2024, 3, 15, 14)))

    tracker.add_water(first)
    tracker.add_water(second)

    assert tracker.current_total() == first + second
    assert _slot(tracker, SlotId.AFTERNOON) == first + second
    assert _slot(tracker, SlotId.MORNING) == 0


def test_ring_fill_for_750_of_2500() -> None:
    clock = fixed_clock(datetime(2024, 3, 15, 12))
    tracker = HydrationTracker(goal_ml=2500, clock=clock)

    tracker.add_water(250)
    tracker.add_water(500)

    assert tracker.current_total() == 750
    assert tracker.fill_ratio() == pytest.approx(0.3)


def test_total_can_exceed_goal() -> None:
    tracker = HydrationTracker(goal_ml=500)

    tracker.add_water(800, SlotId.EVENING)

    assert tracker.current_total() == 800
    assert tracker.fill_ratio() == 1.0


def test_explicit_slot_overrides_clock() -> None:
    tracker = HydrationTracker(clock=fixed_clock(datetime(2024, 3, 15, 14)))

    slot = tracker.add_water(300, SlotId.MORNING)

    assert slot.id is SlotId.MORNING
    assert _slot(tracker, SlotId.MORNING) == 300


@pytest.mark.parametrize(
    ("moment", "expected"),
    [
        (time(3), SlotId.MORNING),
        (time(6), SlotId.MORNING),
        (time(11), SlotId.AFTERNOON),
        (time(16, 59), SlotId.AFTERNOON),
        (time(17), SlotId.EVENING),
        (time(23, 30), SlotId.EVENING),
    ],
)
def test_slot_for_time_of_day(moment: time, expected: SlotId) -> None:
    assert HydrationTracker().slot_for(moment) is expected


def test_negative_amount_rejected() -> None:
    tracker = HydrationTracker()

    with pytest.raises(InvalidWaterAmountError):
        tracker.add_water(-100)

    assert tracker.current_total() == 0


def test_set_goal() -> None:
    tracker = HydrationTracker()

    tracker.set_goal(3000)

    assert tracker.goal() == 3000
    with pytest.raises(InvalidWaterAmountError):
        tracker.set_goal(0)


@pytest.mark.parametrize("goal_ml", [0, -500])
def test_non_positive_goal_rejected_on_construction(goal_ml: int) -> None:
    with pytest.raises(InvalidWaterAmountError):
        HydrationTracker(goal_ml=goal_ml)


def test_default_slots_match_reference_targets() -> None:
    slots = HydrationTracker().slots()

    assert [slot.target for slot in slots] == [1000, 1000, 500]
    assert slots[0].period == "06:00 - 11:00"
