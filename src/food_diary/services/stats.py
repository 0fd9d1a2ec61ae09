"""Day aggregation for the calendar grid, strip and charts."""

import calendar
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from zoneinfo import ZoneInfo

from food_diary.domain.meals import Meal
from food_diary.domain.stats import CalendarDay, DayStat, DayStatus
from food_diary.services.meals import local_day

THAI_WEEKDAYS = ("จ", "อ", "พ", "พฤ", "ศ", "ส", "อา")
STRIP_BEFORE = 2
STRIP_AFTER = 3


@dataclass
class DayAggregator:
    """Derives per-day summaries from a meal collection.

    Every method is a pure function of its arguments and the configured
    thresholds; nothing is cached between calls.
    """

    goal: int = 2000
    tolerance: int = 200
    tz: ZoneInfo | None = None

    def month_stats(
        self, meals: Iterable[Meal], evaluation_date: date
    ) -> list[DayStat]:
        """Return one stat per day of the evaluation date's month."""
        totals = self._daily_totals(meals)
        _, days_in_month = calendar.monthrange(
            evaluation_date.year, evaluation_date.month
        )
        stats = []
        for day_number in range(1, days_in_month + 1):
            day = evaluation_date.replace(day=day_number)
            calories = totals.get(day)
            stats.append(
                DayStat(
                    date=day_number,
                    calories=calories or 0,
                    status=classify_day(
                        calories or 0,
                        has_meals=calories is not None,
                        goal=self.goal,
                        tolerance=self.tolerance,
                    ),
                )
            )
        return stats

    def daily_calories(
        self, meals: Iterable[Meal], start: date, days: int
    ) -> list[int]:
        """Return calorie totals for consecutive days starting at start."""
        totals = self._daily_totals(meals)
        return [
            totals.get(start + timedelta(days=offset), 0) for offset in range(days)
        ]

    def _daily_totals(self, meals: Iterable[Meal]) -> dict[date, int]:
        totals: dict[date, int] = {}
        for meal in meals:
            day = local_day(meal.timestamp, self.tz)
            totals[day] = totals.get(day, 0) + meal.calories
        return totals


def classify_day(
    calories: int, *, has_meals: bool, goal: int, tolerance: int
) -> DayStatus:
    """Bucket a day's calorie total against the goal band."""
    if not has_meals:
        return DayStatus.NONE
    if calories < goal - tolerance:
        return DayStatus.GOOD
    if calories > goal + tolerance:
        return DayStatus.BAD
    return DayStatus.OK


def calendar_strip(today: date, selected: date) -> list[CalendarDay]:
    """Return the horizontal strip from two days before to three after today."""
    days = []
    for offset in range(-STRIP_BEFORE, STRIP_AFTER + 1):
        day = today + timedelta(days=offset)
        days.append(
            CalendarDay(
                day=THAI_WEEKDAYS[day.weekday()],
                date=day.day,
                full_date=day,
                is_active=day == selected,
            )
        )
    return days
