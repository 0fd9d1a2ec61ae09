"""Domain models for day statistics and the calendar."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class DayStatus(str, Enum):
    """Qualitative bucket for a day's calorie total."""

    GOOD = "good"
    OK = "ok"
    BAD = "bad"
    NONE = "none"


@dataclass(frozen=True)
class DayStat:
    """Calorie summary for one day of the month grid."""

    date: int
    calories: int
    status: DayStatus

    @property
    def label(self) -> str:
        """Calorie label shown under the day, empty for days without data."""
        if self.status is DayStatus.NONE:
            return ""
        return str(self.calories)


@dataclass(frozen=True)
class CalendarDay:
    """Entry of the horizontal calendar strip."""

    day: str
    date: int
    full_date: date
    is_active: bool
