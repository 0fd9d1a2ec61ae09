"""Domain models for hydration tracking."""

from dataclasses import dataclass
from datetime import time
from enum import Enum


class SlotId(str, Enum):
    """Fixed time-of-day hydration buckets."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


@dataclass(frozen=True)
class TimeSlot:
    """Hydration bucket with its target and consumed volume."""

    id: SlotId
    label: str
    starts_at: time
    ends_at: time
    target: int
    current: int
    icon: str
    color: str

    @property
    def period(self) -> str:
        return f"{self.starts_at:%H:%M} - {self.ends_at:%H:%M}"

    def contains(self, moment: time) -> bool:
        """Return True when the time of day falls inside this slot."""
        return self.starts_at <= moment < self.ends_at
