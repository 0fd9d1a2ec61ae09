"""Domain models for the coach chat."""

from dataclasses import dataclass
from enum import Enum


class Sender(str, Enum):
    """Author of a chat message."""

    USER = "user"
    COACH = "coach"


class ReplyStatus(str, Enum):
    """Outcome of a coach request."""

    OK = "ok"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class ChatMessage:
    """Single message in the coach transcript."""

    id: str
    text: str
    sender: Sender


@dataclass(frozen=True)
class CoachReply:
    """Coach answer text with its outcome."""

    text: str
    status: ReplyStatus
