"""Scan screen state machine."""

import logging
from dataclasses import dataclass
from enum import Enum

from food_diary.domain.analysis import FoodAnalysis
from food_diary.domain.errors import NoPendingAnalysisError, ScanInProgressError

logger = logging.getLogger(__name__)


class Screen(str, Enum):
    """Screens of the scan flow."""

    MAIN = "main"
    SCANNING = "scanning"
    RESULT = "result"


@dataclass
class ScanSession:
    """Tracks main -> scanning -> result -> main for one device.

    Each scan gets a request token. Backing out invalidates the token so a
    response that arrives later is dropped instead of overwriting newer state.
    """

    screen: Screen = Screen.MAIN
    image: str | None = None
    analysis: FoodAnalysis | None = None
    _token: int = 0

    def begin(self, image: str) -> int:
        """Start scanning an image and return the request token."""
        if self.screen is not Screen.MAIN:
            raise ScanInProgressError(f"Cannot start a scan while {self.screen.value}")
        self._token += 1
        self.screen = Screen.SCANNING
        self.image = image
        self.analysis = None
        return self._token

    def complete(self, token: int, analysis: FoodAnalysis) -> bool:
        """Apply an analysis result; return False when the token is stale."""
        if token != self._token or self.screen is not Screen.SCANNING:
            logger.info("Dropping stale analysis for scan %s", token)
            return False
        self.analysis = analysis
        self.screen = Screen.RESULT
        return True

    def confirm(self) -> tuple[FoodAnalysis, str]:
        """Take the pending result and return to the main screen."""
        if self.screen is not Screen.RESULT or self.analysis is None:
            raise NoPendingAnalysisError("There is no analysis to confirm")
        analysis, image = self.analysis, self.image or ""
        self._reset()
        return analysis, image

    def abandon(self, token: int) -> None:
        """Leave a scan whose request failed, unless it was already superseded."""
        if token == self._token and self.screen is Screen.SCANNING:
            self.back()

    def back(self) -> None:
        """Return to the main screen, invalidating any outstanding scan."""
        if self.screen is Screen.SCANNING:
            self._token += 1
        self._reset()

    def _reset(self) -> None:
        self.screen = Screen.MAIN
        self.image = None
        self.analysis = None
