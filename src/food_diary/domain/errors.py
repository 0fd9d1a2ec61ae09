"""Domain errors."""


class FoodDiaryError(Exception):
    """Base class for food diary errors."""


class InvalidMealError(FoodDiaryError):
    """Raised when a meal violates a data invariant."""


class InvalidWaterAmountError(FoodDiaryError):
    """Raised when a hydration amount or goal is not acceptable."""


class ScanInProgressError(FoodDiaryError):
    """Raised when a scan is requested while another one is outstanding."""


class NoPendingAnalysisError(FoodDiaryError):
    """Raised when confirming a scan that has no result yet."""


class CameraPermissionError(FoodDiaryError):
    """Raised when the camera device refuses access."""


class InvalidDateError(FoodDiaryError):
    """Raised when a day number does not exist in the selected month."""
