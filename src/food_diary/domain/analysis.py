"""Models for AI food analysis results."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AnalysisStatus(str, Enum):
    """Whether an analysis came from the model or the fallback record."""

    OK = "ok"
    FALLBACK = "fallback"


class Macros(BaseModel):
    """Macronutrients in grams."""

    model_config = ConfigDict(allow_inf_nan=False)

    carbs: float = Field(ge=0.0)
    protein: float = Field(ge=0.0)
    fat: float = Field(ge=0.0)


class FoodAnalysis(BaseModel):
    """Structured nutrition estimate for one food photo."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    food_name: str = Field(alias="foodName")
    calories: float = Field(ge=0.0)
    macros: Macros
    ingredients: list[str]
    suggestion: str
    tags: list[str]
    status: AnalysisStatus = Field(default=AnalysisStatus.OK, exclude=True)

    @property
    def is_fallback(self) -> bool:
        return self.status is AnalysisStatus.FALLBACK
