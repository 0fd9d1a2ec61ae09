"""Food photo analysis backed by a hosted vision model."""

import base64
import logging
import re
from dataclasses import dataclass
from typing import Protocol

from food_diary.domain.analysis import AnalysisStatus, FoodAnalysis, Macros

logger = logging.getLogger(__name__)

ANALYSIS_PROMPT = (
    "You are a nutrition expert. Analyze the food in this image.\n"
    "1. Identify the main food item (in Thai language).\n"
    "2. Estimate the total calories.\n"
    "3. Estimate the macronutrients (carbs, protein, fat) in grams.\n"
    "4. List 3-5 main ingredients (in Thai language).\n"
    "5. Provide a short, 1-sentence healthy suggestion or fun fact about this "
    "meal (in Thai language).\n"
    "6. Identify 1-2 short tags describing the meal (e.g. 'โปรตีนสูง', "
    "'แป้งน้อย', 'ผักเยอะ', 'น้ำตาลสูง', 'คลีน').\n"
    "Return the result in JSON format."
)

ANALYSIS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "foodName": {"type": "string"},
        "calories": {"type": "number"},
        "macros": {
            "type": "object",
            "properties": {
                "carbs": {"type": "number"},
                "protein": {"type": "number"},
                "fat": {"type": "number"},
            },
            "required": ["carbs", "protein", "fat"],
            "additionalProperties": False,
        },
        "ingredients": {"type": "array", "items": {"type": "string"}},
        "suggestion": {"type": "string"},
        "tags": {"type": "array", "items": {"type": "string"}},
    },
    "required": [
        "foodName",
        "calories",
        "macros",
        "ingredients",
        "suggestion",
        "tags",
    ],
    "additionalProperties": False,
}

_DATA_URL_PREFIX = re.compile(r"^data:(image/[\w.+-]+);base64,")


class VisionClient(Protocol):
    """Interface for structured image analysis by a hosted model."""

    async def analyze(  # noqa: PLR0913
        self,
        *,
        model: str,
        store: bool,
        image_base64: str,
        mime_type: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return the model's JSON reply for an image."""


@dataclass
class AnalysisClient:
    """Builds the analysis request and always resolves to a FoodAnalysis."""

    client: VisionClient
    model: str
    store: bool = False

    async def analyze(self, image: bytes | str) -> FoodAnalysis:
        """Estimate nutrition for an image, falling back on any failure."""
        try:
            image_base64, mime_type = _split_image(image)
            raw = await self.client.analyze(
                model=self.model,
                store=self.store,
                image_base64=image_base64,
                mime_type=mime_type,
                schema=ANALYSIS_SCHEMA,
                prompt=ANALYSIS_PROMPT,
            )
            analysis = FoodAnalysis.model_validate(raw)
        except Exception:
            logger.exception("Food analysis failed, returning fallback")
            return fallback_analysis()
        logger.info("Analyzed %s: %s kcal", analysis.food_name, analysis.calories)
        return analysis


def fallback_analysis() -> FoodAnalysis:
    """Return the fixed record shown when analysis is unavailable."""
    return FoodAnalysis(
        food_name="ไม่สามารถระบุได้",
        calories=0,
        macros=Macros(carbs=0, protein=0, fat=0),
        ingredients=["เกิดข้อผิดพลาดในการวิเคราะห์"],
        suggestion="กรุณาลองใหม่อีกครั้งด้วยภาพที่ชัดเจนขึ้น",
        tags=["ลองใหม่"],
        status=AnalysisStatus.FALLBACK,
    )


def to_data_url(image: bytes | str) -> str:
    """Convert bytes or base64 text to a data URL for display and storage."""
    encoded, mime_type = _split_image(image)
    return f"data:{mime_type};base64,{encoded}"


def _split_image(image: bytes | str) -> tuple[str, str]:
    """Return base64 payload without any data URL prefix, and its MIME type."""
    if isinstance(image, bytes):
        return base64.b64encode(image).decode("utf-8"), _detect_mime_type(image)
    match = _DATA_URL_PREFIX.match(image)
    if match:
        return image[match.end() :], match.group(1)
    return image, _sniff_base64(image)


def _sniff_base64(encoded: str) -> str:
    """Detect the MIME type from the first decoded bytes of base64 text."""
    try:
        head = base64.b64decode(encoded[:16])
    except ValueError:
        return "image/jpeg"
    return _detect_mime_type(head)


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
