"""Scoped access to an external camera device."""

import base64
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol

logger = logging.getLogger(__name__)

REAR_CAMERA = "environment"


class Camera(Protocol):
    """Interface for a camera supplied by the client device."""

    async def start_stream(self, facing: str) -> None:
        """Acquire the camera; raise CameraPermissionError when refused."""

    async def capture_frame(self) -> bytes:
        """Return the current frame as JPEG bytes."""

    async def stop_stream(self) -> None:
        """Release the camera."""


@asynccontextmanager
async def open_camera(camera: Camera) -> AsyncIterator[Camera]:
    """Start the rear camera and stop it on every exit path."""
    await camera.start_stream(REAR_CAMERA)
    try:
        yield camera
    finally:
        await camera.stop_stream()
        logger.debug("Camera stream stopped")


def frame_to_data_url(frame: bytes) -> str:
    """Encode a captured JPEG frame as a data URL."""
    return "data:image/jpeg;base64," + base64.b64encode(frame).decode("utf-8")
