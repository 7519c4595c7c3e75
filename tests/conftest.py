"""Pytest fixtures for studio tests."""

from __future__ import annotations

import asyncio
import io
import json
import os
from typing import Any

# Settings are read at import time by the application modules.
os.environ.setdefault("API_KEY", "test-key")

import pytest
from PIL import Image as PILImage

from studio.models import PNG, Image
from studio.services.controller import SessionController
from studio.services.genai import GenerativeProvider
from studio.services.orchestrator import Orchestrator
from studio.services.uploads import UploadIntake

SUGGESTIONS = [
    {"title": "Sunset Glow", "description": "Replace the sky with a warm orange sunset."},
    {"title": "Watercolor", "description": "Repaint the whole scene as a soft watercolor painting."},
    {"title": "Friendly Dragon", "description": "Add a small friendly dragon perched on the left."},
]


class FakeProvider(GenerativeProvider):
    """In-memory stand-in for the hosted service.

    Set ``error`` to make every call raise, or ``gate`` to hold calls until
    the event is set.
    """

    name = "fake"

    def __init__(self) -> None:
        self.images: list[bytes] = [b"\xff\xd8jpeg-bytes"]
        self.edited: list[bytes] = [b"\x89PNGedited-bytes"]
        self.description = "A red balloon floating above rooftops."
        self.story = "Once upon a time, a red balloon escaped."
        self.suggestions = json.dumps(SUGGESTIONS)
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.calls: list[tuple[Any, ...]] = []

    async def _respond(self, name: str, value: Any, *args: Any) -> Any:
        self.calls.append((name, *args))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return value

    async def generate_images(self, prompt: str) -> list[bytes]:
        return await self._respond("generate_images", list(self.images), prompt)

    async def describe_image(self, image: Image) -> str:
        return await self._respond("describe_image", self.description, image)

    async def suggest_edits(self, image: Image, count: int) -> str:
        return await self._respond("suggest_edits", self.suggestions, image, count)

    async def write_story(self, image: Image) -> str:
        return await self._respond("write_story", self.story, image)

    async def edit_image(self, image: Image, instruction: str) -> list[bytes]:
        return await self._respond("edit_image", list(self.edited), image, instruction)


def make_image_bytes(fmt: str = "PNG", size: tuple[int, int] = (8, 8), mode: str = "RGB") -> bytes:
    buffer = io.BytesIO()
    PILImage.new(mode, size, color=1 if mode == "P" else (200, 30, 30)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def orchestrator(provider: FakeProvider) -> Orchestrator:
    return Orchestrator(provider, suggestion_count=3)


@pytest.fixture
def intake() -> UploadIntake:
    return UploadIntake(max_bytes=1024 * 1024, max_dim=256, quality=85)


@pytest.fixture
def controller(orchestrator: Orchestrator, intake: UploadIntake) -> SessionController:
    return SessionController(orchestrator, intake)


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG")


@pytest.fixture
def sample_image(png_bytes: bytes) -> Image:
    return Image.from_bytes(png_bytes, PNG)
