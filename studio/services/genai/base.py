from __future__ import annotations

from abc import ABC, abstractmethod

from studio.models import Image


class GenerativeProvider(ABC):
    """Abstract interface for a hosted generative-AI provider.

    Each method is one remote round trip. Implementations return the raw
    artifacts (image bytes or response text) and let exceptions propagate;
    shaping and error normalization happen in the orchestrator.
    """

    name: str = "abstract"

    @abstractmethod
    async def generate_images(self, prompt: str) -> list[bytes]:
        """Return the image artifacts produced for *prompt* (JPEG bytes)."""

    @abstractmethod
    async def describe_image(self, image: Image) -> str:
        ...

    @abstractmethod
    async def suggest_edits(self, image: Image, count: int) -> str:
        """Return the raw JSON text of the suggestions response."""

    @abstractmethod
    async def write_story(self, image: Image) -> str:
        ...

    @abstractmethod
    async def edit_image(self, image: Image, instruction: str) -> list[bytes]:
        """Return every image part of the edit response (PNG bytes)."""
