"""Request orchestration for the hosted generative service.

Five operations, each a single provider round trip with light reshaping:

    generate_image  prompt -> Image (JPEG)
    describe_image  Image  -> text
    suggest_edits   Image  -> list[EditSuggestion]
    write_story     Image  -> text
    apply_edit      Image + instruction -> Image (PNG)

There is no retry, caching or local timeout. Any failure, including a
response of the wrong shape, is logged and re-raised as ``OperationError``
carrying the one human-readable message for that operation.
"""
from __future__ import annotations

import logging
import re
from typing import Awaitable, TypeVar

from pydantic import ValidationError

from studio.models import JPEG, PNG, EditSuggestion, EditSuggestionList, Image
from studio.services.genai import GenerativeProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")

EMPTY_PROMPT = "Please enter a prompt to generate an image."
EMPTY_INSTRUCTION = "Please describe the edit you want to apply."
GENERATE_FAILED = "Failed to generate image. Please check your prompt or API key."
DESCRIBE_FAILED = "Failed to get image description."
SUGGEST_FAILED = "Failed to get edit suggestions."
STORY_FAILED = "Failed to generate a story from the image."
EDIT_FAILED = "Failed to apply the edit to the image."

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")


class OperationError(Exception):
    """Raised when an operation fails; ``message`` is shown to the user as-is."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def parse_suggestions(text: str) -> list[EditSuggestion]:
    """Strictly parse a suggestions response into typed records.

    Raises ``pydantic.ValidationError`` if the text is not a JSON array of
    objects with non-empty ``title`` and ``description``.
    """

    return EditSuggestionList.validate_json(_CODE_FENCE.sub("", text.strip()))


class Orchestrator:
    def __init__(self, provider: GenerativeProvider, *, suggestion_count: int = 3) -> None:
        self._provider = provider
        self._suggestion_count = suggestion_count

    async def generate_image(self, prompt: str) -> Image:
        prompt = prompt.strip()
        if not prompt:
            raise OperationError(EMPTY_PROMPT)
        artifacts = await self._call("Image generation", GENERATE_FAILED, self._provider.generate_images(prompt))
        return _single_image(artifacts, JPEG, GENERATE_FAILED)

    async def describe_image(self, image: Image) -> str:
        text = await self._call("Image description", DESCRIBE_FAILED, self._provider.describe_image(image))
        return _non_empty(text, DESCRIBE_FAILED)

    async def suggest_edits(self, image: Image) -> list[EditSuggestion]:
        raw = await self._call(
            "Edit suggestion",
            SUGGEST_FAILED,
            self._provider.suggest_edits(image, self._suggestion_count),
        )
        try:
            return parse_suggestions(raw)
        except ValidationError as exc:
            logger.error("Edit suggestions response did not match schema: %s", exc)
            raise OperationError(SUGGEST_FAILED) from exc

    async def write_story(self, image: Image) -> str:
        text = await self._call("Story generation", STORY_FAILED, self._provider.write_story(image))
        return _non_empty(text, STORY_FAILED)

    async def apply_edit(self, image: Image, instruction: str) -> Image:
        instruction = instruction.strip()
        if not instruction:
            raise OperationError(EMPTY_INSTRUCTION)
        artifacts = await self._call("Image edit", EDIT_FAILED, self._provider.edit_image(image, instruction))
        return _single_image(artifacts, PNG, EDIT_FAILED)

    @staticmethod
    async def _call(operation: str, message: str, call: Awaitable[T]) -> T:
        try:
            return await call
        except Exception as exc:
            logger.exception("%s failed: %s", operation, exc)
            raise OperationError(message) from exc


# ------------------------------------------------------------------
# Helper functions
# ------------------------------------------------------------------

def _single_image(artifacts: list[bytes], media_type: str, message: str) -> Image:
    # Exactly one artifact is expected; none or several is a failed call.
    if len(artifacts) != 1:
        logger.error("Expected one image artifact, got %d", len(artifacts))
        raise OperationError(message)
    return Image.from_bytes(artifacts[0], media_type)


def _non_empty(text: str | None, message: str) -> str:
    if not text or not text.strip():
        logger.error("Empty text response")
        raise OperationError(message)
    return text.strip()
