from __future__ import annotations

import logging
from typing import Any

from google import genai
from google.genai import types
from langchain_core.messages import HumanMessage
from langchain_core.output_parsers import StrOutputParser
from langchain_google_genai import ChatGoogleGenerativeAI

from studio.config import Settings
from studio.models import JPEG, Image

from .base import GenerativeProvider
from .prompts import DESCRIBE_PROMPT, STORY_PROMPT, SUGGEST_PROMPT

logger = logging.getLogger(__name__)


class GeminiProvider(GenerativeProvider):
    """Gemini chat models for analyses, Imagen and Gemini image models for pixels."""

    name = "gemini"

    def __init__(self, settings: Settings, *, client: genai.Client | None = None) -> None:
        self._settings = settings
        self._client = client or genai.Client(api_key=settings.api_key)
        self._describe_llm = self._chat_model(settings.describe_model)
        self._story_llm = self._chat_model(settings.story_model)
        self._suggest_llm = self._chat_model(settings.suggest_model, response_mime_type="application/json")

    def _chat_model(self, model: str, **kwargs: Any) -> ChatGoogleGenerativeAI:
        return ChatGoogleGenerativeAI(
            model=model,
            google_api_key=self._settings.api_key,
            max_retries=self._settings.genai_max_retries,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Text analyses
    # ------------------------------------------------------------------

    async def describe_image(self, image: Image) -> str:
        return await self._ask(self._describe_llm, image, DESCRIBE_PROMPT)

    async def suggest_edits(self, image: Image, count: int) -> str:
        return await self._ask(self._suggest_llm, image, SUGGEST_PROMPT.format(count=count))

    async def write_story(self, image: Image) -> str:
        return await self._ask(self._story_llm, image, STORY_PROMPT)

    async def _ask(self, llm: ChatGoogleGenerativeAI, image: Image, prompt: str) -> str:
        message = HumanMessage(
            content=[
                {"type": "image_url", "image_url": image.display_url},
                {"type": "text", "text": prompt},
            ]
        )
        chain = llm | StrOutputParser()
        logger.debug("Chat request (%s): %s", image.media_type, prompt)
        return await chain.ainvoke([message])

    # ------------------------------------------------------------------
    # Image artifacts
    # ------------------------------------------------------------------

    async def generate_images(self, prompt: str) -> list[bytes]:
        logger.debug("Image generation request with model %s", self._settings.image_model)
        response = await self._client.aio.models.generate_images(
            model=self._settings.image_model,
            prompt=prompt,
            config=types.GenerateImagesConfig(
                number_of_images=1,
                output_mime_type=JPEG,
                aspect_ratio=self._settings.image_aspect_ratio,
            ),
        )
        generated = response.generated_images or []
        return [g.image.image_bytes for g in generated if g.image is not None and g.image.image_bytes]

    async def edit_image(self, image: Image, instruction: str) -> list[bytes]:
        logger.debug("Image edit request with model %s", self._settings.edit_model)
        response = await self._client.aio.models.generate_content(
            model=self._settings.edit_model,
            contents=[
                types.Part.from_bytes(data=image.to_bytes(), mime_type=image.media_type),
                types.Part.from_text(text=instruction),
            ],
            config=types.GenerateContentConfig(response_modalities=[types.Modality.IMAGE]),
        )
        if not response.candidates:
            return []
        content = response.candidates[0].content
        parts = content.parts if content is not None and content.parts else []
        return [part.inline_data.data for part in parts if part.inline_data is not None and part.inline_data.data]
