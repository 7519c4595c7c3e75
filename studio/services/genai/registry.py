from __future__ import annotations

from functools import lru_cache

from studio.config import get_settings

from .base import GenerativeProvider
from .gemini_provider import GeminiProvider

_PROVIDERS: dict[str, type[GenerativeProvider]] = {
    "gemini": GeminiProvider,
}


@lru_cache()
def get_provider() -> GenerativeProvider:
    settings = get_settings()
    provider_key = settings.genai_provider.lower()
    if provider_key not in _PROVIDERS:
        raise ValueError(f"Unsupported generative provider: {provider_key}")
    return _PROVIDERS[provider_key](settings)  # type: ignore[call-arg]
