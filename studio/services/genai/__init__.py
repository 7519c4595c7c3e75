from .base import GenerativeProvider
from .registry import get_provider

__all__ = [
    "GenerativeProvider",
    "get_provider",
]
