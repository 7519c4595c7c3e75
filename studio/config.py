from __future__ import annotations

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from a .env file if present (local dev only)
load_dotenv()


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Generative service
    api_key: str = Field(..., description="Credential for the hosted generative-AI service.")
    genai_provider: str = Field("gemini", description="Key of the provider in the registry.")

    # Models
    image_model: str = Field("imagen-4.0-generate-001")
    image_aspect_ratio: str = Field("1:1")
    describe_model: str = Field("gemini-2.5-flash")
    suggest_model: str = Field("gemini-2.5-pro")
    story_model: str = Field("gemini-2.5-pro")
    edit_model: str = Field("gemini-2.5-flash-image")
    genai_max_retries: int = Field(0, ge=0, description="Retries performed by the chat client; 0 means single-shot.")

    suggestion_count: int = Field(3, ge=1, le=10)

    # Uploads
    upload_max_bytes: int = Field(10 * 1024 * 1024, ge=1, description="Largest accepted upload (bytes).")
    upload_max_dim: int = Field(2048, ge=64, description="Uploads larger than this (pixels) are downsized.")
    upload_quality: int = Field(90, ge=1, le=100, description="JPEG quality used when re-encoding uploads.")

    # Sessions
    max_sessions: int = Field(100, ge=1)
    session_cookie: str = Field("studio_session")

    log_level: str = Field("INFO")


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    """Return a cached Settings instance so it is only parsed once."""

    return Settings()
