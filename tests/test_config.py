"""Tests for settings loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from studio.config import Settings


def test_missing_api_key_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("API_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_KEY", "secret")
    settings = Settings(_env_file=None)
    assert settings.api_key == "secret"
    assert settings.image_model == "imagen-4.0-generate-001"
    assert settings.edit_model == "gemini-2.5-flash-image"
    assert settings.suggestion_count == 3
    assert settings.genai_max_retries == 0


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_KEY", "secret")
    monkeypatch.setenv("DESCRIBE_MODEL", "gemini-2.5-flash-lite")
    monkeypatch.setenv("MAX_SESSIONS", "5")
    settings = Settings(_env_file=None)
    assert settings.describe_model == "gemini-2.5-flash-lite"
    assert settings.max_sessions == 5
