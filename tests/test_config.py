from __future__ import annotations

import pytest

from smartpdf.config import DEFAULT_MODEL, Settings
from smartpdf.exceptions import ConfigurationError


def test_defaults() -> None:
    settings = Settings.from_env({})

    assert settings.api_key is None
    assert settings.model_name == DEFAULT_MODEL
    assert settings.chunk_size == 5
    assert settings.max_retries == 0
    assert settings.retry_backoff_seconds == 0.0
    assert settings.validate() == []


def test_from_env_reads_values() -> None:
    settings = Settings.from_env(
        {
            "GEMINI_API_KEY": "key-1",
            "SMARTPDF_MODEL": "gemini-test",
            "SMARTPDF_CHUNK_SIZE": "3",
            "SMARTPDF_MAX_RETRIES": "2",
            "SMARTPDF_RETRY_BACKOFF": "0.5",
            "SMARTPDF_TIMEOUT": "30",
            "SMARTPDF_LOG_LEVEL": "debug",
        }
    )

    assert settings == Settings(
        api_key="key-1",
        model_name="gemini-test",
        chunk_size=3,
        max_retries=2,
        retry_backoff_seconds=0.5,
        request_timeout=30.0,
        log_level="DEBUG",
    )


def test_api_key_fallback() -> None:
    assert Settings.from_env({"API_KEY": "fallback"}).api_key == "fallback"


def test_invalid_number_raises() -> None:
    with pytest.raises(ConfigurationError):
        Settings.from_env({"SMARTPDF_CHUNK_SIZE": "five"})


def test_validate_and_check() -> None:
    settings = Settings(chunk_size=0, max_retries=-1, request_timeout=0)

    assert len(settings.validate()) == 3
    with pytest.raises(ConfigurationError):
        settings.check()


def test_replace_ignores_none() -> None:
    settings = Settings(chunk_size=4).replace(chunk_size=None, model_name="other")

    assert settings.chunk_size == 4
    assert settings.model_name == "other"
