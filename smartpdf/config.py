"""Runtime settings loaded from the environment or a ``.env`` file."""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, TypeVar

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .segmenter import DEFAULT_CHUNK_SIZE

T = TypeVar("T")

DEFAULT_MODEL = "gemini-2.5-flash"


def _read(env: Mapping[str, str], name: str, cast: Callable[[str], T], default: T) -> T:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"{name} has an invalid value: {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    """Options controlling PDF to Word conversion."""

    api_key: Optional[str] = None
    model_name: str = DEFAULT_MODEL
    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_retries: int = 0
    retry_backoff_seconds: float = 0.0
    request_timeout: float = 120.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``env`` (defaults to ``os.environ`` after loading ``.env``)."""
        if env is None:
            load_dotenv()
            env = os.environ

        return cls(
            api_key=env.get("GEMINI_API_KEY") or env.get("API_KEY") or None,
            model_name=_read(env, "SMARTPDF_MODEL", str, DEFAULT_MODEL),
            chunk_size=_read(env, "SMARTPDF_CHUNK_SIZE", int, DEFAULT_CHUNK_SIZE),
            max_retries=_read(env, "SMARTPDF_MAX_RETRIES", int, 0),
            retry_backoff_seconds=_read(env, "SMARTPDF_RETRY_BACKOFF", float, 0.0),
            request_timeout=_read(env, "SMARTPDF_TIMEOUT", float, 120.0),
            log_level=_read(env, "SMARTPDF_LOG_LEVEL", str, "INFO").upper(),
        )

    def replace(self, **changes: object) -> "Settings":
        """Return a copy with ``changes`` applied, ignoring ``None`` values."""
        return dataclasses.replace(self, **{key: value for key, value in changes.items() if value is not None})

    def validate(self) -> List[str]:
        errors: List[str] = []
        if self.chunk_size < 1:
            errors.append(f"chunk_size must be >= 1, got {self.chunk_size}")
        if self.max_retries < 0:
            errors.append(f"max_retries must be >= 0, got {self.max_retries}")
        if self.retry_backoff_seconds < 0:
            errors.append(f"retry_backoff_seconds must be >= 0, got {self.retry_backoff_seconds}")
        if self.request_timeout <= 0:
            errors.append(f"request_timeout must be > 0, got {self.request_timeout}")
        if not self.model_name:
            errors.append("model_name must not be empty")
        return errors

    def check(self) -> "Settings":
        errors = self.validate()
        if errors:
            raise ConfigurationError("Invalid settings: " + "; ".join(errors))
        return self


__all__ = ["DEFAULT_MODEL", "Settings"]
