"""Clients for the remote document-understanding service."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import google.generativeai as genai

from ..exceptions import ConfigurationError, ResponseFormatError
from .prompts import PDF_MIME_TYPE, RESPONSE_SCHEMA

LOGGER = logging.getLogger(__name__)


class StructuringClient(Protocol):
    """Turns one PDF chunk into the raw JSON text of a ``{"sections": [...]}`` object."""

    def generate(self, payload: bytes, *, instruction: str, mime_type: str = PDF_MIME_TYPE) -> str:
        """Send ``payload`` with ``instruction`` and return the response text."""


class GeminiStructuringClient:
    """:class:`StructuringClient` backed by the Gemini API."""

    def __init__(
        self,
        api_key: Optional[str],
        model_name: str,
        *,
        request_timeout: Optional[float] = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError(
                "A Gemini API key is required. Set GEMINI_API_KEY or pass --api-key."
            )
        self.model_name = model_name
        self.request_timeout = request_timeout

        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(
            model_name,
            generation_config=genai.GenerationConfig(
                response_mime_type="application/json",
                response_schema=RESPONSE_SCHEMA,
            ),
        )
        LOGGER.info("Gemini client initialised with model %s", model_name)

    def generate(self, payload: bytes, *, instruction: str, mime_type: str = PDF_MIME_TYPE) -> str:
        request_options = {"timeout": self.request_timeout} if self.request_timeout else None
        response = self.model.generate_content(
            [{"mime_type": mime_type, "data": payload}, instruction],
            request_options=request_options,
        )
        try:
            text = response.text
        except ValueError as exc:
            # Raised by the SDK when the candidate was blocked or has no parts.
            raise ResponseFormatError(f"Model returned no usable content: {exc}") from exc
        if not text:
            raise ResponseFormatError("Model returned an empty response.")
        return text
