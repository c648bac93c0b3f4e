"""Section model and validation of structured extraction responses.

Responses from the document-understanding service are validated with
pydantic at the boundary and converted into the immutable section variants
consumed by the assembler and the renderer.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ResponseFormatError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Heading:
    """A heading at ``level`` (1-3 are meaningful; others are normalised on render)."""

    text: str
    level: int = 1
    font_family: Optional[str] = None
    font_size: Optional[float] = None

    kind = "heading"


@dataclass(frozen=True)
class Paragraph:
    """A block of body text."""

    text: str
    font_family: Optional[str] = None
    font_size: Optional[float] = None

    kind = "paragraph"


@dataclass(frozen=True)
class BulletList:
    """An unordered list; each item becomes one bulleted paragraph."""

    items: Tuple[str, ...] = ()
    font_family: Optional[str] = None
    font_size: Optional[float] = None

    kind = "list"


Section = Union[Heading, Paragraph, BulletList]


class SectionPayload(BaseModel):
    """Wire representation of one section as returned by the service."""

    type: str
    level: Optional[int] = None
    text: str = ""
    items: List[str] = Field(default_factory=list)
    font_family: Optional[str] = Field(None, alias="fontFamily")
    font_size: Optional[float] = Field(None, alias="fontSize")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("type", mode="before")
    @classmethod
    def _normalise_type(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("section type must be a string")
        return value.strip().lower()

    @field_validator("level", mode="before")
    @classmethod
    def _coerce_level(cls, value: Any) -> Optional[int]:
        if value is None or isinstance(value, bool):
            return None
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return None

    @field_validator("text", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("items", mode="before")
    @classmethod
    def _coerce_items(cls, value: Any) -> List[str]:
        if not isinstance(value, (list, tuple)):
            return []
        return ["" if item is None else str(item) for item in value]

    @field_validator("font_family", mode="before")
    @classmethod
    def _coerce_font_family(cls, value: Any) -> Optional[str]:
        if not isinstance(value, str) or not value.strip():
            return None
        return value.strip()

    @field_validator("font_size", mode="before")
    @classmethod
    def _coerce_font_size(cls, value: Any) -> Optional[float]:
        if value is None or isinstance(value, bool):
            return None
        try:
            size = float(value)
        except (TypeError, ValueError):
            return None
        return size if math.isfinite(size) and size > 0 else None

    def to_section(self) -> Section:
        """Convert into a section variant; unknown types become paragraphs."""
        style = {"font_family": self.font_family, "font_size": self.font_size}
        if self.type == Heading.kind:
            return Heading(text=self.text, level=self.level if self.level is not None else 1, **style)
        if self.type == BulletList.kind:
            return BulletList(items=tuple(self.items), **style)
        if self.type != Paragraph.kind:
            LOGGER.debug("Coercing unknown section type %r to paragraph", self.type)
        return Paragraph(text=self.text, **style)


class ExtractionPayload(BaseModel):
    """Top-level JSON object returned for one chunk."""

    sections: List[SectionPayload]

    model_config = ConfigDict(extra="ignore")


def parse_extraction_response(text: str) -> List[Section]:
    """Parse a raw JSON response into ordered section variants.

    Raises:
        ResponseFormatError: if ``text`` is not JSON or does not match the schema.
    """
    if not text or not text.strip():
        raise ResponseFormatError("Extraction response was empty.")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ResponseFormatError(f"Extraction response is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ResponseFormatError("Extraction response must be a JSON object.")

    try:
        payload = ExtractionPayload.model_validate(data)
    except ValidationError as exc:
        raise ResponseFormatError(
            f"Extraction response does not match the section schema: {exc.error_count()} error(s)."
        ) from exc

    return [item.to_section() for item in payload.sections]


__all__ = [
    "Heading",
    "Paragraph",
    "BulletList",
    "Section",
    "SectionPayload",
    "ExtractionPayload",
    "parse_extraction_response",
]
