"""Remote structured extraction of PDF chunks."""

from .client import GeminiStructuringClient, StructuringClient
from .orchestrator import ExtractionOrchestrator, extract_sections
from .prompts import EXTRACTION_INSTRUCTION, RESPONSE_SCHEMA

__all__ = [
    "StructuringClient",
    "GeminiStructuringClient",
    "ExtractionOrchestrator",
    "extract_sections",
    "EXTRACTION_INSTRUCTION",
    "RESPONSE_SCHEMA",
]
