"""Fixed instruction and response schema sent with every chunk."""

from __future__ import annotations

from typing import Any, Dict

EXTRACTION_INSTRUCTION = (
    "Act as a professional document conversion specialist. Analyze this document "
    "segment and extract ALL text content while preserving the original layout "
    "structure and visual fidelity.\n"
    "\n"
    "Requirements:\n"
    "1. Maintain headings, lists, and paragraphs exactly as they appear.\n"
    "2. IDENTIFY THE FONT: For each section, identify the dominant font family "
    "(e.g., Arial, Times New Roman, Calibri, Georgia) and the font size in points "
    "(e.g., 10, 12, 14.5).\n"
    "3. Do not summarize; extract the full content.\n"
    "4. Output ONLY strictly valid JSON matching the schema."
)

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "sections": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "type": {
                        "type": "STRING",
                        "description": "One of 'heading', 'paragraph', 'list'",
                    },
                    "level": {"type": "NUMBER", "description": "Heading level (1-3)"},
                    "text": {"type": "STRING"},
                    "items": {"type": "ARRAY", "items": {"type": "STRING"}},
                    "fontFamily": {
                        "type": "STRING",
                        "description": "The closest standard font family name",
                    },
                    "fontSize": {"type": "NUMBER", "description": "The font size in points"},
                },
                "required": ["type"],
            },
        },
    },
    "required": ["sections"],
}

PDF_MIME_TYPE = "application/pdf"
