"""Public interface for the extraction payload adapter."""

from __future__ import annotations

from .schema import ExtractedContactInput, ExtractedContactPayload, ExtractionOutputPayload
from .translator import parse_extracted_contact, parse_extracted_contacts, parse_extraction_output

__all__ = [
    "ExtractedContactInput",
    "ExtractedContactPayload",
    "ExtractionOutputPayload",
    "parse_extracted_contact",
    "parse_extracted_contacts",
    "parse_extraction_output",
]
