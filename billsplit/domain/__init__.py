"""Core domain models for billsplit.

This module provides the data models used throughout the project:
- OcrFragment, Bounding: OCR collaborator input
- ExtractedFields, ParsedItem: heuristic pipeline output
- StructuredReceipt, StructuredItem, RemoteParseError: remote fallback output

Usage:
    from billsplit.domain import OcrFragment, ParsedItem
"""

from billsplit.domain.receipt import (
    Bounding,
    ExtractedFields,
    OcrFragment,
    ParsedItem,
    RemoteParseError,
    RemoteParseResult,
    RemoteParseStatus,
    StructuredItem,
    StructuredReceipt,
)

__all__ = [
    "Bounding",
    "ExtractedFields",
    "OcrFragment",
    "ParsedItem",
    "RemoteParseError",
    "RemoteParseResult",
    "RemoteParseStatus",
    "StructuredItem",
    "StructuredReceipt",
]
