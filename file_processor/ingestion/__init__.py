"""
Document extraction module with dispatcher pattern.
Supports: web pages (sanitized HTML), PDF, Word (DOCX), Excel (XLSX/XLS)
"""

from .dispatcher import ExtractionOrchestrator, detect_source_kind, get_supported_formats
from .models import (
    ErrorEnvelope,
    ExtractionRequest,
    Sheet,
    SheetCollection,
    SourceKind,
    TextResult,
)
from .sanitizer import sanitize_html

__all__ = [
    "ExtractionOrchestrator",
    "detect_source_kind",
    "get_supported_formats",
    "ErrorEnvelope",
    "ExtractionRequest",
    "Sheet",
    "SheetCollection",
    "SourceKind",
    "TextResult",
    "sanitize_html"
]
