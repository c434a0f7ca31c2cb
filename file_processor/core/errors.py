"""
Error taxonomy for the extraction pipeline.

Every failure an extractor can raise derives from ExtractionError and carries a
stable ``kind`` that is surfaced to callers through the ErrorEnvelope.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ErrorEnvelope:
    """Well-formed failure returned to callers instead of an extraction result."""
    kind: str
    message: str
    details: Optional[str] = None


class ExtractionError(Exception):
    """Structured extraction error with a kind, a message and optional details."""

    kind = "ExtractionError"

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_envelope(self) -> ErrorEnvelope:
        return ErrorEnvelope(kind=self.kind, message=self.message, details=self.details)


class RequestError(ExtractionError):
    """Bad or missing input, detected before any extractor runs."""
    kind = "RequestError"


class FetchError(ExtractionError):
    """Network or HTTP failure while fetching a remote page."""
    kind = "FetchError"


class PdfParseError(ExtractionError):
    kind = "PdfParseError"


class WordParseError(ExtractionError):
    kind = "WordParseError"


class ExcelParseError(ExtractionError):
    kind = "ExcelParseError"


class IoError(ExtractionError):
    """Transient file could not be written or removed."""
    kind = "IoError"


class ExtractionTimeoutError(ExtractionError):
    """A fetch or parse step exceeded its time budget."""
    kind = "TimeoutError"

