"""
Request and result types for the extraction pipeline.

A request pairs a SourceKind with exactly one source variant (a URL or an
uploaded payload); a result is either text or a per-sheet record collection.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from file_processor.core.errors import ErrorEnvelope, RequestError


class SourceKind(str, Enum):
    """Origin of a document; selects the extraction path."""
    WEB = "web"
    PDF = "pdf"
    WORD = "word"
    EXCEL = "excel"

    @property
    def is_binary(self) -> bool:
        return self is not SourceKind.WEB

    @classmethod
    def parse(cls, value: str) -> "SourceKind":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(kind.value for kind in cls)
            raise RequestError(
                f"Unknown source kind: {value!r}",
                details=f"Expected one of: {valid}"
            )


@dataclass(frozen=True)
class UrlSource:
    url: str


@dataclass(frozen=True)
class BinarySource:
    payload: bytes
    file_name: Optional[str] = None


Source = Union[UrlSource, BinarySource]


@dataclass(frozen=True)
class ExtractionRequest:
    """
    A single extraction call.

    The source variant must agree with the kind: web takes a UrlSource, every
    other kind takes a BinarySource.
    """
    kind: SourceKind
    source: Source

    @classmethod
    def for_url(cls, url: str) -> "ExtractionRequest":
        return cls(kind=SourceKind.WEB, source=UrlSource(url=url))

    @classmethod
    def for_upload(
        cls,
        kind: SourceKind,
        payload: bytes,
        file_name: Optional[str] = None
    ) -> "ExtractionRequest":
        return cls(kind=kind, source=BinarySource(payload=payload, file_name=file_name))

    def validate(self) -> None:
        """
        Check that the source variant matches the declared kind.

        Raises:
            RequestError: On a kind/source mismatch, a blank URL or an empty payload
        """
        if not isinstance(self.kind, SourceKind):
            raise RequestError(f"Unknown source kind: {self.kind!r}")

        if self.kind is SourceKind.WEB:
            if not isinstance(self.source, UrlSource):
                raise RequestError(
                    "Web extraction requires a URL, not an uploaded file.",
                    details=f"source={type(self.source).__name__}"
                )
            if not self.source.url or not self.source.url.strip():
                raise RequestError("Please provide a URL to scrape or process.")
            return

        if not isinstance(self.source, BinarySource):
            raise RequestError(
                f"{self.kind.value.upper()} extraction requires an uploaded file, not a URL.",
                details=f"source={type(self.source).__name__}"
            )
        if not self.source.payload:
            raise RequestError("Invalid file format or no file uploaded.")


CellValue = Union[str, int, float, bool]
Record = Dict[str, CellValue]


@dataclass
class TextResult:
    """Text-shaped result: sanitized HTML for web, plain text for PDF and Word."""
    text: str
    format: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return asdict(self)


@dataclass
class Sheet:
    sheet_name: str
    rows: List[Record] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"sheetName": self.sheet_name, "rows": self.rows}


@dataclass
class SheetCollection:
    """Workbook-shaped result: one Sheet per worksheet, in workbook order."""
    sheets: List[Sheet] = field(default_factory=list)

    @property
    def sheet_names(self) -> List[str]:
        return [sheet.sheet_name for sheet in self.sheets]

    def to_dict(self) -> List[dict]:
        return [sheet.to_dict() for sheet in self.sheets]


ExtractionResult = Union[TextResult, SheetCollection]
ExtractionOutcome = Union[TextResult, SheetCollection, ErrorEnvelope]

__all__ = [
    "SourceKind",
    "UrlSource",
    "BinarySource",
    "ExtractionRequest",
    "CellValue",
    "Record",
    "TextResult",
    "Sheet",
    "SheetCollection",
    "ExtractionResult",
    "ExtractionOutcome",
    "ErrorEnvelope",
]
