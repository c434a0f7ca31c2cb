"""
Extraction dispatcher - routes a request to the extractor for its source kind.

The orchestrator is the error boundary of the pipeline: whatever the selected
path raises comes back to the caller as an ErrorEnvelope.
"""

import asyncio
import logging
import time
from pathlib import Path
from typing import Dict, List, Optional, Union

from file_processor.core.config import settings
from file_processor.core.errors import ErrorEnvelope, ExtractionError, RequestError
from .fetcher import fetch_html
from .models import (
    BinarySource,
    ExtractionOutcome,
    ExtractionRequest,
    ExtractionResult,
    SourceKind,
    TextResult,
)
from .parser_docx import parse_docx
from .parser_excel import parse_excel
from .parser_pdf import parse_pdf
from .sanitizer import sanitize_html

# File extension to source kind mapping
EXTENSION_MAP = {
    '.pdf': SourceKind.PDF,
    '.doc': SourceKind.WORD,
    '.docx': SourceKind.WORD,
    '.xls': SourceKind.EXCEL,
    '.xlsx': SourceKind.EXCEL
}

# Canonical output shape per source kind
OUTPUT_SHAPES = {
    SourceKind.WEB: "sanitized_html",
    SourceKind.PDF: "text",
    SourceKind.WORD: "text",
    SourceKind.EXCEL: "sheet_collection"
}


def detect_source_kind(file_name: str) -> SourceKind:
    """
    Detect the source kind of an uploaded file by its extension.

    Args:
        file_name: Name of the uploaded file

    Returns:
        Matching SourceKind

    Raises:
        RequestError: If the extension is missing or unsupported
    """
    extension = Path(file_name or "").suffix.lower()

    if extension in EXTENSION_MAP:
        return EXTENSION_MAP[extension]

    raise RequestError(
        f"Unsupported or unrecognized file type: {extension or '(none)'}",
        details=f"Supported extensions: {', '.join(sorted(EXTENSION_MAP))}"
    )


def get_supported_formats() -> List[Dict[str, Union[str, List[str]]]]:
    """
    Get the supported source kinds with their extensions and output shapes.

    Returns:
        One entry per SourceKind
    """
    formats = []
    for kind in SourceKind:
        formats.append({
            "kind": kind.value,
            "extensions": [ext for ext, mapped in EXTENSION_MAP.items() if mapped is kind],
            "output": OUTPUT_SHAPES[kind]
        })
    return formats


class ExtractionOrchestrator:
    """
    Runs extraction requests.

    Holds no per-request state; the only shared piece is the semaphore that
    caps how many PDF parse threads run at once, including threads still
    finishing after their request timed out.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        downloads_dir: Optional[Union[str, Path]] = None,
        fetch_timeout: Optional[float] = None,
        pdf_timeout: Optional[float] = None,
        max_concurrent_pdf: Optional[int] = None,
        max_upload_bytes: Optional[int] = None
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.downloads_dir = downloads_dir or settings.DOWNLOADS_DIR
        self.fetch_timeout = fetch_timeout or settings.FETCH_TIMEOUT_SECONDS
        self.pdf_timeout = pdf_timeout or settings.PDF_PARSE_TIMEOUT_SECONDS
        self.max_upload_bytes = max_upload_bytes or settings.max_upload_size_bytes
        self._pdf_slots = asyncio.Semaphore(max_concurrent_pdf or settings.MAX_CONCURRENT_PDF)

    async def run(self, request: ExtractionRequest) -> ExtractionOutcome:
        """
        Execute a request.

        Args:
            request: Kind plus URL or uploaded payload

        Returns:
            TextResult or SheetCollection on success, ErrorEnvelope on any failure
        """
        start_time = time.time()
        kind = getattr(request.kind, "value", request.kind)

        try:
            request.validate()
            result = await self._dispatch(request)
        except ExtractionError as e:
            self.logger.error(
                f"Extraction failed - kind={kind} error={e.kind} message={e.message}"
                + (f" details={e.details}" if e.details else "")
            )
            return e.to_envelope()
        except Exception as e:
            self.logger.exception(f"Unexpected extraction failure for kind={kind}")
            return ErrorEnvelope(
                kind=ExtractionError.kind,
                message="An unexpected error occurred during processing.",
                details=f"{type(e).__name__}: {str(e)}"
            )

        latency_ms = int((time.time() - start_time) * 1000)
        self.logger.info(f"Extraction complete - kind={kind} latency_ms={latency_ms}")
        return result

    async def _dispatch(self, request: ExtractionRequest) -> ExtractionResult:
        kind = request.kind
        source = request.source

        if kind.is_binary:
            self._check_upload_size(source)

        if kind is SourceKind.WEB:
            return await self._extract_web(source.url)
        elif kind is SourceKind.PDF:
            return await parse_pdf(
                source.payload,
                downloads_dir=self.downloads_dir,
                timeout=self.pdf_timeout,
                slots=self._pdf_slots,
                logger=self.logger
            )
        elif kind is SourceKind.WORD:
            return await asyncio.to_thread(parse_docx, source.payload, self.logger)
        elif kind is SourceKind.EXCEL:
            return await asyncio.to_thread(parse_excel, source.payload, self.logger)
        else:
            raise RequestError(f"No extractor available for source kind: {kind!r}")

    async def _extract_web(self, url: str) -> TextResult:
        url = url.strip()
        html = await asyncio.to_thread(fetch_html, url, self.fetch_timeout, self.logger)
        cleaned_html = sanitize_html(html, logger=self.logger)
        return TextResult(text=cleaned_html, format="html", metadata={"url": url})

    def _check_upload_size(self, source: BinarySource) -> None:
        size = len(source.payload)
        if size > self.max_upload_bytes:
            raise RequestError(
                f"File exceeds maximum size ({size / 1024 / 1024:.2f} MB). "
                f"Maximum: {self.max_upload_bytes / 1024 / 1024:.0f} MB.",
                details=f"file_name={source.file_name} file_size_bytes={size}"
            )
