"""
PDF parser - extracts the text layer of an uploaded PDF.
Requires: pdfplumber

pdfplumber is given a path, so the upload is written to a transient file that
lives only for the duration of the parse.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import pdfplumber

from file_processor.core.config import settings
from file_processor.core.errors import ExtractionTimeoutError, PdfParseError
from .models import TextResult
from .transient import transient_artifact


def extract_pdf_text(file_path: Union[str, Path]) -> Tuple[str, int]:
    """
    Extract text from a PDF file page by page.

    Args:
        file_path: Path to the PDF file

    Returns:
        Tuple of (text of all pages in reading order, page count)
    """
    with pdfplumber.open(file_path) as pdf:
        page_texts = []
        for page in pdf.pages:
            text = page.extract_text()
            if text and text.strip():
                page_texts.append(text.strip())
        return "\n\n".join(page_texts), len(pdf.pages)


def _finish_in_background(
    worker: "asyncio.Future",
    slots: Optional[asyncio.Semaphore],
    logger: logging.Logger
) -> None:
    """Hold the concurrency slot until an abandoned parse thread returns."""
    def _on_done(future: "asyncio.Future") -> None:
        if slots is not None:
            slots.release()
        if not future.cancelled() and future.exception() is not None:
            logger.debug(f"Abandoned PDF parse finished with error: {future.exception()}")

    worker.add_done_callback(_on_done)


async def parse_pdf(
    payload: bytes,
    downloads_dir: Optional[Union[str, Path]] = None,
    timeout: Optional[float] = None,
    slots: Optional[asyncio.Semaphore] = None,
    logger: Optional[logging.Logger] = None
) -> TextResult:
    """
    Parse an uploaded PDF.

    The parse runs in a worker thread and is awaited as a single result. The
    transient file is removed on success, parse failure and timeout alike.

    A worker thread cannot be interrupted, so when the call times out (or is
    cancelled) the thread keeps running. If ``slots`` is given, the slot taken
    for this parse stays held until that thread has actually returned.

    Args:
        payload: Raw PDF bytes
        downloads_dir: Directory for the transient file (default: DOWNLOADS_DIR)
        timeout: Parse time budget in seconds (default: PDF_PARSE_TIMEOUT_SECONDS)
        slots: Optional semaphore bounding concurrent parse threads
        logger: Optional logger for diagnostics

    Returns:
        TextResult with the extracted text; metadata carries ``artifact_id``
        (the transient file's uuid) and ``page_count``

    Raises:
        PdfParseError: If the payload is not a readable PDF
        ExtractionTimeoutError: If parsing exceeds the time budget
        IoError: If the transient file cannot be written or removed
    """
    logger = logger or logging.getLogger(__name__)
    downloads_dir = downloads_dir or settings.DOWNLOADS_DIR
    timeout = timeout or settings.PDF_PARSE_TIMEOUT_SECONDS

    if slots is not None:
        await slots.acquire()
    worker = None

    try:
        with transient_artifact(payload, downloads_dir, suffix=".pdf", logger=logger) as artifact:
            logger.info(f"Parsing PDF: {artifact.path.name} ({len(payload)} bytes)")
            worker = asyncio.ensure_future(asyncio.to_thread(extract_pdf_text, artifact.path))

            try:
                text, page_count = await asyncio.wait_for(asyncio.shield(worker), timeout=timeout)
            except asyncio.TimeoutError as e:
                logger.error(f"PDF parsing timed out after {timeout}s: {artifact.path.name}")
                raise ExtractionTimeoutError(
                    "Failed to process the file.",
                    details=f"PDF parsing exceeded {timeout}s"
                ) from e
            except Exception as e:
                logger.error(f"PDF parsing error: {str(e)}")
                raise PdfParseError("Failed to process the file.", details=str(e)) from e
    finally:
        if worker is not None and not worker.done():
            _finish_in_background(worker, slots, logger)
        elif slots is not None:
            slots.release()

    if not text:
        logger.warning(f"PDF has no extractable text layer ({page_count} pages)")

    logger.info(f"PDF parsed successfully - {page_count} pages, {len(text)} chars")

    return TextResult(
        text=text,
        format="pdf",
        metadata={
            "artifact_id": artifact.artifact_id,
            "page_count": page_count
        }
    )
