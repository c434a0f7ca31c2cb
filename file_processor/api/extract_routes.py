"""
Extraction Routes

REST endpoints that feed web pages and uploaded documents into the extraction
pipeline and render its results or error envelopes as JSON.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from file_processor.core.errors import ErrorEnvelope, ExtractionError, RequestError
from file_processor.core.logging import get_component_logger
from file_processor.ingestion.dispatcher import (
    ExtractionOrchestrator,
    detect_source_kind,
    get_supported_formats,
)
from file_processor.ingestion.models import ExtractionRequest, SourceKind, UrlSource

logger = get_component_logger("api")

router = APIRouter(prefix="/api", tags=["Extraction"])

# HTTP status per envelope kind for /api/extract
STATUS_BY_KIND = {
    "RequestError": 400,
    "FetchError": 502,
    "PdfParseError": 422,
    "WordParseError": 422,
    "ExcelParseError": 422,
    "IoError": 500,
    "TimeoutError": 504,
    "ExtractionError": 500
}


class ScrapeResponse(BaseModel):
    """Response model for web scraping."""
    data: str = Field(..., description="Sanitized HTML of the page")


class PdfUploadResponse(BaseModel):
    """Response model for PDF upload."""
    parsedText: str
    fileName: str = Field(..., description="Id of the transient file used while parsing")


class FormatInfo(BaseModel):
    kind: str
    extensions: list[str]
    output: str


class SupportedFormatsResponse(BaseModel):
    """Response model for supported formats."""
    formats: list[FormatInfo]
    description: str


_orchestrator: Optional[ExtractionOrchestrator] = None


def get_orchestrator() -> ExtractionOrchestrator:
    """Get the shared orchestrator, created on first use."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = ExtractionOrchestrator(
            logger=get_component_logger("ingestion")
        )
    return _orchestrator


def _error_response(envelope: ErrorEnvelope, status_code: int) -> JSONResponse:
    body = {"error": envelope.message, "kind": envelope.kind}
    if envelope.details:
        body["details"] = envelope.details
    return JSONResponse(status_code=status_code, content=body)


@router.get("/scrap", response_model=ScrapeResponse)
async def scrape_url(
    url: Optional[str] = Query(None, description="URL of the page to scrape"),
    orchestrator: ExtractionOrchestrator = Depends(get_orchestrator)
):
    """
    Fetch a web page and return its sanitized HTML.

    Returns:
        {data} on success, {error} with 400 for a missing URL,
        {error, details} with 500 when fetching or parsing fails
    """
    if not url or not url.strip():
        return JSONResponse(
            status_code=400,
            content={"error": "Please provide a URL to scrape or process."}
        )

    outcome = await orchestrator.run(ExtractionRequest.for_url(url))

    if isinstance(outcome, ErrorEnvelope):
        status_code = 400 if outcome.kind == RequestError.kind else 500
        content = {"error": "Failed to process the URL."}
        if outcome.details:
            content["details"] = outcome.details
        return JSONResponse(status_code=status_code, content=content)

    return {"data": outcome.text}


@router.post("/upload", response_model=PdfUploadResponse)
async def upload_pdf(
    file: Optional[UploadFile] = File(None, description="PDF file to parse"),
    orchestrator: ExtractionOrchestrator = Depends(get_orchestrator)
):
    """
    Parse an uploaded PDF.

    Returns:
        {parsedText, fileName} where fileName is the id of the transient file
        used while parsing, or {error} when no file was sent or parsing failed
    """
    if file is None or not file.filename:
        logger.info("No valid file uploaded.")
        return JSONResponse(content={"error": "Invalid file format or no file uploaded."})

    payload = await file.read()
    logger.info(f"Receiving PDF upload: {file.filename} ({len(payload)} bytes)")

    outcome = await orchestrator.run(
        ExtractionRequest.for_upload(SourceKind.PDF, payload, file.filename)
    )

    if isinstance(outcome, ErrorEnvelope):
        if outcome.kind == RequestError.kind:
            return JSONResponse(content={"error": "Invalid file format or no file uploaded."})
        return JSONResponse(content={"error": "Failed to process the file."})

    return {
        "parsedText": outcome.text,
        "fileName": outcome.metadata["artifact_id"]
    }


@router.post("/extract")
async def extract_document(
    kind: Optional[str] = Form(None, description="web, pdf, word or excel (detected from the file name when omitted)"),
    url: Optional[str] = Form(None, description="Page URL for web extraction"),
    file: Optional[UploadFile] = File(None, description="Document to extract"),
    orchestrator: ExtractionOrchestrator = Depends(get_orchestrator)
):
    """
    Extract any supported source.

    Send ``url`` for a web page or ``file`` for a PDF, Word or Excel document.
    A ``kind`` that disagrees with what was sent is rejected.

    Returns:
        {kind, result} where result is {text, format, metadata} for text
        sources and a list of {sheetName, rows} for workbooks
    """
    has_file = file is not None and bool(file.filename)

    try:
        if kind:
            source_kind = SourceKind.parse(kind)
        elif has_file:
            source_kind = detect_source_kind(file.filename)
        elif url:
            source_kind = SourceKind.WEB
        else:
            raise RequestError("Provide a URL or upload a file to extract.")
    except ExtractionError as e:
        return _error_response(e.to_envelope(), STATUS_BY_KIND[e.kind])

    if has_file:
        payload = await file.read()
        logger.info(f"Receiving {source_kind.value} upload: {file.filename} ({len(payload)} bytes)")
        request = ExtractionRequest.for_upload(source_kind, payload, file.filename)
    else:
        request = ExtractionRequest(kind=source_kind, source=UrlSource(url=url or ""))

    outcome = await orchestrator.run(request)

    if isinstance(outcome, ErrorEnvelope):
        return _error_response(outcome, STATUS_BY_KIND.get(outcome.kind, 500))

    return {"kind": source_kind.value, "result": outcome.to_dict()}


@router.get("/supported-formats", response_model=SupportedFormatsResponse)
async def get_supported_file_formats():
    """
    Get list of supported source kinds for extraction.

    Returns:
        Source kinds with their file extensions and output shapes
    """
    return {
        "formats": get_supported_formats(),
        "description": "Web pages return sanitized HTML, PDF and Word return text, Excel returns per-sheet records"
    }
