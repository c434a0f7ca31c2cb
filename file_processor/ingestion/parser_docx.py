"""
DOCX parser - extracts raw text from Word documents.
Requires: python-docx
"""

import io
import logging
from typing import Iterator, Optional

from docx import Document
from docx.table import Table
from docx.text.paragraph import Paragraph

from file_processor.core.errors import WordParseError
from .models import TextResult

# Compound File Binary signature used by legacy .doc files
OLE_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


def _table_texts(table: Table) -> Iterator[str]:
    seen = set()
    for row in table.rows:
        for cell in row.cells:
            # Merged cells are returned once per grid position
            if cell._tc in seen:
                continue
            seen.add(cell._tc)
            for paragraph in cell.paragraphs:
                yield paragraph.text


def iter_document_text(doc) -> Iterator[str]:
    """Yield paragraph texts of the document body, tables included, in order."""
    for block in doc.iter_inner_content():
        if isinstance(block, Paragraph):
            yield block.text
        elif isinstance(block, Table):
            yield from _table_texts(block)


def parse_docx(payload: bytes, logger: Optional[logging.Logger] = None) -> TextResult:
    """
    Parse a Word document using python-docx.

    Styling, images and structure are dropped; non-empty paragraphs are
    joined with blank lines.

    Args:
        payload: Raw .docx bytes
        logger: Optional logger for diagnostics

    Returns:
        TextResult with the document's raw text

    Raises:
        WordParseError: If the payload is not a readable .docx document
    """
    logger = logger or logging.getLogger(__name__)

    if payload.startswith(OLE_SIGNATURE):
        raise WordParseError(
            "Failed to process the file.",
            details="Legacy binary .doc files are not supported; save the document as .docx"
        )

    try:
        doc = Document(io.BytesIO(payload))
        parts = [text.strip() for text in iter_document_text(doc)]
    except Exception as e:
        logger.error(f"DOCX parsing failed: {str(e)}")
        raise WordParseError("Failed to process the file.", details=str(e)) from e

    full_text = "\n\n".join(part for part in parts if part)

    if not full_text:
        logger.warning("DOCX file contains no extractable text")

    metadata = {
        "paragraph_count": len(doc.paragraphs),
        "table_count": len(doc.tables)
    }

    props = doc.core_properties
    if props.author:
        metadata["author"] = props.author
    if props.title:
        metadata["title"] = props.title
    if props.created:
        metadata["created"] = props.created.isoformat()
    if props.modified:
        metadata["modified"] = props.modified.isoformat()

    logger.info(
        f"DOCX parsed successfully - {len(full_text)} chars, "
        f"{metadata['paragraph_count']} paragraphs, {metadata['table_count']} tables"
    )

    return TextResult(text=full_text, format="docx", metadata=metadata)
