"""
Shared fixtures: in-memory document builders and an isolated orchestrator.
"""

import io
from typing import Dict, List, Optional

import pytest
import xlwt
from docx import Document
from openpyxl import Workbook
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from file_processor.ingestion.dispatcher import ExtractionOrchestrator


@pytest.fixture
def make_pdf():
    """Build a PDF with one line of text per page."""
    def _make(pages: List[str]) -> bytes:
        buffer = io.BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=letter)
        for text in pages:
            pdf.drawString(72, 720, text)
            pdf.showPage()
        pdf.save()
        return buffer.getvalue()
    return _make


@pytest.fixture
def make_docx():
    """Build a .docx with the given paragraphs and an optional table."""
    def _make(paragraphs: List[str], table: Optional[List[List[str]]] = None) -> bytes:
        doc = Document()
        for text in paragraphs:
            doc.add_paragraph(text)
        if table:
            grid = doc.add_table(rows=len(table), cols=len(table[0]))
            for r, row in enumerate(table):
                for c, value in enumerate(row):
                    grid.cell(r, c).text = value
        buffer = io.BytesIO()
        doc.save(buffer)
        return buffer.getvalue()
    return _make


@pytest.fixture
def make_workbook():
    """Build an .xlsx; sheets map names to rows, in insertion order."""
    def _make(sheets: Dict[str, List[list]]) -> bytes:
        workbook = Workbook()
        workbook.remove(workbook.active)
        for name, rows in sheets.items():
            sheet = workbook.create_sheet(title=name)
            for row in rows:
                sheet.append(row)
        buffer = io.BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()
    return _make


@pytest.fixture
def make_xls():
    """Build a legacy .xls; sheets map names to rows, in insertion order."""
    def _make(sheets: Dict[str, List[list]]) -> bytes:
        workbook = xlwt.Workbook()
        for name, rows in sheets.items():
            sheet = workbook.add_sheet(name)
            for r, row in enumerate(rows):
                for c, value in enumerate(row):
                    if value is not None:
                        sheet.write(r, c, value)
        buffer = io.BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()
    return _make


@pytest.fixture
def downloads_dir(tmp_path):
    """Per-test directory for transient files."""
    path = tmp_path / "downloads"
    path.mkdir()
    return path


@pytest.fixture
def orchestrator(downloads_dir):
    return ExtractionOrchestrator(
        downloads_dir=downloads_dir,
        fetch_timeout=5,
        pdf_timeout=30,
        max_concurrent_pdf=2
    )
