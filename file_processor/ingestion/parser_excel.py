"""
Excel parser - turns every worksheet into a list of sparse records.
Requires: pandas, openpyxl (.xlsx), xlrd (.xls)

The first populated row of a sheet names the columns; each later row becomes a
dict keyed by those names. Empty cells are left out of the record, so rows of
the same sheet may carry different keys.
"""

import io
import logging
from datetime import date, datetime, time
from typing import Any, Iterable, List, Optional

import numpy as np
import pandas as pd

from file_processor.core.errors import ExcelParseError
from .models import CellValue, Record, Sheet, SheetCollection

EMPTY_HEADER = "__EMPTY"


def is_empty_cell(value: Any) -> bool:
    """Check whether a cell holds nothing (None, NaN/NaT or the empty string)."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def to_cell_value(value: Any) -> CellValue:
    """
    Convert a cell read by pandas into a JSON-friendly scalar.

    Numbers and booleans keep their type, numpy scalars are unwrapped and
    temporal values are rendered as ISO-8601 strings.
    """
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (bool, int, float, str)):
        return value
    return str(value)


def build_headers(cells: Iterable[Any]) -> List[str]:
    """
    Derive unique field names from a header row.

    Empty header cells become ``__EMPTY``; repeated names get ``_1``, ``_2``...
    """
    headers = []
    used = set()

    for value in cells:
        if is_empty_cell(value):
            base = EMPTY_HEADER
        else:
            base = str(to_cell_value(value))

        name = base
        suffix = 0
        while name in used:
            suffix += 1
            name = f"{base}_{suffix}"

        used.add(name)
        headers.append(name)

    return headers


def sheet_to_records(frame: pd.DataFrame) -> List[Record]:
    """
    Convert a header-less sheet frame into records.

    Args:
        frame: Sheet as read with ``header=None`` (row 0 is the first sheet row)

    Returns:
        One record per non-empty row after the header row
    """
    headers: Optional[List[str]] = None
    records: List[Record] = []

    for row in frame.itertuples(index=False, name=None):
        if all(is_empty_cell(value) for value in row):
            continue

        if headers is None:
            headers = build_headers(row)
            continue

        record = {
            headers[position]: to_cell_value(value)
            for position, value in enumerate(row)
            if not is_empty_cell(value)
        }
        records.append(record)

    return records


def parse_excel(payload: bytes, logger: Optional[logging.Logger] = None) -> SheetCollection:
    """
    Parse an Excel workbook into per-sheet records.

    Args:
        payload: Raw .xlsx or .xls bytes
        logger: Optional logger for diagnostics

    Returns:
        SheetCollection with one Sheet per worksheet, in workbook order

    Raises:
        ExcelParseError: If the payload is not a readable workbook
    """
    logger = logger or logging.getLogger(__name__)

    try:
        # dtype=object keeps the engine's native cell types; keep_default_na=False
        # stops strings such as "NA" or "null" from turning into NaN
        frames = pd.read_excel(
            io.BytesIO(payload),
            sheet_name=None,
            header=None,
            dtype=object,
            keep_default_na=False
        )
    except Exception as e:
        logger.error(f"Excel parsing failed: {str(e)}")
        raise ExcelParseError("Failed to process the file.", details=str(e)) from e

    sheets = []
    for sheet_name, frame in frames.items():
        rows = sheet_to_records(frame)
        logger.debug(f"Sheet '{sheet_name}': {len(rows)} records")
        sheets.append(Sheet(sheet_name=str(sheet_name), rows=rows))

    logger.info(
        f"Excel parsed successfully - {len(sheets)} sheets, "
        f"{sum(len(sheet.rows) for sheet in sheets)} records"
    )

    return SheetCollection(sheets=sheets)
