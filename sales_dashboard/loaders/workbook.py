"""
Workbook access for uploaded daily reports.

Opens an .xlsx payload with openpyxl, picks the first worksheet and exposes
cells by (column letter, 1-indexed row). Formula cells report their cached
result (``data_only=True``).
"""

import logging
import zipfile
from io import BytesIO

import openpyxl
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException

from ..errors import NoSheetError, UnreadableFileError
from .utils import CellValue, display_text

logger = logging.getLogger(__name__)


class SheetReader:
    """Read-only view over one openpyxl worksheet."""

    def __init__(self, ws):
        self._ws = ws
        self.title = ws.title

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        """(min_row, min_col, max_row, max_col) of the occupied range, 1-indexed."""
        ws = self._ws
        return ws.min_row, ws.min_column, ws.max_row, ws.max_column

    @property
    def dimensions(self) -> str:
        min_row, min_col, max_row, max_col = self.bounds
        return f"{get_column_letter(min_col)}{min_row}:{get_column_letter(max_col)}{max_row}"

    @property
    def max_row(self) -> int:
        return self._ws.max_row

    def cell(self, column: str, row: int) -> CellValue | None:
        """Return the cell at e.g. ("AG", 6), or None when it is empty."""
        val = self._ws[f"{column}{row}"].value
        if val is None:
            return None
        if isinstance(val, str) and not val.strip():
            return None
        return CellValue(val, display_text(val))


def open_first_sheet(payload: bytes) -> SheetReader:
    """Load a workbook from raw bytes and return its first worksheet.

    Raises
    ------
    UnreadableFileError : payload is not an .xlsx workbook.
    NoSheetError : workbook holds no worksheet.
    """
    try:
        wb = openpyxl.load_workbook(BytesIO(payload), data_only=True)
    # ElementTree.ParseError and lxml XMLSyntaxError both subclass SyntaxError
    except (zipfile.BadZipFile, InvalidFileException, KeyError, OSError, ValueError, SyntaxError) as exc:
        logger.warning("Could not read uploaded workbook: %s", exc)
        raise UnreadableFileError() from exc

    sheets = [ws for ws in wb.worksheets if hasattr(ws, "iter_rows")]
    if not sheets:
        logger.warning("Workbook has no worksheets (sheets: %s)", wb.sheetnames)
        raise NoSheetError()

    ws = sheets[0]
    logger.info("Opened sheet '%s' (%s)", ws.title, ws.dimensions)
    return SheetReader(ws)
