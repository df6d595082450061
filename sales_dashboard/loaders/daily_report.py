"""
Loader for the per-salesperson daily activity report.

Layout (first sheet, 1-indexed):
    Rows 6 onward: one row per day of the current month.
    Column C: day label (text or date).
    Column E: day number; the row is data only if 1 <= E <= days in month.
    Column G: new leads.  Column I: qualified leads (SQL).
    Columns K, S, AA: contracts closed at 1299 / 997 / 847.
    Columns M, U, AC: contracts signed at the same tiers.
    Column AE: amount paid within 5 days.  Column AG: total amount paid.
"""

import logging
from datetime import date
from pathlib import Path

import pandas as pd

from ..config import (
    CURRENCY_RECORD_COLUMNS,
    DAILY_RECORD_COLUMNS,
    DATA_START_ROW,
    DAY_COL,
    DAY_LABEL_COL,
    INT_RECORD_COLUMNS,
    NEW_LEADS_COL,
    PAID_COL,
    PAID_WITHIN_5_DAYS_COL,
    QUALIFIED_LEADS_COL,
    TIER_PRICES,
)
from ..errors import NoValidRowsError
from .utils import cell_currency, cell_number, cell_text, days_in_month
from .workbook import SheetReader, open_first_sheet

logger = logging.getLogger(__name__)


def empty_daily_frame() -> pd.DataFrame:
    """An empty record frame with the daily-record schema."""
    df = pd.DataFrame(columns=DAILY_RECORD_COLUMNS)
    return coerce_daily_dtypes(df)


def coerce_daily_dtypes(df: pd.DataFrame) -> pd.DataFrame:
    """Cast record columns to numeric/str so sums and comparisons behave."""
    for col in INT_RECORD_COLUMNS + CURRENCY_RECORD_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0)
    df["day_label"] = df["day_label"].fillna("").astype(str)
    return df


def _parse_row(sheet: SheetReader, row_idx: int) -> dict:
    closed = {
        price: cell_number(sheet.cell(cols["closed"], row_idx))
        for price, cols in TIER_PRICES.items()
    }
    signed = {
        price: cell_number(sheet.cell(cols["signed"], row_idx))
        for price, cols in TIER_PRICES.items()
    }

    return {
        "day": cell_number(sheet.cell(DAY_COL, row_idx)),
        "day_label": cell_text(sheet.cell(DAY_LABEL_COL, row_idx)),
        "new_leads": cell_number(sheet.cell(NEW_LEADS_COL, row_idx)),
        "qualified_leads": cell_number(sheet.cell(QUALIFIED_LEADS_COL, row_idx)),
        "contracts_closed": sum(closed.values()),
        "contracts_signed": sum(signed.values()),
        "paid_within_5_days": cell_currency(sheet.cell(PAID_WITHIN_5_DAYS_COL, row_idx)),
        "paid": cell_currency(sheet.cell(PAID_COL, row_idx)),
        "contracts_value": sum(count * price for price, count in closed.items()),
    }


def parse_daily_sheet(sheet: SheetReader, today: date | None = None) -> pd.DataFrame:
    """Turn the daily report sheet into one record per valid row.

    Assumptions
    -----------
    - The sheet describes the month containing `today` (default: the
      current date). The day range is taken from that month, not from the
      file, so an import made in a different month may reject valid rows.
    - Rows whose column E is outside [1, days_in_month], empty or non-numeric
      are skipped silently; the count is logged and kept in
      ``df.attrs["skipped_rows"]``.
    - Malformed cells never raise; they read as 0 or ''.

    Returns
    -------
    DataFrame with columns DAILY_RECORD_COLUMNS in sheet row order.

    Raises
    ------
    NoValidRowsError : no row passed the day-number gate.
    """
    month_days = days_in_month(today)

    rows = []
    skipped = 0
    for row_idx in range(DATA_START_ROW, sheet.max_row + 1):
        day = cell_number(sheet.cell(DAY_COL, row_idx))
        if day < 1 or day > month_days:
            skipped += 1
            continue
        rows.append(_parse_row(sheet, row_idx))

    if not rows:
        logger.warning(
            "No valid daily rows in sheet '%s' (expected days 1-%d in column %s from row %d)",
            sheet.title, month_days, DAY_COL, DATA_START_ROW,
        )
        raise NoValidRowsError(month_days)

    df = coerce_daily_dtypes(pd.DataFrame(rows, columns=DAILY_RECORD_COLUMNS))
    df.attrs["skipped_rows"] = skipped

    logger.info(
        "Parsed %d daily rows from sheet '%s' (%d skipped, %d days in month)",
        len(df), sheet.title, skipped, month_days,
    )
    return df


def load_daily_records(payload: bytes, today: date | None = None) -> pd.DataFrame:
    """Parse an uploaded daily report (.xlsx bytes) into daily records."""
    sheet = open_first_sheet(payload)
    return parse_daily_sheet(sheet, today=today)


def load_daily_records_file(path: str | Path, today: date | None = None) -> pd.DataFrame:
    """Same as load_daily_records, reading the workbook from disk."""
    try:
        payload = Path(path).read_bytes()
    except OSError:
        logger.exception("Failed to open daily report: %s", path)
        raise
    return load_daily_records(payload, today=today)
