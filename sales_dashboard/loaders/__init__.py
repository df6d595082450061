"""Data ingestion loaders for uploaded daily sales reports."""

from .workbook import SheetReader, open_first_sheet
from .daily_report import load_daily_records, load_daily_records_file
from .daily_report import parse_daily_sheet, empty_daily_frame, coerce_daily_dtypes

__all__ = [
    "SheetReader",
    "open_first_sheet",
    "load_daily_records",
    "load_daily_records_file",
    "parse_daily_sheet",
    "empty_daily_frame",
    "coerce_daily_dtypes",
]
