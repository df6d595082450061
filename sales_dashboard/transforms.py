"""
Data transforms: window every salesperson's records, merge the team into
one daily series, and shape record frames for the trend chart.
"""

import logging
from typing import Iterable

import pandas as pd

from .config import (
    CURRENCY_RECORD_COLUMNS,
    DAILY_RECORD_COLUMNS,
    INT_RECORD_COLUMNS,
    TEAM_SUM_ALL_FIELDS,
    TEAM_SUMMED_FIELDS,
)
from .kpis import filter_by_window
from .loaders import coerce_daily_dtypes, empty_daily_frame
from .models import Salesperson

logger = logging.getLogger(__name__)

_NUMERIC_FIELDS = [c for c in INT_RECORD_COLUMNS + CURRENCY_RECORD_COLUMNS if c != "day"]


def build_window_frames(
    salespeople: Iterable[Salesperson],
    window: str,
) -> list[Salesperson]:
    """Return copies of each salesperson carrying only the windowed records.

    Every salesperson is windowed against their own latest day.
    """
    return [sp.with_data(filter_by_window(sp.data, window)) for sp in salespeople]


def merge_team_daily(
    frames: Iterable[pd.DataFrame],
    sum_all_fields: bool | None = None,
) -> pd.DataFrame:
    """Merge several salespeople's records into one record per day.

    Rules
    -----
    - new_leads, qualified_leads, paid, contracts_closed: summed per day.
    - contracts_value, contracts_signed, paid_within_5_days: not merged; they
      keep the value the merged record starts with (0).
    - day_label: taken from the first record seen for that day.
    - With sum_all_fields=True (or TEAM_SUM_ALL_FIELDS) every numeric field
      is summed.

    Returns
    -------
    DataFrame with DAILY_RECORD_COLUMNS, sorted ascending by day.
    """
    if sum_all_fields is None:
        sum_all_fields = TEAM_SUM_ALL_FIELDS

    non_empty = [df for df in frames if df is not None and not df.empty]
    if not non_empty:
        return empty_daily_frame()

    combined = pd.concat(non_empty, ignore_index=True)

    summed = _NUMERIC_FIELDS if sum_all_fields else TEAM_SUMMED_FIELDS
    agg: dict[str, str] = {"day_label": "first"}
    for col in summed:
        agg[col] = "sum"

    merged = combined.groupby("day", sort=True).agg(agg).reset_index()
    for col in _NUMERIC_FIELDS:
        if col not in summed:
            merged[col] = 0

    merged = coerce_daily_dtypes(merged[DAILY_RECORD_COLUMNS].copy())
    logger.info(
        "Merged %d records from %d salespeople into %d days",
        len(combined), len(non_empty), len(merged),
    )
    return merged


def build_chart_frame(records: pd.DataFrame) -> pd.DataFrame:
    """Trend-chart rows: one per record with label 'Dia N', leads, SQL and payments."""
    if records is None or records.empty:
        return pd.DataFrame(columns=["day", "label", "new_leads", "qualified_leads", "paid"])

    chart = records[["day", "new_leads", "qualified_leads", "paid"]].copy()
    chart.insert(1, "label", chart["day"].apply(lambda d: f"Dia {int(d) if float(d).is_integer() else d}"))
    return chart.reset_index(drop=True)
