"""
KPI computation functions: pure functions with no side effects.

Provides time-window filtering, metric aggregation with guarded ratios,
and the paid-amount ranking used by the leaderboard.
"""

import logging
from typing import Any, Sequence

import pandas as pd

from .config import (
    WEEK_LENGTH_DAYS,
    WINDOW_DAY,
    WINDOW_MONTH,
    WINDOW_WEEK,
)

logger = logging.getLogger(__name__)

METRIC_KEYS = [
    "total_leads",
    "total_qualified_leads",
    "total_contracts_closed",
    "total_contracts_value",
    "total_contracts_signed",
    "total_paid",
    "total_paid_within_5_days",
    "conversion_rate",
    "cost_per_acquisition",
]

# metric key -> (record column, cast)
_SUMS = {
    "total_leads": ("new_leads", int),
    "total_qualified_leads": ("qualified_leads", int),
    "total_contracts_closed": ("contracts_closed", int),
    "total_contracts_value": ("contracts_value", float),
    "total_contracts_signed": ("contracts_signed", int),
    "total_paid": ("paid", float),
    "total_paid_within_5_days": ("paid_within_5_days", float),
}


def safe_ratio(numerator: float, denominator: float) -> float:
    """Return numerator / denominator, or 0.0 when the denominator is 0."""
    if not denominator:
        return 0.0
    return numerator / denominator


def empty_metrics() -> dict[str, Any]:
    metrics: dict[str, Any] = {key: cast(0) for key, (_, cast) in _SUMS.items()}
    metrics["conversion_rate"] = 0.0
    metrics["cost_per_acquisition"] = 0.0
    return metrics


def _column_total(records: pd.DataFrame, col: str, cast):
    if col not in records.columns:
        return cast(0)
    total = pd.to_numeric(records[col], errors="coerce").fillna(0).sum()
    if cast is int and float(total).is_integer():
        return int(total)
    return float(total)


def calc_metrics(records: pd.DataFrame | None) -> dict[str, Any]:
    """Sum the daily records and derive the two ratios.

    Rules
    -----
    - Every count and amount: sum over the records.
    - conversion_rate = contracts closed / qualified leads (0 if no SQL).
    - cost_per_acquisition = paid / contracts signed (0 if none signed).

    Empty or missing input yields all zeros; this function never raises.
    """
    if records is None or records.empty:
        return empty_metrics()

    metrics: dict[str, Any] = {
        key: _column_total(records, col, cast) for key, (col, cast) in _SUMS.items()
    }
    metrics["conversion_rate"] = safe_ratio(
        metrics["total_contracts_closed"], metrics["total_qualified_leads"]
    )
    metrics["cost_per_acquisition"] = safe_ratio(
        metrics["total_paid"], metrics["total_contracts_signed"]
    )
    return metrics


def last_day_with_data(records: pd.DataFrame | None) -> int | float:
    """Highest day number present, 0 for no records.

    Fractional days are returned as-is so the Day window still matches them.
    """
    if records is None or records.empty:
        return 0
    last_day = pd.to_numeric(records["day"], errors="coerce").fillna(0).max()
    return int(last_day) if float(last_day).is_integer() else float(last_day)


def filter_by_window(records: pd.DataFrame | None, window: str) -> pd.DataFrame:
    """Restrict records to a Day / Week / Month window.

    Windows end at the latest day that has data rather than today, so a
    stale import still shows a full window.

    - 'day':   records on the last day with data.
    - 'week':  records from max(1, last_day - 6) to last_day inclusive.
    - 'month': all records (also used for unknown window names).

    Input row order is kept.
    """
    if records is None:
        return pd.DataFrame()
    if records.empty or window not in (WINDOW_DAY, WINDOW_WEEK):
        if window not in (WINDOW_DAY, WINDOW_WEEK, WINDOW_MONTH):
            logger.warning("Unknown window '%s', using the whole month", window)
        return records

    last_day = last_day_with_data(records)
    days = pd.to_numeric(records["day"], errors="coerce")

    if window == WINDOW_DAY:
        mask = days == last_day
    else:
        start = max(1, last_day - (WEEK_LENGTH_DAYS - 1))
        mask = (days >= start) & (days <= last_day)

    return records[mask]


def rank_by_paid(entries: Sequence[tuple[Any, dict[str, Any]]]) -> list[tuple[Any, dict[str, Any]]]:
    """Order (salesperson, metrics) pairs by total paid, highest first.

    The sort is stable: salespeople with equal totals keep their input order.
    """
    return sorted(entries, key=lambda entry: entry[1]["total_paid"], reverse=True)
