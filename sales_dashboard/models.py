"""
Salesperson entity and its JSON representation.

The daily records of a salesperson are held as a DataFrame with the
DAILY_RECORD_COLUMNS schema; the JSON document keeps the camelCase keys
the dashboard has always stored.
"""

from dataclasses import dataclass, field, replace
from typing import Any

import pandas as pd

from .config import DAILY_RECORD_COLUMNS, RECORD_JSON_KEYS
from .loaders import coerce_daily_dtypes, empty_daily_frame

_JSON_TO_COLUMN = {v: k for k, v in RECORD_JSON_KEYS.items()}


def derive_initial(name: str) -> str:
    name = (name or "").strip()
    return name[:1].upper()


def records_to_json(df: pd.DataFrame) -> list[dict[str, Any]]:
    """Convert a record frame into JSON-ready dicts with plain Python numbers."""
    if df is None or df.empty:
        return []
    out = []
    for rec in df[DAILY_RECORD_COLUMNS].to_dict("records"):
        item = {}
        for col, val in rec.items():
            if hasattr(val, "item"):
                val = val.item()
            item[RECORD_JSON_KEYS[col]] = val
        out.append(item)
    return out


def records_from_json(items: list[dict[str, Any]] | None) -> pd.DataFrame:
    """Build a record frame from stored dicts; unknown keys are ignored."""
    if not items:
        return empty_daily_frame()
    rows = []
    for item in items:
        rows.append({
            col: item.get(key, item.get(col))
            for key, col in _JSON_TO_COLUMN.items()
        })
    df = pd.DataFrame(rows, columns=DAILY_RECORD_COLUMNS)
    return coerce_daily_dtypes(df)


@dataclass
class Salesperson:
    """One member of the sales team and the daily records they own."""

    id: str
    name: str
    photo_url: str = ""
    google_sheet_id: str = ""
    data: pd.DataFrame = field(default_factory=empty_daily_frame)

    @property
    def initial(self) -> str:
        return derive_initial(self.name)

    def with_data(self, data: pd.DataFrame) -> "Salesperson":
        return replace(self, data=data)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "initial": self.initial,
            "photoUrl": self.photo_url,
            "googleSheetId": self.google_sheet_id,
            "data": records_to_json(self.data),
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Salesperson":
        return cls(
            id=str(raw["id"]),
            name=str(raw.get("name", "")),
            photo_url=raw.get("photoUrl") or "",
            google_sheet_id=raw.get("googleSheetId") or "",
            data=records_from_json(raw.get("data")),
        )
