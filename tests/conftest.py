from datetime import date
from io import BytesIO

import openpyxl
import pandas as pd
import pytest

from sales_dashboard.config import DAILY_RECORD_COLUMNS
from sales_dashboard.loaders import coerce_daily_dtypes
from sales_dashboard.models import Salesperson

# September has 30 days
SEPTEMBER = date(2024, 9, 15)


def make_workbook(rows: dict[int, dict[str, object]], title: str = "Junho") -> bytes:
    """Build an .xlsx payload; rows maps row number -> {column letter: value}."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = title
    ws["A1"] = "Relatório diário"
    for row_idx, cells in rows.items():
        for col, value in cells.items():
            ws[f"{col}{row_idx}"] = value
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def make_records(rows: list[dict]) -> pd.DataFrame:
    """Record frame from partial dicts; missing fields default to 0 / ''."""
    full = []
    for row in rows:
        rec = {col: 0 for col in DAILY_RECORD_COLUMNS}
        rec["day_label"] = ""
        rec.update(row)
        full.append(rec)
    return coerce_daily_dtypes(pd.DataFrame(full, columns=DAILY_RECORD_COLUMNS))


@pytest.fixture
def september():
    return SEPTEMBER


@pytest.fixture
def team():
    """Two salespeople with overlapping days."""
    ana = Salesperson(
        id="ana",
        name="Ana",
        data=make_records([
            {"day": 4, "day_label": "Quarta", "new_leads": 10, "qualified_leads": 4,
             "contracts_closed": 1, "contracts_signed": 1, "paid": 100.0,
             "paid_within_5_days": 50.0, "contracts_value": 1299.0},
            {"day": 5, "day_label": "Quinta", "new_leads": 12, "qualified_leads": 5,
             "contracts_closed": 2, "contracts_signed": 2, "paid": 200.0,
             "paid_within_5_days": 80.0, "contracts_value": 2296.0},
        ]),
    )
    bia = Salesperson(
        id="bia",
        name="Bia",
        data=make_records([
            {"day": 5, "day_label": "Qui", "new_leads": 8, "qualified_leads": 3,
             "contracts_closed": 1, "contracts_signed": 1, "paid": 150.0,
             "paid_within_5_days": 20.0, "contracts_value": 847.0},
        ]),
    )
    return [ana, bia]
