"""
Simulated data generator for the sales dashboard.

Generates a month of plausible daily activity per salesperson. Used to
seed an empty store and for demos; all values are synthetic.
"""

import numpy as np
import pandas as pd

from .config import DAILY_RECORD_COLUMNS, DEFAULT_PHOTO_URL
from .loaders import coerce_daily_dtypes
from .models import Salesperson

# Seed for reproducibility
_RNG = np.random.default_rng(42)

_DAY_NAMES = [
    "Domingo", "Segunda-Feira", "Terça-Feira", "Quarta-Feira",
    "Quinta-Feira", "Sexta-Feira", "Sábado",
]

# (id, name, base_leads, sql_rate, conversion_rate)
_TEAM = [
    ("andresa", "Andresa", 30, 0.4, 0.25),   # high leads, decent conversion
    ("jennifer", "Jennifer", 25, 0.5, 0.35),  # fewer leads, higher quality
    ("lohaynni", "Lohaynni", 35, 0.3, 0.18),  # high volume, lower conversion
]


def generate_daily_records(
    base_leads: float,
    sql_rate: float,
    conversion_rate: float,
    days: int = 30,
    rng: np.random.Generator | None = None,
) -> pd.DataFrame:
    """Generate one month of daily records around the given funnel rates."""
    rng = rng if rng is not None else _RNG
    rows = []

    for day in range(1, days + 1):
        new_leads = int(np.floor(base_leads + (rng.random() - 0.5) * 10))
        sql = int(np.floor(new_leads * (sql_rate + (rng.random() - 0.5) * 0.1)))
        closed = int(np.floor(sql * (conversion_rate + (rng.random() - 0.5) * 0.1)))
        closed = max(0, closed)

        paid = closed * 997 * (0.8 + rng.random() * 0.2)
        paid_5d = paid * (0.3 + rng.random() * 0.2)  # subset of paid

        rows.append({
            "day": day,
            "day_label": _DAY_NAMES[day % 7],
            "new_leads": max(0, new_leads),
            "qualified_leads": max(0, sql),
            "contracts_closed": closed,
            "contracts_signed": closed,
            "paid_within_5_days": float(round(paid_5d)),
            "paid": float(round(paid)),
            "contracts_value": float((closed // 2) * 1299 + (closed - closed // 2) * 997),
        })

    return coerce_daily_dtypes(pd.DataFrame(rows, columns=DAILY_RECORD_COLUMNS))


def generate_salespeople(rng: np.random.Generator | None = None) -> list[Salesperson]:
    """Generate the demo team with a month of data each."""
    return [
        Salesperson(
            id=sp_id,
            name=name,
            photo_url=DEFAULT_PHOTO_URL.format(name=sp_id),
            data=generate_daily_records(base, sql_rate, conv, rng=rng),
        )
        for sp_id, name, base, sql_rate, conv in _TEAM
    ]
