"""
Dashboard-ready output functions.

These are the primary entry points for the Streamlit front end.
Each function returns plain dicts or DataFrames suitable for rendering
the podium, metric cards, the trend chart and the ticker.
"""

import html
import logging
from typing import Any
from urllib.parse import quote

import pandas as pd

from .config import (
    ALL_SALESPEOPLE,
    PODIUM_COLORS,
    PODIUM_SIZE,
    TEAM_NAME,
    TICKER_CONTRACTS_THRESHOLD,
    TICKER_MIN_ITEMS,
    TICKER_PAID_THRESHOLD,
    WINDOW_MONTH,
)
from .kpis import calc_metrics, rank_by_paid
from .models import Salesperson
from .transforms import build_chart_frame, build_window_frames, merge_team_daily

logger = logging.getLogger(__name__)

LEADERBOARD_COLUMNS = [
    "rank", "id", "name", "photo_url",
    "total_paid", "total_contracts_closed", "conversion_rate",
]


def format_brl(value: float) -> str:
    """pt-BR currency: 1234.5 -> 'R$ 1.234,50'."""
    text = f"{value:,.2f}"
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {text}"


def format_pct(ratio: float, digits: int = 1) -> str:
    """0.256 -> '25,6%'."""
    return f"{ratio * 100:.{digits}f}%".replace(".", ",")


def get_ranked_salespeople(
    salespeople: list[Salesperson],
    window: str = WINDOW_MONTH,
) -> list[tuple[Salesperson, dict[str, Any]]]:
    """Window each salesperson, compute their metrics and rank by total paid."""
    windowed = build_window_frames(salespeople, window)
    return rank_by_paid([(sp, calc_metrics(sp.data)) for sp in windowed])


def _leaderboard_frame(ranked: list[tuple[Salesperson, dict[str, Any]]]) -> pd.DataFrame:
    rows = []
    for rank, (sp, metrics) in enumerate(ranked, start=1):
        rows.append({
            "rank": rank,
            "id": sp.id,
            "name": sp.name,
            "photo_url": sp.photo_url,
            "total_paid": metrics["total_paid"],
            "total_contracts_closed": metrics["total_contracts_closed"],
            "conversion_rate": metrics["conversion_rate"],
        })
    return pd.DataFrame(rows, columns=LEADERBOARD_COLUMNS)


def get_leaderboard(
    salespeople: list[Salesperson],
    window: str = WINDOW_MONTH,
) -> pd.DataFrame:
    """Ranked table of salespeople for the selected window.

    Returns
    -------
    DataFrame with columns:
        rank, id, name, photo_url, total_paid, total_contracts_closed,
        conversion_rate
    """
    return _leaderboard_frame(get_ranked_salespeople(salespeople, window))


def get_podium(leaderboard: pd.DataFrame) -> list[dict[str, Any]]:
    """The top three leaderboard rows as dicts (fewer if the team is smaller)."""
    if leaderboard.empty:
        return []
    return leaderboard.head(PODIUM_SIZE).to_dict("records")


def get_dashboard_view(
    salespeople: list[Salesperson],
    selected_id: str = ALL_SALESPEOPLE,
    window: str = WINDOW_MONTH,
) -> dict[str, Any]:
    """Single entry point the app calls to populate one dashboard render.

    Returns
    -------
    Dict with structure:
    {
        "window": "month",
        "leaderboard": DataFrame,
        "podium": [{"rank": 1, "name": ..., ...}, ...],
        "selected_name": "Todas as Vendedoras",
        "selected": (Salesperson, metrics) or None for the team view,
        "metrics": {...},
        "chart": DataFrame,
    }
    """
    ranked = get_ranked_salespeople(salespeople, window)
    leaderboard = _leaderboard_frame(ranked)

    selected = None
    if selected_id == ALL_SALESPEOPLE:
        records = merge_team_daily(sp.data for sp, _ in ranked)
        selected_name = "Todas as Vendedoras"
    else:
        selected = next(((sp, m) for sp, m in ranked if sp.id == selected_id), None)
        if selected is None:
            logger.warning("Salesperson '%s' not found, showing no data", selected_id)
            records = None
            selected_name = ""
        else:
            records = selected[0].data
            selected_name = selected[0].name

    return {
        "window": window,
        "leaderboard": leaderboard,
        "podium": get_podium(leaderboard),
        "selected_name": selected_name,
        "selected": selected,
        "metrics": calc_metrics(records),
        "chart": build_chart_frame(records),
    }


def get_ticker_messages(salespeople: list[Salesperson]) -> list[str]:
    """Announcements for the scrolling ticker, computed over all data.

    The list is repeated until it holds at least TICKER_MIN_ITEMS entries
    so the marquee loops smoothly.
    """
    messages = []
    for sp in salespeople:
        metrics = calc_metrics(sp.data)
        if metrics["total_paid"] > TICKER_PAID_THRESHOLD:
            messages.append(
                f"🎉 Parabéns, {sp.name}, por alcançar {format_brl(metrics['total_paid'])} em pagamentos!"
            )
        if metrics["total_contracts_closed"] > TICKER_CONTRACTS_THRESHOLD:
            messages.append(
                f"🚀 Incrível! {sp.name} já fechou {metrics['total_contracts_closed']} contratos!"
            )

    if not messages:
        messages.append(
            f"Bem-vindo ao painel de performance {TEAM_NAME}. Acompanhe os resultados em tempo real."
        )

    repeats = -(-TICKER_MIN_ITEMS // len(messages))
    return messages * repeats


# ---------------------------------------------------------------------------
# HTML fragments for st.markdown(..., unsafe_allow_html=True)
# Names and photo URLs are user input and are always escaped.
# ---------------------------------------------------------------------------

def ticker_html(messages: list[str]) -> str:
    """Marquee with the distinct ticker messages joined by bullets."""
    text = "  •  ".join(html.escape(msg) for msg in dict.fromkeys(messages))
    return (
        "<marquee style='color:#ddd; background:#1f2937; padding:6px; border-radius:6px;'>"
        f"{text}</marquee>"
    )


def podium_card_html(entry: dict[str, Any]) -> str:
    color = PODIUM_COLORS.get(entry["rank"], "#9ca3af")
    name = html.escape(str(entry["name"]))
    photo = entry["photo_url"] or (
        f"https://ui-avatars.com/api/?name={quote(str(entry['name']))}&background=4A5568&color=fff"
    )
    return f"""
        <div style="border: 2px solid {color}; border-radius: 16px; padding: 16px; text-align: center;">
            <div style="font-size: 42px; font-weight: 900; color: {color}; opacity: 0.4;">{entry['rank']}</div>
            <img src="{html.escape(photo, quote=True)}" style="width: 88px; height: 88px; border-radius: 50%; object-fit: cover;"/>
            <div style="font-size: 22px; font-weight: 700; margin-top: 8px;">{name}</div>
            <div style="font-size: 13px; color: #888; margin-top: 8px;">Valor Pago</div>
            <div style="font-size: 20px; font-weight: 700;">{format_brl(entry['total_paid'])}</div>
            <div style="font-size: 13px; color: #888;">Contratos Fechados: <b>{entry['total_contracts_closed']}</b></div>
            <div style="font-size: 13px; color: #2ecc71;">Taxa Conversão: <b>{format_pct(entry['conversion_rate'])}</b></div>
        </div>
        """
