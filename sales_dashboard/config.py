"""
Configuration: spreadsheet layout, contract tiers, file paths, constants.

Secrets and deployment settings are read from the environment (a local
.env file is honoured) so nothing sensitive is embedded in the code.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# File paths: adjust these if the store moves
# ---------------------------------------------------------------------------
DATA_DIR = Path(__file__).resolve().parent.parent

STORE_FILE = Path(os.environ.get("SALES_DASHBOARD_STORE", DATA_DIR / "salespeople.json"))

# Top-level key of the persisted JSON document
STORAGE_KEY = "salespeople"

# ---------------------------------------------------------------------------
# Team identity
# ---------------------------------------------------------------------------
TEAM_NAME = "Rescore"

# ---------------------------------------------------------------------------
# Daily report layout (first sheet, 1-indexed rows)
# ---------------------------------------------------------------------------
DATA_START_ROW = 6

DAY_LABEL_COL = "C"
DAY_COL = "E"
NEW_LEADS_COL = "G"
QUALIFIED_LEADS_COL = "I"
PAID_WITHIN_5_DAYS_COL = "AE"
PAID_COL = "AG"

# Contract tiers: unit price -> (closed column, signed column)
TIER_PRICES: dict[int, dict[str, str]] = {
    1299: {"closed": "K", "signed": "M"},
    997: {"closed": "S", "signed": "U"},
    847: {"closed": "AA", "signed": "AC"},
}

# Display format for date cells in the day-label column
DISPLAY_DATE_FORMAT = "%d/%m/%Y"

# ---------------------------------------------------------------------------
# Record schema
# ---------------------------------------------------------------------------
DAILY_RECORD_COLUMNS = [
    "day",
    "day_label",
    "new_leads",
    "qualified_leads",
    "contracts_closed",
    "contracts_signed",
    "paid_within_5_days",
    "paid",
    "contracts_value",
]

INT_RECORD_COLUMNS = ["day", "new_leads", "qualified_leads", "contracts_closed", "contracts_signed"]
CURRENCY_RECORD_COLUMNS = ["paid_within_5_days", "paid", "contracts_value"]

# Persisted (camelCase) names for each record column
RECORD_JSON_KEYS: dict[str, str] = {
    "day": "dia",
    "day_label": "data",
    "new_leads": "novosLeads",
    "qualified_leads": "sql",
    "contracts_closed": "contratosFechados",
    "contracts_signed": "assinado",
    "paid_within_5_days": "pago5d",
    "paid": "pago",
    "contracts_value": "valorContratos",
}

# Fields summed when records from several salespeople share a day
TEAM_SUMMED_FIELDS = ["new_leads", "qualified_leads", "paid", "contracts_closed"]

# Sum every numeric field in the team view instead of TEAM_SUMMED_FIELDS only
TEAM_SUM_ALL_FIELDS = os.environ.get("TEAM_SUM_ALL_FIELDS", "").lower() in ("1", "true", "yes")

# ---------------------------------------------------------------------------
# Time windows
# ---------------------------------------------------------------------------
WINDOW_DAY = "day"
WINDOW_WEEK = "week"
WINDOW_MONTH = "month"

WINDOW_LABELS: dict[str, str] = {
    WINDOW_DAY: "Dia",
    WINDOW_WEEK: "Semana",
    WINDOW_MONTH: "Mês",
}

WEEK_LENGTH_DAYS = 7

ALL_SALESPEOPLE = "all"

PODIUM_SIZE = 3
PODIUM_COLORS = {1: "#60a5fa", 2: "#9ca3af", 3: "#b45309"}

# ---------------------------------------------------------------------------
# Ticker thresholds
# ---------------------------------------------------------------------------
TICKER_PAID_THRESHOLD = 8000
TICKER_CONTRACTS_THRESHOLD = 40
TICKER_MIN_ITEMS = 10

# ---------------------------------------------------------------------------
# Credentials (SHA-256 hex digests, never plain secrets)
# ---------------------------------------------------------------------------
DASHBOARD_USERNAME = os.environ.get("DASHBOARD_USERNAME", "")
DASHBOARD_PASSWORD_SHA256 = os.environ.get("DASHBOARD_PASSWORD_SHA256", "")
SETTINGS_PASSWORD_SHA256 = os.environ.get("SETTINGS_PASSWORD_SHA256", "")

# ---------------------------------------------------------------------------
# Text-generation service
# ---------------------------------------------------------------------------
GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
SUMMARY_TIMEOUT_SECONDS = 90

SUMMARY_FALLBACK_TEXT = (
    "Ocorreu um erro ao gerar o resumo de IA. Verifique os logs para mais detalhes."
)

# ---------------------------------------------------------------------------
# Avatars
# ---------------------------------------------------------------------------
DEFAULT_PHOTO_URL = "https://i.pravatar.cc/150?u={name}"
