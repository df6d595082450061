"""
Sales Performance Dashboard: End-to-end analytics pipeline.

Loads the salesperson store (seeding demo data if it is empty), optionally
imports a daily report workbook for one salesperson, and prints
smoke-test summaries of every dashboard output.

Usage:
    python main.py
    python main.py report.xlsx [salesperson_id]
"""

import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from sales_dashboard.config import (
    ALL_SALESPEOPLE,
    STORE_FILE,
    WINDOW_DAY,
    WINDOW_LABELS,
    WINDOW_MONTH,
    WINDOW_WEEK,
)
from sales_dashboard.dashboard import (
    format_brl,
    format_pct,
    get_dashboard_view,
    get_ticker_messages,
)
from sales_dashboard.errors import SpreadsheetImportError
from sales_dashboard.kpis import calc_metrics, filter_by_window
from sales_dashboard.loaders import load_daily_records_file
from sales_dashboard.store import SnapshotStore, import_daily_records

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main(argv: list[str]) -> int:
    """Run the full analytics pipeline and print smoke-test outputs."""

    print("=" * 70)
    print("  SALES PERFORMANCE DASHBOARD")
    print("  Analytics Pipeline Smoke Test")
    print("=" * 70)
    print()

    # ------------------------------------------------------------------
    # 1. Load the store
    # ------------------------------------------------------------------
    print("[ 1 ] LOADING SALESPEOPLE")
    print("-" * 40)

    store = SnapshotStore(STORE_FILE)
    salespeople = store.load()
    print(f"\nStore: {store.path}")
    for sp in salespeople:
        print(f"  {sp.initial} | {sp.name:12s} | {len(sp.data):3d} daily records")

    # ------------------------------------------------------------------
    # 2. Optional import
    # ------------------------------------------------------------------
    if len(argv) > 1:
        print("\n")
        print("[ 2 ] IMPORTING DAILY REPORT")
        print("-" * 40)

        workbook_path = argv[1]
        target_id = argv[2] if len(argv) > 2 else (salespeople[0].id if salespeople else None)
        if target_id is None:
            print("\nNo salesperson to import into.")
        else:
            try:
                records = load_daily_records_file(workbook_path)
            except SpreadsheetImportError as e:
                print(f"\nImport rejected: {e}")
            else:
                salespeople = store.mutate(import_daily_records, target_id, records)
                print(f"\nImported {len(records)} rows into '{target_id}' "
                      f"({records.attrs.get('skipped_rows', 0)} rows skipped)")
                print(records.head(10).to_string(index=False))

    # ------------------------------------------------------------------
    # 3. Dashboard outputs
    # ------------------------------------------------------------------
    print("\n")
    print("[ 3 ] DASHBOARD OUTPUTS")
    print("-" * 40)

    for window in (WINDOW_DAY, WINDOW_WEEK, WINDOW_MONTH):
        view = get_dashboard_view(salespeople, ALL_SALESPEOPLE, window)
        m = view["metrics"]
        print(f"\nWindow: {WINDOW_LABELS[window]}")
        print(f"  Team leads {m['total_leads']} | SQL {m['total_qualified_leads']} | "
              f"closed {m['total_contracts_closed']} | paid {format_brl(m['total_paid'])}")
        for entry in view["podium"]:
            print(f"  #{entry['rank']} {entry['name']:12s} {format_brl(entry['total_paid']):>16s} "
                  f"| conv {format_pct(entry['conversion_rate'])}")

    print("\nTicker:")
    for msg in dict.fromkeys(get_ticker_messages(salespeople)):
        print(f"  {msg}")

    # ------------------------------------------------------------------
    # 4. Acceptance checks
    # ------------------------------------------------------------------
    print("\n")
    print("[ 4 ] ACCEPTANCE CRITERIA CHECKS")
    print("-" * 40)

    checks = []
    for sp in salespeople:
        day_n = len(filter_by_window(sp.data, WINDOW_DAY))
        week_n = len(filter_by_window(sp.data, WINDOW_WEEK))
        month_n = len(filter_by_window(sp.data, WINDOW_MONTH))
        checks.append(day_n <= week_n <= month_n)
    check1 = all(checks)
    print(f"\n  [{'PASS' if check1 else 'FAIL'}] Day <= Week <= Month record counts for every salesperson")

    view = get_dashboard_view(salespeople, ALL_SALESPEOPLE, WINDOW_MONTH)
    team_paid = view["metrics"]["total_paid"]
    individual_paid = sum(calc_metrics(sp.data)["total_paid"] for sp in salespeople)
    check2 = abs(team_paid - individual_paid) < 0.01
    print(f"  [{'PASS' if check2 else 'FAIL'}] Team paid {format_brl(team_paid)} equals sum of individuals")

    ranked_paid = view["leaderboard"]["total_paid"].tolist()
    check3 = ranked_paid == sorted(ranked_paid, reverse=True)
    print(f"  [{'PASS' if check3 else 'FAIL'}] Leaderboard ordered by paid amount")

    print("\n" + "=" * 70)
    print("  Pipeline complete.")
    print("=" * 70)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
