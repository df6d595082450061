"""
Sales Performance Dashboard

Analytics backend that turns per-salesperson daily report workbooks into
windowed metrics, a paid-amount leaderboard and team trend series.

To swap the local JSON store for a database or a live Google Sheets feed:
    Replace store.SnapshotStore (or refresh_sales_data) with a reader that
    returns Salesperson objects. The record schema in config stays unchanged.

To connect to Streamlit/Dash:
    Call dashboard.get_dashboard_view(salespeople, selected_id, window) to
    get a plain dict for the podium, metric cards and trend chart.

To change the workbook layout:
    Edit the column constants and TIER_PRICES in config; the parser reads
    every column through them.
"""
