import zipfile
from datetime import date, datetime
from io import BytesIO

import pytest

from sales_dashboard.errors import NoSheetError, NoValidRowsError, UnreadableFileError
from sales_dashboard.loaders import load_daily_records, load_daily_records_file, open_first_sheet
from sales_dashboard.loaders import workbook as workbook_module
from sales_dashboard.loaders.utils import (
    CellValue,
    cell_currency,
    cell_number,
    cell_text,
    days_in_month,
    parse_float_prefix,
    parse_int_prefix,
)

from .conftest import make_workbook


# ---------------------------------------------------------------------------
# Cell extraction policy
# ---------------------------------------------------------------------------

def test_cell_number_prefers_raw_numeric_value():
    assert cell_number(CellValue(7, "007")) == 7


def test_cell_number_parses_display_text():
    assert cell_number(CellValue("12", "12")) == 12
    assert cell_number(CellValue("3 leads", "3 leads")) == 3


def test_cell_number_falls_back_to_zero():
    assert cell_number(None) == 0
    assert cell_number(CellValue("abc", "abc")) == 0
    assert cell_number(CellValue(True, "TRUE")) == 0


def test_parse_int_prefix_truncates_decimals():
    assert parse_int_prefix("4.9") == 4
    assert parse_int_prefix("-2") == -2
    assert parse_int_prefix("x1") is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("R$ 1.234,50", 1234.5),
        ("R$ 997,00", 997.0),
        ("1 500", 1500.0),
        ("-", 0.0),
        ("", 0.0),
    ],
)
def test_cell_currency_cleans_brl_text(text, expected):
    assert cell_currency(CellValue(text, text)) == pytest.approx(expected)


def test_cell_currency_prefers_raw_numeric_value():
    assert cell_currency(CellValue(1299.9, "R$ 1.299,90")) == pytest.approx(1299.9)
    assert cell_currency(None) == 0.0


def test_cell_text_formats_dates():
    assert cell_text(CellValue(datetime(2024, 9, 1), "01/09/2024")) == "01/09/2024"
    assert cell_text(None) == ""


def test_days_in_month():
    assert days_in_month(date(2024, 2, 10)) == 29
    assert days_in_month(date(2023, 2, 10)) == 28
    assert days_in_month(date(2024, 9, 1)) == 30


# ---------------------------------------------------------------------------
# Workbook access
# ---------------------------------------------------------------------------

def test_open_first_sheet_reads_cells():
    payload = make_workbook({6: {"C": "Domingo", "E": 1, "AG": 250.5}})
    sheet = open_first_sheet(payload)

    assert sheet.cell("E", 6).value == 1
    assert sheet.cell("C", 6).text == "Domingo"
    assert sheet.cell("G", 6) is None
    assert sheet.max_row == 6
    assert sheet.dimensions.startswith("A1:")


def test_open_first_sheet_rejects_garbage():
    with pytest.raises(UnreadableFileError):
        open_first_sheet(b"not a spreadsheet at all")


def test_open_first_sheet_rejects_damaged_xml():
    buf = BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("[Content_Types].xml", "garbage<<")
    with pytest.raises(UnreadableFileError):
        open_first_sheet(buf.getvalue())


def test_open_first_sheet_without_worksheets(monkeypatch):
    class EmptyWorkbook:
        worksheets = []
        sheetnames = []

    monkeypatch.setattr(workbook_module.openpyxl, "load_workbook", lambda *a, **k: EmptyWorkbook())
    with pytest.raises(NoSheetError):
        open_first_sheet(make_workbook({}))


# ---------------------------------------------------------------------------
# Record parser
# ---------------------------------------------------------------------------

def test_row_validity_gate(september):
    payload = make_workbook({
        6: {"E": 0, "G": 99},
        7: {"E": 1, "G": 5},
        8: {"E": 31, "G": 99},
        9: {"E": "total", "G": 99},
        10: {"E": 30, "G": 6},
    })
    df = load_daily_records(payload, today=september)

    assert df["day"].tolist() == [1, 30]
    assert df["new_leads"].tolist() == [5, 6]
    assert df.attrs["skipped_rows"] == 3


def test_rows_before_start_row_are_ignored(september):
    payload = make_workbook({
        5: {"E": 3, "G": 40},
        6: {"E": 4, "G": 2},
    })
    df = load_daily_records(payload, today=september)
    assert df["day"].tolist() == [4]


def test_tier_derivation(september):
    payload = make_workbook({
        6: {"E": 2, "K": 2, "S": 1, "AA": 0, "M": 1, "U": 1, "AC": 1},
    })
    rec = load_daily_records(payload, today=september).iloc[0]

    assert rec["contracts_closed"] == 3
    assert rec["contracts_value"] == 2 * 1299 + 1 * 997 + 0 * 847 == 3595
    assert rec["contracts_signed"] == 3


def test_full_row_fields(september):
    payload = make_workbook({
        6: {
            "C": "Segunda-Feira", "E": 9, "G": 20, "I": "8",
            "K": 1, "AE": "R$ 1.000,00", "AG": 2500.75,
        },
    })
    rec = load_daily_records(payload, today=september).iloc[0]

    assert rec["day_label"] == "Segunda-Feira"
    assert rec["qualified_leads"] == 8
    assert rec["paid_within_5_days"] == pytest.approx(1000.0)
    assert rec["paid"] == pytest.approx(2500.75)
    assert rec["contracts_value"] == 1299


def test_output_follows_row_order_not_day_order(september):
    payload = make_workbook({
        6: {"E": 10},
        7: {"E": 3},
        8: {"E": 7},
    })
    df = load_daily_records(payload, today=september)
    assert df["day"].tolist() == [10, 3, 7]


def test_duplicate_days_are_kept(september):
    payload = make_workbook({6: {"E": 2, "G": 1}, 7: {"E": 2, "G": 4}})
    df = load_daily_records(payload, today=september)
    assert len(df) == 2


def test_all_rows_invalid_raises_with_days_in_month(september):
    payload = make_workbook({6: {"E": 0}, 7: {"E": 31}, 8: {"E": "x"}})

    with pytest.raises(NoValidRowsError) as excinfo:
        load_daily_records(payload, today=september)

    assert excinfo.value.days_in_month == 30
    assert "1 a 30" in str(excinfo.value)


def test_day_range_follows_reference_month():
    payload = make_workbook({6: {"E": 30}})

    with pytest.raises(NoValidRowsError) as excinfo:
        load_daily_records(payload, today=date(2023, 2, 1))
    assert excinfo.value.days_in_month == 28

    df = load_daily_records(payload, today=date(2023, 3, 1))
    assert df["day"].tolist() == [30]


def test_parse_float_prefix():
    assert parse_float_prefix("3.5x") == 3.5
    assert parse_float_prefix("1234.50") == 1234.5
    assert parse_float_prefix("R$") is None


def test_load_daily_records_file_reads_from_disk(tmp_path, september):
    path = tmp_path / "relatorio.xlsx"
    path.write_bytes(make_workbook({6: {"E": 1, "G": 10, "AG": 500}}))

    df = load_daily_records_file(path, today=september)

    assert df["day"].tolist() == [1]
    assert df["new_leads"].tolist() == [10]


def test_load_daily_records_file_missing_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_daily_records_file(tmp_path / "nao_existe.xlsx")
