import io
from datetime import date

import pandas as pd
import pytest

from taxledger.exceptions import MalformedRowError, UnsupportedFileError
from taxledger.services import ImportService
from taxledger.services.import_service import normalize_header


def _read(content: str, filename="ledger.csv"):
    return ImportService().read_upload(io.BytesIO(content.encode("utf-8")), filename)


def test_reads_csv_rows_in_file_order(scenario_a_csv):
    (row,) = ImportService().read_upload(io.BytesIO(scenario_a_csv), "ledger.csv")

    assert row.share == "TCS"
    assert row.opening_date == date(2023, 5, 15)
    assert (row.opening_qty, row.opening_amt) == (50, 165000)
    assert (row.purchase_qty, row.purchase_amt) == (30, 102000)
    assert row.sale_date == date(2025, 8, 20)
    assert row.row_number == 2


@pytest.mark.parametrize("header, field", [
    ("share", "share"),
    ("Stock", "share"),
    ("Opening Date", "opening_date"),
    ("opening_date", "opening_date"),
    ("openingDate", "opening_date"),
    ("Purchase Quantity", "purchase_qty"),
    ("Sale Amount", "sale_amt"),
    ("Remarks", None),
])
def test_normalize_header(header, field):
    assert normalize_header(header) == field


def test_blank_cells_and_partial_triples():
    rows = _read(
        "Share,Opening Date,Opening Qty,Opening Amt,Sale Date,Sale Qty,Sale Amt,Remarks\n"
        "INFY,2024-04-01,10,15000,,,,carried\n"
        "INFY,,,,2025-01-15,4,7200,\n"
        ",,,,,,,\n"
    )

    assert len(rows) == 2
    assert rows[0].sale_qty == 0 and rows[0].sale_date is None
    assert rows[1].opening_qty == 0
    assert rows[1].purchase_qty == 0
    assert [e.kind.value for e in rows[1].events()] == ["sale"]


def test_day_first_dates_and_thousands_separators():
    (row,) = _read('share,purchaseDate,purchaseQty,purchaseAmt\nTCS,10-06-2025,30,"1,02,000"\n')

    assert row.purchase_date == date(2025, 6, 10)
    assert row.purchase_amt == 102000


def test_malformed_rows_are_all_reported():
    with pytest.raises(MalformedRowError) as exc:
        _read(
            "share,openingDate,openingQty,openingAmt\n"
            ",2024-04-01,10,1000\n"
            "TCS,2024-04-01,-10,1000\n"
            "INFY,someday,10,1000\n"
            "ITC,2024-04-01,ten,1000\n"
        )

    errors = exc.value.errors
    assert [(e["row"], e["field"]) for e in errors] == [
        (2, "share"),
        (3, "opening_qty"),
        (4, "opening_date"),
        (5, "opening_qty"),
    ]


def test_missing_share_column():
    with pytest.raises(MalformedRowError):
        _read("stockname,openingQty\nTCS,10\n")


def test_reads_xlsx():
    df = pd.DataFrame([{
        "share": "TCS", "openingDate": pd.Timestamp("2023-05-15"), "openingQty": 50, "openingAmt": 165000,
    }])
    buffer = io.BytesIO()
    df.to_excel(buffer, index=False, engine="openpyxl")
    buffer.seek(0)

    (row,) = ImportService().read_upload(buffer, "ledger.xlsx")

    assert row.opening_date == date(2023, 5, 15)
    assert row.opening_qty == 50


@pytest.mark.parametrize("content, filename", [
    (b"share\nTCS\n", "ledger.txt"),
    (b"", "ledger.csv"),
    (b"not a workbook", "ledger.xlsx"),
    (b"share,openingQty\n", "ledger.csv"),
])
def test_unsupported_or_empty_files(content, filename):
    with pytest.raises(UnsupportedFileError):
        ImportService().read_upload(io.BytesIO(content), filename)


@pytest.mark.parametrize("raw", ["2023-05-15garbage", "2023-05-15 x", "15-05-2023x", "2023-5-15"])
def test_trailing_junk_in_date_is_rejected(raw):
    with pytest.raises(MalformedRowError) as exc:
        _read(f"share,openingDate,openingQty,openingAmt\nTCS,{raw},50,165000\n")

    assert exc.value.errors == [
        {"row": 2, "field": "opening_date", "message": f"unparsable date: {raw}"}
    ]


@pytest.mark.parametrize("raw", ["inf", "-inf", "1e400"])
def test_non_finite_numbers_are_rejected(raw):
    with pytest.raises(MalformedRowError) as exc:
        _read(f"share,openingDate,openingQty,openingAmt\nTCS,2023-05-15,{raw},165000\n")

    assert [(e["row"], e["field"]) for e in exc.value.errors] == [(2, "opening_qty")]


def test_reads_xls_with_xlrd(monkeypatch):
    calls = []

    def fake_read_excel(buffer, engine=None):
        calls.append(engine)
        return pd.DataFrame([{"share": "TCS", "openingDate": "2023-05-15", "openingQty": 50, "openingAmt": 165000}])

    monkeypatch.setattr(pd, "read_excel", fake_read_excel)

    (row,) = ImportService().read_upload(io.BytesIO(b"\xd0\xcf\x11\xe0"), "Ledger.XLS")

    assert calls == ["xlrd"]
    assert row.share == "TCS"
    assert row.opening_date == date(2023, 5, 15)


def test_corrupt_xls_is_rejected_as_unreadable():
    with pytest.raises(UnsupportedFileError) as exc:
        ImportService().read_upload(io.BytesIO(b"not a workbook"), "ledger.xls")

    assert "Could not read ledger.xls" in exc.value.message
