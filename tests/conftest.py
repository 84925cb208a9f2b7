import os
import tempfile

# Keep test log files out of the working tree
os.environ.setdefault("TAXLEDGER_LOG_DIR", tempfile.mkdtemp(prefix="taxledger-logs-"))

from datetime import date

import pytest

from taxledger.app import create_app
from taxledger.config import TestConfig
from taxledger.models import TaxConfig, TransactionRow
from taxledger.repositories import SessionRepository, TaxConfigRepository
from taxledger.services import LedgerService


SCENARIO_A_CSV = (
    "share,openingDate,openingQty,openingAmt,purchaseDate,purchaseQty,purchaseAmt,saleDate,saleQty,saleAmt\n"
    "TCS,2023-05-15,50,165000,2025-06-10,30,102000,2025-08-20,20,84000\n"
)


def make_row(share="TCS", opening=None, purchase=None, sale=None, row_number=0):
    """
    Build a TransactionRow from (date, qty, amount) tuples.

    Dates may be ISO strings.
    """
    values = {}
    for prefix, triple in (("opening", opening), ("purchase", purchase), ("sale", sale)):
        if triple is None:
            continue
        event_date, qty, amt = triple
        if isinstance(event_date, str):
            event_date = date.fromisoformat(event_date)
        values[f"{prefix}_date"] = event_date
        values[f"{prefix}_qty"] = float(qty)
        values[f"{prefix}_amt"] = float(amt)
    return TransactionRow(share=share, row_number=row_number, **values)


@pytest.fixture
def tax_config():
    return TaxConfig.defaults("2025-2026")


@pytest.fixture
def scenario_a_rows():
    """TCS: opening 50 @ 3300, purchase 30 @ 3400, sale 20 for 84000"""
    return [
        make_row(
            "TCS",
            opening=("2023-05-15", 50, 165000),
            purchase=("2025-06-10", 30, 102000),
            sale=("2025-08-20", 20, 84000),
        )
    ]


@pytest.fixture
def ledger_service():
    return LedgerService(TaxConfigRepository("2025-2026"), SessionRepository())


@pytest.fixture
def app():
    return create_app(TestConfig)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def row():
    """Factory fixture for TransactionRow, see make_row"""
    return make_row


@pytest.fixture
def scenario_a_csv():
    return SCENARIO_A_CSV.encode("utf-8")
