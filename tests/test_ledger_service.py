import io

import pytest

from taxledger.exceptions import MalformedRowError
from taxledger.models import GainType, TaxConfig
from taxledger.services import build_ledger


def test_scenario_a_end_to_end(scenario_a_rows, tax_config):
    ledger = build_ledger(scenario_a_rows, tax_config)

    (balance,) = ledger.closing_balances
    assert (balance.closing_qty, balance.closing_amt) == (60, 183000)
    assert ledger.capital_gains.total_ltcg == 18000
    assert ledger.capital_gains.ltcg_after_exemption == 0
    assert ledger.capital_gains.total_tax == 0
    assert ledger.capital_gains.net_gain == 18000
    assert ledger.summary.total_realized_gain == 18000
    assert ledger.errors == []


def test_oversold_share_is_excluded_from_totals(row, scenario_a_rows, tax_config):
    rows = scenario_a_rows + [
        row("ITC", opening=("2024-04-01", 10, 4000)),
        row("ITC", sale=("2024-08-01", 15, 6750)),
    ]

    ledger = build_ledger(rows, tax_config)

    assert [b.share for b in ledger.closing_balances] == ["TCS"]
    assert {t.share for t in ledger.transactions} == {"TCS"}
    assert ledger.errors == [{
        "share": "ITC",
        "kind": "Oversold",
        "message": "ITC: sale of 15 exceeds available quantity 10",
    }]
    assert ledger.summary.total_opening_value == 165000
    assert ledger.capital_gains.total_ltcg == 18000
    # raw rows are kept so a later recompute sees the same input
    assert len(ledger.rows) == 3


def test_fifo_invariant_across_portfolio(row, tax_config):
    rows = [
        row("TCS", opening=("2023-05-15", 50, 165000)),
        row("INFY", purchase=("2024-06-01", 40, 60000)),
        row("TCS", purchase=("2025-01-10", 30, 102000), sale=("2025-02-01", 70, 280000)),
        row("INFY", sale=("2025-03-01", 15, 27000)),
    ]

    ledger = build_ledger(rows, tax_config)

    for balance in ledger.closing_balances:
        acquired = sum(t.quantity for t in balance.transactions)
        sold = sum(t.sale_qty for t in balance.transactions if t.is_realized)
        assert acquired == pytest.approx(balance.opening_qty + balance.purchase_qty)
        assert sold == pytest.approx(balance.sale_qty)
        assert balance.closing_qty == pytest.approx(
            balance.opening_qty + balance.purchase_qty - balance.sale_qty
        )
    assert [t.id for t in ledger.transactions] == list(range(1, len(ledger.transactions) + 1))


def test_ledgers_built_before_and_after_update_use_their_own_snapshot(scenario_a_rows, ledger_service):
    before = ledger_service.load_rows(scenario_a_rows, "before")
    ledger_service.config_repo.update_config({"ltcg": {"holding_period": 36}})
    after = ledger_service.load_rows(scenario_a_rows, "after")

    assert before.transactions[0].gain_type == GainType.LTCG
    assert before.capital_gains.total_ltcg == 18000 and before.capital_gains.total_stcg == 0
    assert after.transactions[0].gain_type == GainType.STCG
    assert after.capital_gains.total_stcg == 18000 and after.capital_gains.total_ltcg == 0


def test_config_update_recomputes_session_ledger(scenario_a_rows, ledger_service):
    original = ledger_service.load_rows(scenario_a_rows, "sid-1")

    config, ledger = ledger_service.update_config({"ltcg": {"holding_period": 36}}, session_id="sid-1")

    assert config.ltcg.holding_period == 36
    assert ledger is not original
    assert ledger.config_version == 1
    assert ledger.tax_config.ltcg.holding_period == 36
    assert ledger.capital_gains.total_stcg == 18000
    assert ledger.capital_gains.stcg_tax.total_tax == 3744
    assert ledger_service.get_ledger("sid-1") is ledger
    # the replaced ledger is untouched
    assert original.capital_gains.total_ltcg == 18000


def test_other_sessions_recompute_on_next_read(scenario_a_rows, ledger_service):
    stale = ledger_service.load_rows(scenario_a_rows, "sid-2")
    ledger_service.update_config({"ltcg": {"holding_period": 36}}, session_id="sid-1")

    current = ledger_service.get_ledger("sid-2")

    assert current is not stale
    assert current.config_version == 1
    assert ledger_service.get_ledger("sid-2") is current


def test_no_session_returns_empty_ledger(ledger_service):
    assert ledger_service.get_ledger("missing") is None

    empty = ledger_service.get_ledger_or_empty(None)

    assert empty.closing_balances == []
    assert empty.session_id is None
    assert empty.capital_gains.ltcg_exemption == 125000
    assert not empty.summary.portfolio_return.is_defined


def test_upload_assigns_session(ledger_service, scenario_a_csv):
    ledger = ledger_service.upload(io.BytesIO(scenario_a_csv), "ledger.csv")

    assert ledger.session_id
    assert ledger_service.get_ledger(ledger.session_id) is ledger


def test_malformed_upload_leaves_session_untouched(ledger_service, scenario_a_csv):
    ledger = ledger_service.upload(io.BytesIO(scenario_a_csv), "ledger.csv", session_id="sid")
    bad = b"share,openingDate,openingQty,openingAmt\nTCS,2024-04-01,-5,1000\n"

    with pytest.raises(MalformedRowError):
        ledger_service.upload(io.BytesIO(bad), "ledger.csv", session_id="sid")

    assert ledger_service.get_ledger("sid") is ledger


def test_ledger_uses_snapshot_captured_at_build(scenario_a_rows):
    config = TaxConfig.defaults()
    ledger = build_ledger(scenario_a_rows, config)

    assert ledger.tax_config is config


def test_config_update_for_other_year_leaves_ledger_alone(scenario_a_rows, ledger_service):
    original = ledger_service.load_rows(scenario_a_rows, "sid-1")

    config, ledger = ledger_service.update_config(
        {"ltcg": {"holding_period": 36}}, session_id="sid-1", financial_year="2030-2031"
    )

    assert config.financial_year == "2030-2031"
    assert ledger is None
    assert ledger_service.get_ledger("sid-1") is original


def test_end_session(scenario_a_rows, ledger_service):
    ledger_service.load_rows(scenario_a_rows, "sid-1")

    assert ledger_service.end_session("sid-1") is True
    assert ledger_service.get_ledger("sid-1") is None
    assert ledger_service.end_session("sid-1") is False
