import pytest

from taxledger.exceptions import OversoldError
from taxledger.models import EventKind
from taxledger.services import LotMatcher


def test_sale_consumes_opening_lot_first(scenario_a_rows):
    result = LotMatcher().match("TCS", scenario_a_rows)

    assert len(result.matches) == 1
    match = result.matches[0]
    assert match.lot_kind == EventKind.OPENING
    assert match.quantity == 20
    assert match.cost == pytest.approx(66000)
    assert match.proceeds == pytest.approx(84000)

    assert [(lot.kind, lot.quantity) for lot in result.open_lots] == [
        (EventKind.OPENING, 30),
        (EventKind.PURCHASE, 30),
    ]


def test_opening_lots_queued_ahead_of_earlier_purchase_rows(row):
    rows = [
        row("INFY", purchase=("2024-06-01", 10, 15000)),
        row("INFY", opening=("2024-04-01", 5, 7000)),
        row("INFY", sale=("2025-01-10", 8, 12800)),
    ]

    result = LotMatcher().match("INFY", rows)

    assert [(m.lot_kind, m.quantity) for m in result.matches] == [
        (EventKind.OPENING, 5),
        (EventKind.PURCHASE, 3),
    ]
    assert result.matches[0].cost == pytest.approx(7000)
    assert result.matches[1].cost == pytest.approx(4500)
    # proceeds split in proportion to quantity
    assert result.matches[0].proceeds == pytest.approx(8000)
    assert result.matches[1].proceeds == pytest.approx(4800)
    assert len(result.open_lots) == 1
    assert result.open_lots[0].quantity == 7


def test_partial_consumption_leaves_remainder_at_head(row):
    rows = [
        row("HDFC", purchase=("2024-01-01", 10, 1000)),
        row("HDFC", purchase=("2024-02-01", 10, 2000)),
        row("HDFC", sale=("2024-03-01", 4, 600)),
        row("HDFC", sale=("2024-04-01", 8, 1600)),
    ]

    result = LotMatcher().match("HDFC", rows)

    assert [m.quantity for m in result.matches] == [4, 6, 2]
    assert [m.cost for m in result.matches] == pytest.approx([400, 600, 400])
    assert result.open_lots[0].quantity == 8
    assert result.open_lots[0].remaining_cost == pytest.approx(1600)


def test_fifo_quantities_are_conserved(row):
    rows = [
        row("WIPRO", opening=("2023-04-01", 100, 40000)),
        row("WIPRO", purchase=("2024-05-01", 50, 22500), sale=("2024-06-01", 120, 60000)),
        row("WIPRO", purchase=("2024-07-01", 25, 11000), sale=("2025-01-01", 40, 19000)),
    ]

    result = LotMatcher().match("WIPRO", rows)

    assert sum(m.quantity for m in result.matches) == pytest.approx(160)
    assert sum(lot.quantity for lot in result.open_lots) == pytest.approx(15)


def test_oversold_sale_is_rejected(row):
    rows = [
        row("ITC", opening=("2024-04-01", 10, 4000)),
        row("ITC", sale=("2024-08-01", 12, 5400)),
    ]

    with pytest.raises(OversoldError) as exc:
        LotMatcher().match("ITC", rows)

    assert exc.value.share == "ITC"
    assert exc.value.sale_qty == 12
    assert exc.value.available_qty == 10


def test_rows_without_sales_leave_all_lots_open(row):
    rows = [row("ITC", opening=("2024-04-01", 10, 4000)), row("ITC", purchase=("2024-05-01", 5, 2100))]

    result = LotMatcher().match("ITC", rows)

    assert result.matches == []
    assert [lot.quantity for lot in result.open_lots] == [10, 5]
