"""
Position Service

Rolls matched and open lots into per-share closing balances and the
portfolio-wide summary.
"""
from typing import Iterable, List, Sequence

from ..config import setup_logger
from ..exceptions import OversoldError
from ..models import ClosingBalance, Lot, MatchedTransaction, Ratio, Summary, TransactionRow, GainType


logger = setup_logger(name="PositionService")

QTY_EPSILON = 1e-9


class PositionAggregator:
    """Builds closing balances and the portfolio summary"""

    def closing_balance(self, share: str, rows: Sequence[TransactionRow],
                        transactions: List[MatchedTransaction],
                        open_lots: Iterable[Lot]) -> ClosingBalance:
        """
        Aggregate one share.

        Opening, purchase and sale totals come from the input rows, so
        original magnitudes survive regardless of matching. Closing
        quantity and amount follow by conservation.

        Raises:
            OversoldError: If closing quantity would be negative
        """
        opening_qty = sum(r.opening_qty for r in rows)
        opening_amt = sum(r.opening_amt for r in rows)
        purchase_qty = sum(r.purchase_qty for r in rows)
        purchase_amt = sum(r.purchase_amt for r in rows)
        sale_qty = sum(r.sale_qty for r in rows)
        sale_amt = sum(r.sale_amt for r in rows)

        closing_qty = opening_qty + purchase_qty - sale_qty
        if closing_qty < -QTY_EPSILON:
            logger.warning(f"{share}: inconsistent position, closing quantity {closing_qty}")
            raise OversoldError(share, sale_qty, opening_qty + purchase_qty)
        closing_qty = max(0.0, closing_qty)
        closing_amt = opening_amt + purchase_amt - sale_amt

        realized = [t for t in transactions if t.is_realized]
        open_lots = list(open_lots)
        acquisition_dates = [lot.acquisition_date for lot in open_lots
                             if lot.acquisition_date is not None]

        return ClosingBalance(
            share=share,
            opening_qty=opening_qty,
            opening_amt=round(opening_amt, 2),
            purchase_qty=purchase_qty,
            purchase_amt=round(purchase_amt, 2),
            sale_qty=sale_qty,
            sale_amt=round(sale_amt, 2),
            closing_qty=round(closing_qty, 6),
            closing_amt=round(closing_amt, 2),
            avg_cost_price=round(closing_amt / closing_qty, 2) if closing_qty > QTY_EPSILON else 0.0,
            realized_gain=round(sum(t.gain for t in realized), 2),
            ltcg=round(sum(t.gain for t in realized if t.gain_type == GainType.LTCG), 2),
            stcg=round(sum(t.gain for t in realized if t.gain_type == GainType.STCG), 2),
            cost_basis=round(sum(lot.remaining_cost for lot in open_lots), 2),
            first_purchase_date=min(acquisition_dates) if acquisition_dates else None,
            transactions=transactions,
        )

    @staticmethod
    def summarize(balances: Iterable[ClosingBalance]) -> Summary:
        """
        Portfolio summary over all closing balances.

        portfolioReturn = (realized + unrealized) / (opening + purchase) * 100,
        undefined when there is no opening or purchase value.
        """
        balances = list(balances)
        total_opening = sum(b.opening_amt for b in balances)
        total_purchase = sum(b.purchase_amt for b in balances)
        total_closing = sum(b.closing_amt for b in balances)
        total_realized = sum(b.realized_gain for b in balances)
        total_unrealized = total_closing - sum(b.cost_basis for b in balances)

        return Summary(
            total_shares=len([b for b in balances if b.closing_qty > 0]),
            total_opening_value=round(total_opening, 2),
            total_purchase_value=round(total_purchase, 2),
            total_sale_value=round(sum(b.sale_amt for b in balances), 2),
            total_closing_value=round(total_closing, 2),
            total_realized_gain=round(total_realized, 2),
            total_unrealized_gain=round(total_unrealized, 2),
            portfolio_return=Ratio.percentage(
                total_realized + total_unrealized, total_opening + total_purchase
            ),
        )
