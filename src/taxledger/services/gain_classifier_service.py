"""
Gain Classifier Service

Turns matched lot pieces into LTCG/STCG transactions with realized gain.
"""
from itertools import count
from typing import Iterator, List, Optional

from ..models import EventKind, Lot, LotMatch, MatchResult, MatchedTransaction, TaxConfig
from ..utils import classify_holding


class GainClassifier:
    """
    Classifies matches using the TaxConfig snapshot it was built with.

    Holding >= ltcg.holdingPeriod months is LTCG, otherwise STCG.
    """

    def __init__(self, config: TaxConfig, id_sequence: Optional[Iterator[int]] = None):
        self.config = config
        self._ids = id_sequence or count(1)

    def classify(self, result: MatchResult) -> List[MatchedTransaction]:
        """
        Classify one share's matches and append its open lots.

        Returns:
            list: realized transactions (sale order) then open lots
        """
        realized = [self._classify_match(match) for match in result.matches]
        unrealized = [self._open_lot(result.share, lot) for lot in result.open_lots]
        return realized + unrealized

    def _classify_match(self, match: LotMatch) -> MatchedTransaction:
        gain_type, holding_months = classify_holding(
            match.acquisition_date, match.sale_date, self.config.ltcg.holding_period
        )
        return MatchedTransaction(
            id=next(self._ids),
            share=match.share,
            **self._acquisition_fields(match.lot_kind, match.acquisition_date,
                                       match.quantity, match.cost),
            sale_date=match.sale_date,
            sale_qty=round(match.quantity, 6),
            sale_amt=round(match.proceeds, 2),
            gain_type=gain_type,
            gain=round(match.proceeds - match.cost, 2),
            holding_months=holding_months,
        )

    def _open_lot(self, share: str, lot: Lot) -> MatchedTransaction:
        return MatchedTransaction(
            id=next(self._ids),
            share=share,
            **self._acquisition_fields(lot.kind, lot.acquisition_date,
                                       lot.quantity, lot.remaining_cost),
        )

    @staticmethod
    def _acquisition_fields(kind, acquisition_date, quantity, cost) -> dict:
        prefix = "opening" if kind == EventKind.OPENING else "purchase"
        return {
            f"{prefix}_date": acquisition_date,
            f"{prefix}_qty": round(quantity, 6),
            f"{prefix}_amt": round(cost, 2),
        }
