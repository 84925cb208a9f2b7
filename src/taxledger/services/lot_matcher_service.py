"""
Lot Matcher Service

FIFO matching of sales against a share's acquisition lots.
"""
from collections import deque
from typing import Deque, List, Sequence

from ..config import setup_logger
from ..exceptions import OversoldError
from ..models import EventKind, Lot, LotEvent, LotMatch, MatchResult, TransactionRow


logger = setup_logger(name="LotMatcher")

# Quantities below this are treated as fully consumed (float noise)
QTY_EPSILON = 1e-9


class LotMatcher:
    """
    Consumes sales against acquisition lots in FIFO order.

    All opening lots are queued ahead of all purchase lots, each group
    in file order, irrespective of how the rows are interleaved. Lots
    live in an arena and the queue holds arena indices; the lot at the
    head is shrunk in place on partial consumption.
    """

    def match(self, share: str, rows: Sequence[TransactionRow]) -> MatchResult:
        """
        Match all sales of one share.

        Parameters:
            share (str): Share identifier
            rows (Sequence[TransactionRow]): The share's rows in file order

        Returns:
            MatchResult: matched pieces and the remaining open lots

        Raises:
            OversoldError: If a sale exceeds the remaining lot quantity
        """
        events = [event for row in rows for event in row.events()]
        lots = self._build_lots(events)
        queue: Deque[int] = deque(range(len(lots)))

        matches: List[LotMatch] = []
        for sale in (e for e in events if e.kind == EventKind.SALE):
            matches.extend(self._consume(share, sale, lots, queue))

        open_lots = [lots[idx] for idx in queue]
        logger.info(
            f"{share}: {len(matches)} matched pieces, {len(open_lots)} open lots"
        )
        return MatchResult(share=share, matches=matches, open_lots=open_lots)

    @staticmethod
    def _build_lots(events: List[LotEvent]) -> List[Lot]:
        opening = [Lot.from_event(e) for e in events if e.kind == EventKind.OPENING]
        purchases = [Lot.from_event(e) for e in events if e.kind == EventKind.PURCHASE]
        return opening + purchases

    @staticmethod
    def _consume(share: str, sale: LotEvent, lots: List[Lot],
                 queue: Deque[int]) -> List[LotMatch]:
        available = sum(lots[idx].quantity for idx in queue)
        if sale.quantity - available > QTY_EPSILON:
            logger.warning(
                f"{share}: sale of {sale.quantity} on {sale.date} exceeds "
                f"available {available}"
            )
            raise OversoldError(share, sale.quantity, available)

        pieces = []
        remaining = sale.quantity
        while remaining > QTY_EPSILON:
            lot = lots[queue[0]]
            take = min(lot.quantity, remaining)

            pieces.append(LotMatch(
                share=share,
                lot_kind=lot.kind,
                acquisition_date=lot.acquisition_date,
                quantity=take,
                cost=lot.unit_cost * take,
                sale_date=sale.date,
                proceeds=sale.amount * take / sale.quantity,
            ))

            lot.quantity -= take
            remaining -= take
            if lot.quantity <= QTY_EPSILON:
                lot.quantity = 0.0
                queue.popleft()

        return pieces
