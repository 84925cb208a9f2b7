"""
Transaction Models

Raw ledger rows, the tagged lot events they decompose into, and the
lot / match records produced while consuming sales against holdings.
"""
from enum import Enum
from datetime import date
from dataclasses import dataclass, field
from typing import List, Optional


class EventKind(str, Enum):
    OPENING = "opening"
    PURCHASE = "purchase"
    SALE = "sale"


class GainType(str, Enum):
    LTCG = "LTCG"
    STCG = "STCG"


@dataclass(frozen=True)
class LotEvent:
    """
    A single opening, purchase or sale taken from one ledger row.

    Attributes:
        kind: Which triple of the row this event came from
        share: Share identifier
        date: Event date (None if the sheet left it blank)
        quantity: Number of shares, always > 0
        amount: Total value of the event
        row_number: 1-based row number in the uploaded file
    """
    kind: EventKind
    share: str
    date: Optional[date]
    quantity: float
    amount: float
    row_number: int = 0


@dataclass(frozen=True)
class TransactionRow:
    """One uploaded ledger row. Any subset of the three triples may be set."""
    share: str
    opening_date: Optional[date] = None
    opening_qty: float = 0.0
    opening_amt: float = 0.0
    purchase_date: Optional[date] = None
    purchase_qty: float = 0.0
    purchase_amt: float = 0.0
    sale_date: Optional[date] = None
    sale_qty: float = 0.0
    sale_amt: float = 0.0
    row_number: int = 0

    def events(self) -> List[LotEvent]:
        """Decompose the row into tagged events, skipping empty triples"""
        triples = (
            (EventKind.OPENING, self.opening_date, self.opening_qty, self.opening_amt),
            (EventKind.PURCHASE, self.purchase_date, self.purchase_qty, self.purchase_amt),
            (EventKind.SALE, self.sale_date, self.sale_qty, self.sale_amt),
        )
        return [
            LotEvent(kind, self.share, event_date, qty, amt, self.row_number)
            for kind, event_date, qty, amt in triples
            if qty > 0
        ]


@dataclass
class Lot:
    """
    An acquired quantity of a share, consumed FIFO by sales.

    `quantity` is the remaining (unconsumed) amount and is the only
    field that changes during matching.
    """
    share: str
    kind: EventKind
    acquisition_date: Optional[date]
    quantity: float
    unit_cost: float

    @classmethod
    def from_event(cls, event: LotEvent) -> "Lot":
        return cls(
            share=event.share,
            kind=event.kind,
            acquisition_date=event.date,
            quantity=event.quantity,
            unit_cost=event.amount / event.quantity,
        )

    @property
    def remaining_cost(self) -> float:
        return self.unit_cost * self.quantity


@dataclass(frozen=True)
class LotMatch:
    """Part of a sale satisfied from one lot"""
    share: str
    lot_kind: EventKind
    acquisition_date: Optional[date]
    quantity: float
    cost: float
    sale_date: Optional[date]
    proceeds: float


@dataclass
class MatchResult:
    """Lot matcher output for one share"""
    share: str
    matches: List[LotMatch] = field(default_factory=list)
    open_lots: List[Lot] = field(default_factory=list)


@dataclass(frozen=True)
class MatchedTransaction:
    """
    Output record: a sale-lot pairing, or an open lot carried to closing.

    The opening or purchase columns mirror the lot the record came from.
    Gain fields are only set when a sale consumed the lot.
    """
    id: int
    share: str
    opening_date: Optional[date] = None
    opening_qty: float = 0.0
    opening_amt: float = 0.0
    purchase_date: Optional[date] = None
    purchase_qty: float = 0.0
    purchase_amt: float = 0.0
    sale_date: Optional[date] = None
    sale_qty: float = 0.0
    sale_amt: float = 0.0
    gain_type: Optional[GainType] = None
    gain: Optional[float] = None
    holding_months: Optional[int] = None

    @property
    def quantity(self) -> float:
        """Acquired quantity this record accounts for"""
        return self.opening_qty + self.purchase_qty

    @property
    def is_realized(self) -> bool:
        return self.gain_type is not None
