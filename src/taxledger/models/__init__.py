from .transaction import (
    EventKind, GainType, LotEvent, TransactionRow, Lot, LotMatch, MatchResult, MatchedTransaction
)
from .tax_config import StcgConfig, LtcgConfig, TaxConfig
from .ledger import Ratio, TaxDetails, CapitalGains, ClosingBalance, Summary, Ledger


__all__ = [
    "EventKind",
    "GainType",
    "LotEvent",
    "TransactionRow",
    "Lot",
    "LotMatch",
    "MatchResult",
    "MatchedTransaction",
    "StcgConfig",
    "LtcgConfig",
    "TaxConfig",
    "Ratio",
    "TaxDetails",
    "CapitalGains",
    "ClosingBalance",
    "Summary",
    "Ledger",
]
