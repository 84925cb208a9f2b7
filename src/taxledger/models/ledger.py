"""
Ledger Models

Aggregated results of a ledger computation: per-share closing balances,
the portfolio summary, capital gains tax figures and the Ledger itself.
"""
from datetime import date, datetime
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .tax_config import TaxConfig
from .transaction import MatchedTransaction, TransactionRow


@dataclass(frozen=True)
class Ratio:
    """
    A percentage that may be undefined (zero or non-positive base).

    Formatting of the undefined case is left to the API schemas.
    """
    value: Optional[float] = None

    @classmethod
    def undefined(cls) -> "Ratio":
        return cls(None)

    @classmethod
    def percentage(cls, numerator: float, denominator: float) -> "Ratio":
        if denominator == 0:
            return cls.undefined()
        return cls(numerator / denominator * 100)

    @property
    def is_defined(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class TaxDetails:
    taxable_gain: float = 0.0
    rate: float = 0.0
    base_tax: float = 0.0
    cess: float = 0.0
    total_tax: float = 0.0
    effective_rate: Ratio = field(default_factory=Ratio.undefined)


@dataclass(frozen=True)
class CapitalGains:
    total_ltcg: float = 0.0
    total_stcg: float = 0.0
    ltcg_exemption: float = 0.0
    ltcg_after_exemption: float = 0.0
    ltcg_tax: TaxDetails = field(default_factory=TaxDetails)
    stcg_tax: TaxDetails = field(default_factory=TaxDetails)
    total_tax: float = 0.0
    net_gain: float = 0.0


@dataclass(frozen=True)
class ClosingBalance:
    share: str
    opening_qty: float = 0.0
    opening_amt: float = 0.0
    purchase_qty: float = 0.0
    purchase_amt: float = 0.0
    sale_qty: float = 0.0
    sale_amt: float = 0.0
    closing_qty: float = 0.0
    closing_amt: float = 0.0
    avg_cost_price: float = 0.0
    realized_gain: float = 0.0
    ltcg: float = 0.0
    stcg: float = 0.0
    cost_basis: float = 0.0
    first_purchase_date: Optional[date] = None
    transactions: List[MatchedTransaction] = field(default_factory=list)


@dataclass(frozen=True)
class Summary:
    total_shares: int = 0
    total_opening_value: float = 0.0
    total_purchase_value: float = 0.0
    total_sale_value: float = 0.0
    total_closing_value: float = 0.0
    total_realized_gain: float = 0.0
    total_unrealized_gain: float = 0.0
    portfolio_return: Ratio = field(default_factory=Ratio.undefined)


@dataclass(frozen=True)
class Ledger:
    """
    Session-scoped computation result.

    Never mutated after construction. A config change produces a new
    Ledger from the same rows, which replaces this one in the session.
    """
    rows: List[TransactionRow]
    transactions: List[MatchedTransaction]
    closing_balances: List[ClosingBalance]
    summary: Summary
    capital_gains: CapitalGains
    tax_config: TaxConfig
    config_version: int = 0
    errors: List[Dict] = field(default_factory=list)
    session_id: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def empty(cls, tax_config: TaxConfig, config_version: int = 0) -> "Ledger":
        """No-holdings ledger returned before any upload"""
        return cls(
            rows=[],
            transactions=[],
            closing_balances=[],
            summary=Summary(),
            capital_gains=CapitalGains(ltcg_exemption=tax_config.ltcg.exemption_limit),
            tax_config=tax_config,
            config_version=config_version,
        )
