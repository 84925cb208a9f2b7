"""
Tax Config Models

Immutable per-financial-year tax parameters. Updates produce a new
TaxConfig via `merged`, so any reference held is a stable snapshot.
"""
from dataclasses import dataclass, field, replace, asdict
from typing import Dict, Optional

from ..config import TaxDefaults


@dataclass(frozen=True)
class StcgConfig:
    rate: float = TaxDefaults.stcg_rate
    cess: float = TaxDefaults.stcg_cess
    holding_period: int = TaxDefaults.stcg_holding_period
    description: str = TaxDefaults.stcg_description


@dataclass(frozen=True)
class LtcgConfig:
    rate: float = TaxDefaults.ltcg_rate
    cess: float = TaxDefaults.ltcg_cess
    holding_period: int = TaxDefaults.ltcg_holding_period
    exemption_limit: float = TaxDefaults.ltcg_exemption_limit
    # Stored and echoed only, LTCG is never indexed
    indexation_benefit: bool = TaxDefaults.ltcg_indexation_benefit
    description: str = TaxDefaults.ltcg_description


@dataclass(frozen=True)
class TaxConfig:
    financial_year: str = TaxDefaults.financial_year
    stcg: StcgConfig = field(default_factory=StcgConfig)
    ltcg: LtcgConfig = field(default_factory=LtcgConfig)

    @classmethod
    def defaults(cls, financial_year: Optional[str] = None) -> "TaxConfig":
        return cls(financial_year=financial_year or TaxDefaults.financial_year)

    def merged(self, changes: Dict) -> "TaxConfig":
        """
        Return a copy with only the supplied fields replaced.

        Parameters:
            changes (dict): Partial config, e.g. {"ltcg": {"rate": 10.0}}

        Returns:
            TaxConfig: New config, self is left untouched
        """
        stcg = replace(self.stcg, **changes.get("stcg", {}))
        ltcg = replace(self.ltcg, **changes.get("ltcg", {}))
        return replace(self, stcg=stcg, ltcg=ltcg)

    def to_dict(self) -> Dict:
        return asdict(self)
