from typing import Iterable, Optional, Tuple
from datetime import date

from ..models import GainType, LtcgConfig, MatchedTransaction, Ratio, TaxConfig, TaxDetails, CapitalGains
from .date_utils import months_between


def classify_holding(acquisition_date: Optional[date], sale_date: Optional[date],
                     holding_period: int) -> Tuple[GainType, int]:
    """
    Classify a holding as LTCG or STCG.

    LTCG: held >= holding_period whole months
    STCG: anything shorter, or when either date is missing

    Parameters:
        acquisition_date: Date the lot was acquired
        sale_date: Date the lot was sold
        holding_period: Threshold in months (ltcg.holdingPeriod)

    Returns:
        tuple: (GainType, holding months)
    """
    if acquisition_date is None or sale_date is None:
        return GainType.STCG, 0

    holding_months = months_between(acquisition_date, sale_date)
    if holding_months >= holding_period:
        return GainType.LTCG, holding_months
    return GainType.STCG, holding_months


def calculate_bucket_tax(taxable_gain: float, gross_gain: float,
                         rate: float, cess_rate: float) -> TaxDetails:
    """
    Calculate tax for one bucket (LTCG or STCG).

    Parameters:
        taxable_gain: Amount the rate applies to (after exemption)
        gross_gain: Total gain of the bucket, base for the effective rate
        rate: Tax rate in percent
        cess_rate: Cess in percent of the base tax

    Returns:
        TaxDetails: taxable gain, rate, base tax, cess, total tax, effective rate
    """
    taxable_gain = max(0.0, taxable_gain)
    base_tax = taxable_gain * rate / 100
    cess = base_tax * cess_rate / 100
    total_tax = base_tax + cess

    if gross_gain > 0:
        effective_rate = Ratio.percentage(total_tax, gross_gain)
    else:
        effective_rate = Ratio.undefined()

    return TaxDetails(
        taxable_gain=round(taxable_gain, 2),
        rate=rate,
        base_tax=round(base_tax, 2),
        cess=round(cess, 2),
        total_tax=round(total_tax, 2),
        effective_rate=effective_rate,
    )


def ltcg_after_exemption(total_ltcg: float, ltcg: LtcgConfig) -> float:
    """Exemption applies once to the net LTCG pool, never below zero"""
    return max(0.0, total_ltcg - ltcg.exemption_limit)


def calculate_capital_gains(transactions: Iterable[MatchedTransaction],
                            config: TaxConfig) -> CapitalGains:
    """
    Calculate portfolio capital gains tax (India)

    STCG: taxed at stcg.rate on positive net STCG
    LTCG: taxed at ltcg.rate above ltcg.exemptionLimit
    Cess is charged on the base tax of each bucket.

    Parameters:
        transactions: Classified transactions for all shares
        config: TaxConfig snapshot the ledger was built with

    Returns:
        CapitalGains: totals, per-bucket tax details and net gain
    """
    total_ltcg = 0.0
    total_stcg = 0.0
    for txn in transactions:
        if txn.gain_type == GainType.LTCG:
            total_ltcg += txn.gain
        elif txn.gain_type == GainType.STCG:
            total_stcg += txn.gain

    taxable_ltcg = ltcg_after_exemption(total_ltcg, config.ltcg)
    ltcg_tax = calculate_bucket_tax(taxable_ltcg, total_ltcg, config.ltcg.rate, config.ltcg.cess)
    stcg_tax = calculate_bucket_tax(total_stcg, total_stcg, config.stcg.rate, config.stcg.cess)
    total_tax = ltcg_tax.total_tax + stcg_tax.total_tax

    return CapitalGains(
        total_ltcg=round(total_ltcg, 2),
        total_stcg=round(total_stcg, 2),
        ltcg_exemption=config.ltcg.exemption_limit,
        ltcg_after_exemption=round(taxable_ltcg, 2),
        ltcg_tax=ltcg_tax,
        stcg_tax=stcg_tax,
        total_tax=round(total_tax, 2),
        net_gain=round(total_ltcg + total_stcg - total_tax, 2),
    )
