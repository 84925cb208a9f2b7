from .date_utils import months_between, is_month_end, parse_iso_date, validate_financial_year
from .tax_utils import (
    classify_holding, calculate_bucket_tax, ltcg_after_exemption, calculate_capital_gains
)


__all__ = [
    "months_between",
    "is_month_end",
    "parse_iso_date",
    "validate_financial_year",
    "classify_holding",
    "calculate_bucket_tax",
    "ltcg_after_exemption",
    "calculate_capital_gains",
]
