from taxledger.models import Ratio, Summary, TaxDetails
from taxledger.schemas import SummarySchema, TaxDetailsSchema, TaxConfigSchema


def test_effective_rate_formatting():
    assert TaxDetailsSchema().dump(TaxDetails(effective_rate=Ratio(20.8)))["effectiveRate"] == "20.80%"
    assert TaxDetailsSchema().dump(TaxDetails())["effectiveRate"] == "0.00%"


def test_portfolio_return_sentinel():
    assert SummarySchema().dump(Summary())["portfolioReturn"] == "0.00"
    assert SummarySchema().dump(Summary(portfolio_return=Ratio(12.345)))["portfolioReturn"] == 12.35


def test_ratio_percentage_guards_zero_denominator():
    assert not Ratio.percentage(10, 0).is_defined
    assert Ratio.percentage(1, 4).value == 25


def test_config_schema_loads_partial_update():
    data = TaxConfigSchema().load({"ltcg": {"exemptionLimit": 100000}, "financialYear": "2025-2026"})

    assert data == {"ltcg": {"exemption_limit": 100000.0}, "financial_year": "2025-2026"}
