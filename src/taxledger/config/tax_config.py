class TaxDefaults:
    """Capital gains tax parameters (India, Budget 2024-25)"""
    financial_year: str = "2025-2026"

    stcg_rate: float = 20.0  # percent, held < 12 months
    stcg_cess: float = 4.0  # percent of base tax
    stcg_holding_period: int = 12  # months
    stcg_description: str = "Short Term Capital Gains (held less than 12 months)"

    ltcg_rate: float = 12.5  # percent, held >= 12 months
    ltcg_cess: float = 4.0
    ltcg_holding_period: int = 12
    ltcg_exemption_limit: float = 125000  # ₹1.25L per year
    ltcg_indexation_benefit: bool = False
    ltcg_description: str = "Long Term Capital Gains (held 12 months or more)"
