"""
Ledger Schemas

API schemas for ledger data. Attribute names are snake_case,
keys on the wire are camelCase.
"""
from marshmallow import Schema, fields, post_dump

from .fields import EffectiveRateField, GainTypeField, PortfolioReturnField
from .config_schema import TaxConfigSchema


class TransactionRowSchema(Schema):
    """Upload / carry-forward row layout"""
    share = fields.String()
    opening_date = fields.Date(data_key="openingDate", allow_none=True)
    opening_qty = fields.Float(data_key="openingQty")
    opening_amt = fields.Float(data_key="openingAmt")
    purchase_date = fields.Date(data_key="purchaseDate", allow_none=True)
    purchase_qty = fields.Float(data_key="purchaseQty")
    purchase_amt = fields.Float(data_key="purchaseAmt")
    sale_date = fields.Date(data_key="saleDate", allow_none=True)
    sale_qty = fields.Float(data_key="saleQty")
    sale_amt = fields.Float(data_key="saleAmt")


class TransactionSchema(TransactionRowSchema):
    """Matched or open-lot transaction"""
    id = fields.Integer(dump_only=True)
    gain_type = GainTypeField(data_key="gainType", dump_only=True)
    gain = fields.Float(dump_only=True, allow_none=True)
    holding_months = fields.Integer(data_key="holdingMonths", dump_only=True, allow_none=True)

    @post_dump
    def drop_unrealized_fields(self, data, **kwargs):
        # Gain fields only appear on transactions a sale consumed
        for key in ("gainType", "gain", "holdingMonths"):
            if data.get(key) is None:
                data.pop(key, None)
        return data


class ClosingBalanceSchema(Schema):
    share = fields.String(dump_only=True)
    opening_qty = fields.Float(data_key="openingQty", dump_only=True)
    opening_amt = fields.Float(data_key="openingAmt", dump_only=True)
    purchase_qty = fields.Float(data_key="purchaseQty", dump_only=True)
    purchase_amt = fields.Float(data_key="purchaseAmt", dump_only=True)
    sale_qty = fields.Float(data_key="saleQty", dump_only=True)
    sale_amt = fields.Float(data_key="saleAmt", dump_only=True)
    closing_qty = fields.Float(data_key="closingQty", dump_only=True)
    closing_amt = fields.Float(data_key="closingAmt", dump_only=True)
    avg_cost_price = fields.Float(data_key="avgCostPrice", dump_only=True)
    realized_gain = fields.Float(data_key="realizedGain", dump_only=True)
    ltcg = fields.Float(dump_only=True)
    stcg = fields.Float(dump_only=True)
    cost_basis = fields.Float(data_key="costBasis", dump_only=True)
    first_purchase_date = fields.Date(data_key="firstPurchaseDate", dump_only=True, allow_none=True)
    transactions = fields.List(fields.Nested(TransactionSchema), dump_only=True)


class SummarySchema(Schema):
    total_shares = fields.Integer(data_key="totalShares", dump_only=True)
    total_opening_value = fields.Float(data_key="totalOpeningValue", dump_only=True)
    total_purchase_value = fields.Float(data_key="totalPurchaseValue", dump_only=True)
    total_sale_value = fields.Float(data_key="totalSaleValue", dump_only=True)
    total_closing_value = fields.Float(data_key="totalClosingValue", dump_only=True)
    total_realized_gain = fields.Float(data_key="totalRealizedGain", dump_only=True)
    total_unrealized_gain = fields.Float(data_key="totalUnrealizedGain", dump_only=True)
    portfolio_return = PortfolioReturnField(data_key="portfolioReturn", dump_only=True)


class TaxDetailsSchema(Schema):
    taxable_gain = fields.Float(data_key="taxableGain", dump_only=True)
    rate = fields.Float(dump_only=True)
    base_tax = fields.Float(data_key="baseTax", dump_only=True)
    cess = fields.Float(dump_only=True)
    total_tax = fields.Float(data_key="totalTax", dump_only=True)
    effective_rate = EffectiveRateField(data_key="effectiveRate", dump_only=True)


class CapitalGainsSchema(Schema):
    total_ltcg = fields.Float(data_key="totalLTCG", dump_only=True)
    total_stcg = fields.Float(data_key="totalSTCG", dump_only=True)
    ltcg_exemption = fields.Float(data_key="ltcgExemption", dump_only=True)
    ltcg_after_exemption = fields.Float(data_key="ltcgAfterExemption", dump_only=True)
    ltcg_tax = fields.Nested(TaxDetailsSchema, data_key="ltcgTax", dump_only=True)
    stcg_tax = fields.Nested(TaxDetailsSchema, data_key="stcgTax", dump_only=True)
    total_tax = fields.Float(data_key="totalTax", dump_only=True)
    net_gain = fields.Float(data_key="netGain", dump_only=True)


class LedgerErrorSchema(Schema):
    share = fields.String(dump_only=True)
    kind = fields.String(dump_only=True)
    message = fields.String(dump_only=True)


class LedgerDataSchema(Schema):
    """Full ledger response"""
    session_id = fields.String(data_key="sessionId", dump_only=True, allow_none=True)
    transactions = fields.List(fields.Nested(TransactionSchema), dump_only=True)
    closing_balances = fields.List(fields.Nested(ClosingBalanceSchema), data_key="closingBalances", dump_only=True)
    summary = fields.Nested(SummarySchema, dump_only=True)
    capital_gains = fields.Nested(CapitalGainsSchema, data_key="capitalGains", dump_only=True)
    tax_config = fields.Nested(TaxConfigSchema, data_key="taxConfig", dump_only=True)
    errors = fields.List(fields.Nested(LedgerErrorSchema), dump_only=True)
