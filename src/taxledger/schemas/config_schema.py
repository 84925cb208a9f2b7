from marshmallow import Schema, fields


class StcgConfigSchema(Schema):
    rate = fields.Float(metadata={"description": "Tax rate in percent", "example": 20})
    cess = fields.Float(metadata={"description": "Cess in percent of base tax", "example": 4})
    holding_period = fields.Integer(data_key="holdingPeriod", metadata={"description": "Months"})
    description = fields.String()


class LtcgConfigSchema(Schema):
    rate = fields.Float(metadata={"description": "Tax rate in percent", "example": 12.5})
    cess = fields.Float(metadata={"description": "Cess in percent of base tax", "example": 4})
    holding_period = fields.Integer(
        data_key="holdingPeriod",
        metadata={"description": "Minimum months held for LTCG", "example": 12}
    )
    exemption_limit = fields.Float(
        data_key="exemptionLimit",
        metadata={"description": "LTCG exempt per year", "example": 125000}
    )
    indexation_benefit = fields.Boolean(
        data_key="indexationBenefit",
        metadata={"description": "Stored only, LTCG is not indexed"}
    )
    description = fields.String()


class TaxConfigSchema(Schema):
    """
    Tax configuration. Every field is optional on load, so the same
    schema accepts partial updates.
    """
    financial_year = fields.String(data_key="financialYear", metadata={"example": "2025-2026"})
    stcg = fields.Nested(StcgConfigSchema)
    ltcg = fields.Nested(LtcgConfigSchema)


class ConfigUpdateResponseSchema(Schema):
    message = fields.String(dump_only=True)
    config = fields.Nested(TaxConfigSchema, dump_only=True)
