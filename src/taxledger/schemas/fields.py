"""
Custom fields for engine values that need API-specific formatting.
"""
from marshmallow import fields


class EffectiveRateField(fields.Field):
    """Ratio -> '20.80%', undefined -> '0.00%'"""

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None or not value.is_defined:
            return "0.00%"
        return f"{value.value:.2f}%"


class PortfolioReturnField(fields.Field):
    """Ratio -> 12.34, undefined -> '0.00' (string sentinel expected by clients)"""

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None or not value.is_defined:
            return "0.00"
        return round(value.value, 2)


class GainTypeField(fields.Field):

    def _serialize(self, value, attr, obj, **kwargs):
        return value.value if value is not None else None
