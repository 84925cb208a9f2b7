from .app_schema import HealthSchema, MessageSchema, UploadSchema, SessionQuerySchema, ExportQuerySchema
from .config_schema import StcgConfigSchema, LtcgConfigSchema, TaxConfigSchema, ConfigUpdateResponseSchema
from .ledger_schema import (
    TransactionRowSchema, TransactionSchema, ClosingBalanceSchema, SummarySchema,
    TaxDetailsSchema, CapitalGainsSchema, LedgerErrorSchema, LedgerDataSchema
)

__all__ = [
    "HealthSchema",
    "MessageSchema",
    "UploadSchema",
    "SessionQuerySchema",
    "ExportQuerySchema",
    "StcgConfigSchema",
    "LtcgConfigSchema",
    "TaxConfigSchema",
    "ConfigUpdateResponseSchema",
    "TransactionRowSchema",
    "TransactionSchema",
    "ClosingBalanceSchema",
    "SummarySchema",
    "TaxDetailsSchema",
    "CapitalGainsSchema",
    "LedgerErrorSchema",
    "LedgerDataSchema",
]
