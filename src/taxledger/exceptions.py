"""
Ledger Exceptions

Domain errors raised by the computation engine and its adapters.
All derive from ValueError so callers can treat them as bad input.
"""
from typing import Dict, List, Optional


class LedgerError(ValueError):
    """Base class for ledger computation errors"""
    kind = "LedgerError"

    def __init__(self, message: str, errors: Optional[List[Dict]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    def to_dict(self) -> Dict:
        return {"kind": self.kind, "message": self.message}


class MalformedRowError(LedgerError):
    """One or more uploaded rows failed validation"""
    kind = "MalformedRow"


class OversoldError(LedgerError):
    """A sale consumed more than the quantity held for a share"""
    kind = "Oversold"

    def __init__(self, share: str, sale_qty: float, available_qty: float):
        self.share = share
        self.sale_qty = sale_qty
        self.available_qty = available_qty
        super().__init__(
            f"{share}: sale of {sale_qty:g} exceeds available quantity {available_qty:g}"
        )

    def to_dict(self) -> Dict:
        return {"share": self.share, "kind": self.kind, "message": self.message}


class InvalidConfigError(LedgerError):
    """Tax configuration update was rejected"""
    kind = "InvalidConfig"


class UnsupportedFileError(LedgerError):
    """Uploaded file could not be read as a ledger"""
    kind = "UnsupportedFile"
