from .tax_config_repository import TaxConfigRepository
from .session_repository import SessionRepository

__all__ = [
    "TaxConfigRepository",
    "SessionRepository",
]
