"""
API Routes

Blueprints organized by category for Swagger UI navigation.
"""

# SYSTEM
from .health_routes import blp as health_bp
from .config_routes import blp as config_bp

# LEDGER
from .ledger_routes import blp as ledger_bp
from .export_routes import blp as export_bp

__all__ = [
    "health_bp",
    "config_bp",
    "ledger_bp",
    "export_bp",
]
