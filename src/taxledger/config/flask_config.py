import os

from .tax_config import TaxDefaults


class Config:
    SECRET_KEY = os.environ.get("TAXLEDGER_SECRET_KEY", "change-me-to-secret")
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024
    FINANCIAL_YEAR = os.environ.get("TAXLEDGER_FINANCIAL_YEAR", TaxDefaults.financial_year)
    # Start of the next financial year, used for carry-forward opening rows
    CARRY_FORWARD_OPENING_DATE = os.environ.get("TAXLEDGER_CARRY_FORWARD_DATE", "2026-04-01")
    # Idle time after which a session and its ledger are dropped
    SESSION_TTL_SECONDS = int(os.environ.get("TAXLEDGER_SESSION_TTL", 2 * 60 * 60))
    API_TITLE = "Capital Gains Tax Ledger"
    API_VERSION = "v1"
    OPENAPI_VERSION = "3.0.3"
    OPENAPI_URL_PREFIX = "/"
    OPENAPI_SWAGGER_UI_PATH = "/swagger-ui"
    OPENAPI_SWAGGER_UI_URL = "https://cdn.jsdelivr.net/npm/swagger-ui-dist/"
    OPENAPI_REDOC_PATH = "/redoc"
    OPENAPI_REDOC_URL = "https://cdn.jsdelivr.net/npm/redoc@latest/bundles/redoc.standalone.js"
    API_SPEC_OPTIONS = {
        "tags": [
            {"name": "Health", "description": "Service Health"},
            {"name": "Configuration", "description": "Tax Configuration Management"},
            {"name": "Ledger", "description": "Ledger Upload and Computation"},
            {"name": "Export", "description": "Spreadsheet Exports"},
        ],
        "x-tagGroups": [
            {"name": "System & Config", "tags": ["Health", "Configuration"]},
            {"name": "Ledger", "tags": ["Ledger", "Export"]},
        ]
    }


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
