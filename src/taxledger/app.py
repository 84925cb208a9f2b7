from flask import Flask
from flask_cors import CORS
from flask_smorest import Api

from .config import Config
from .repositories import SessionRepository, TaxConfigRepository
from .services import ExportService, LedgerService
from .api.session_utils import SESSION_HEADER
from .api.routes import health_bp, config_bp, ledger_bp, export_bp


def create_app(config_class=Config):
    """Application factory"""
    app = Flask(__name__)
    app.config.from_object(config_class)
    CORS(app, supports_credentials=True, expose_headers=[SESSION_HEADER])

    config_repo = TaxConfigRepository(app.config["FINANCIAL_YEAR"])
    app.extensions["taxledger"] = {
        "ledger_service": LedgerService(
            config_repo, SessionRepository(app.config["SESSION_TTL_SECONDS"])
        ),
        "export_service": ExportService(),
    }

    # Register API blueprints
    api = Api(app)
    api.register_blueprint(health_bp)
    api.register_blueprint(config_bp)
    api.register_blueprint(ledger_bp)
    api.register_blueprint(export_bp)
    return app
