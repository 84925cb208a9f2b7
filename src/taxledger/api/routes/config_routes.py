"""
Configuration API Routes

GET/PUT endpoints for runtime tax configuration management.
"""
from flask.views import MethodView
from flask_smorest import Blueprint, abort

from ...config import setup_logger
from ...exceptions import InvalidConfigError
from ...schemas import TaxConfigSchema, ConfigUpdateResponseSchema, SessionQuerySchema
from ..session_utils import get_ledger_service, resolve_session_id


logger = setup_logger(name="ConfigRoutes")

blp = Blueprint(
    "Configuration",
    __name__,
    url_prefix="/api",
    description="Tax Configuration Management"
)


@blp.route("/config")
class TaxConfigResource(MethodView):
    """Runtime configuration for LTCG / STCG taxation"""

    @blp.doc(tags=["Configuration"])
    @blp.response(200, TaxConfigSchema)
    def get(self):
        """
        Get current tax configuration.

        Returns:
            TaxConfigSchema: Config of the current financial year
        """
        return get_ledger_service().config_repo.get_config()

    @blp.doc(tags=["Configuration"])
    @blp.arguments(SessionQuerySchema, location="query")
    @blp.arguments(TaxConfigSchema)
    @blp.response(200, ConfigUpdateResponseSchema)
    def put(self, args, data):
        """
        Update tax configuration at runtime.

        Only the supplied fields change. If the caller has an uploaded
        ledger it is recomputed with the new values.

        Parameters:
            data (dict): Partial config, e.g. {"ltcg": {"rate": 12.5}}

        Returns:
            dict: message and the updated config
        """
        financial_year = data.pop("financial_year", None)
        try:
            tax_config, ledger = get_ledger_service().update_config(
                data, session_id=resolve_session_id(args), financial_year=financial_year
            )
        except InvalidConfigError as e:
            logger.error(f"Config update rejected: {e.message} {e.errors}")
            abort(400, message=e.message, messages=e.errors)

        message = "Tax configuration updated"
        if ledger is not None:
            message += ", ledger recalculated"
        return {"message": message, "config": tax_config}
