"""
Export Routes

Spreadsheet downloads of the carry-forward rows and the current ledger.
"""
from flask import current_app, send_file
from flask.views import MethodView
from flask_smorest import Blueprint, abort

from ...config import setup_logger
from ...schemas import ExportQuerySchema, SessionQuerySchema
from ...utils import parse_iso_date
from ..session_utils import get_export_service, get_ledger_service, resolve_session_id


logger = setup_logger(name="ExportRoutes")

blp = Blueprint(
    "Export",
    __name__,
    url_prefix="/api/export",
    description="Spreadsheet Exports"
)


@blp.route("/next-year")
class NextYearExport(MethodView):
    @blp.doc(tags=["Export"])
    @blp.arguments(ExportQuerySchema, location="query")
    def get(self, args):
        """
        Download next financial year's opening balances.

        One row per share still held, in the upload layout.

        Parameters:
            opening_date: Query param - Start of next financial year,
                defaults to CARRY_FORWARD_OPENING_DATE
            format: Query param - xlsx (default) or csv
        """
        fmt = args["format"].lower()
        if fmt not in ("xlsx", "csv"):
            abort(400, message="Invalid format. Use xlsx or csv")

        opening_date = args["opening_date"] or parse_iso_date(
            current_app.config["CARRY_FORWARD_OPENING_DATE"]
        )
        ledger = get_ledger_service().get_ledger_or_empty(resolve_session_id(args))
        buffer, mimetype, filename = get_export_service().next_year_file(ledger, opening_date, fmt)
        logger.info(f"Exported {filename} for session {ledger.session_id}")
        return send_file(buffer, mimetype=mimetype, as_attachment=True, download_name=filename)


@blp.route("/current")
class CurrentExport(MethodView):
    @blp.doc(tags=["Export"])
    @blp.arguments(SessionQuerySchema, location="query")
    def get(self, args):
        """Download the current ledger as a workbook"""
        ledger = get_ledger_service().get_ledger_or_empty(resolve_session_id(args))
        buffer, mimetype, filename = get_export_service().current_report_file(ledger)
        logger.info(f"Exported {filename} for session {ledger.session_id}")
        return send_file(buffer, mimetype=mimetype, as_attachment=True, download_name=filename)
