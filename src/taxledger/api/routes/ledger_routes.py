"""
Ledger Routes

Upload of a transaction ledger and reads of the computed results.
Reads without an uploaded ledger return an empty (no holdings) result.
"""
from flask.views import MethodView
from flask_smorest import Blueprint, abort

from ...config import setup_logger
from ...exceptions import LedgerError
from ...schemas import (
    UploadSchema, SessionQuerySchema, LedgerDataSchema, ClosingBalanceSchema,
    CapitalGainsSchema, SummarySchema, MessageSchema
)
from ..session_utils import get_ledger_service, resolve_session_id, remember_session, forget_session


logger = setup_logger(name="LedgerRoutes")

blp = Blueprint(
    "Ledger",
    __name__,
    url_prefix="/api",
    description="Ledger Upload and Computation"
)


@blp.route("/upload")
class UploadResource(MethodView):
    @blp.doc(tags=["Ledger"])
    @blp.arguments(UploadSchema, location="files")
    @blp.response(200, LedgerDataSchema)
    def post(self, files):
        """
        Upload a ledger spreadsheet and compute it.

        Columns: share, openingDate/Qty/Amt, purchaseDate/Qty/Amt,
        saleDate/Qty/Amt. Any malformed row rejects the whole upload.

        Returns:
            LedgerDataSchema: Full ledger with its sessionId
        """
        upload = files["file"]
        try:
            ledger = get_ledger_service().upload(
                upload.stream, upload.filename, session_id=resolve_session_id()
            )
        except LedgerError as e:
            logger.error(f"Upload of {upload.filename} rejected: {e.message}")
            abort(400, message=e.message, messages=e.errors)

        remember_session(ledger.session_id)
        return ledger


@blp.route("/ledger")
class LedgerResource(MethodView):
    @blp.doc(tags=["Ledger"])
    @blp.arguments(SessionQuerySchema, location="query")
    @blp.response(200, LedgerDataSchema)
    def get(self, args):
        """Get the session's full ledger"""
        return get_ledger_service().get_ledger_or_empty(resolve_session_id(args))


@blp.route("/closing-balances")
class ClosingBalancesResource(MethodView):
    @blp.doc(tags=["Ledger"])
    @blp.arguments(SessionQuerySchema, location="query")
    @blp.response(200, ClosingBalanceSchema(many=True))
    def get(self, args):
        """Get per-share closing balances"""
        return get_ledger_service().get_ledger_or_empty(resolve_session_id(args)).closing_balances


@blp.route("/capital-gains")
class CapitalGainsResource(MethodView):
    @blp.doc(tags=["Ledger"])
    @blp.arguments(SessionQuerySchema, location="query")
    @blp.response(200, CapitalGainsSchema)
    def get(self, args):
        """Get LTCG / STCG totals and tax payable"""
        return get_ledger_service().get_ledger_or_empty(resolve_session_id(args)).capital_gains


@blp.route("/summary")
class SummaryResource(MethodView):
    @blp.doc(tags=["Ledger"])
    @blp.arguments(SessionQuerySchema, location="query")
    @blp.response(200, SummarySchema)
    def get(self, args):
        """Get the portfolio summary"""
        return get_ledger_service().get_ledger_or_empty(resolve_session_id(args)).summary


@blp.route("/session")
class SessionResource(MethodView):
    @blp.doc(tags=["Ledger"])
    @blp.arguments(SessionQuerySchema, location="query")
    @blp.response(200, MessageSchema)
    def delete(self, args):
        """
        End the session and discard its ledger.

        Idle sessions also end on their own after SESSION_TTL_SECONDS.
        """
        ended = get_ledger_service().end_session(resolve_session_id(args))
        forget_session()
        return {"message": "Session ended" if ended else "No active session"}
