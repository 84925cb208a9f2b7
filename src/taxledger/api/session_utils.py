"""
Session helpers shared by the route modules.
"""
from typing import Optional

from flask import current_app, request, session

from ..services import ExportService, LedgerService


SESSION_HEADER = "X-Session-Id"
SESSION_COOKIE_KEY = "sid"


def get_ledger_service() -> LedgerService:
    return current_app.extensions["taxledger"]["ledger_service"]


def get_export_service() -> ExportService:
    return current_app.extensions["taxledger"]["export_service"]


def resolve_session_id(args: Optional[dict] = None) -> Optional[str]:
    """
    Session id from, in order: X-Session-Id header, `sid` query
    parameter, signed session cookie.
    """
    header = request.headers.get(SESSION_HEADER)
    if header:
        return header
    if args and args.get("sid"):
        return args["sid"]
    return session.get(SESSION_COOKIE_KEY)


def remember_session(session_id: str) -> None:
    session[SESSION_COOKIE_KEY] = session_id


def forget_session() -> None:
    session.pop(SESSION_COOKIE_KEY, None)
