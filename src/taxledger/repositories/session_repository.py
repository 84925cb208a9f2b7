"""
Session Repository

In-process store mapping session ids to their current Ledger.
"""
import time
import uuid
import threading
from typing import Callable, Dict, Optional, Tuple

from ..config import setup_logger
from ..models import Ledger


logger = setup_logger(name="SessionRepository")

DEFAULT_SESSION_TTL = 2 * 60 * 60


class SessionRepository:
    """
    Session id -> Ledger.

    Ledgers are immutable; saving swaps the pointer, so a reader sees
    either the previous or the new ledger. A session not read or written
    for `ttl_seconds` has ended and its ledger is dropped.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_SESSION_TTL,
                 clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        # session id -> (ledger, last access)
        self._sessions: Dict[str, Tuple[Ledger, float]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def new_session_id() -> str:
        return uuid.uuid4().hex

    def get_ledger(self, session_id: Optional[str]) -> Optional[Ledger]:
        if not session_id:
            return None
        with self._lock:
            now = self._clock()
            self._evict_expired(now)
            entry = self._sessions.get(session_id)
            if entry is None:
                return None
            self._sessions[session_id] = (entry[0], now)
            return entry[0]

    def save_ledger(self, session_id: str, ledger: Ledger) -> None:
        with self._lock:
            now = self._clock()
            self._evict_expired(now)
            self._sessions[session_id] = (ledger, now)

    def replace_ledger(self, session_id: str, expected: Ledger, ledger: Ledger) -> Optional[Ledger]:
        """
        Swap in a recomputed ledger unless the session moved on meanwhile.

        Returns:
            Ledger: The ledger now current for the session, None if it ended
        """
        with self._lock:
            entry = self._sessions.get(session_id)
            current = entry[0] if entry else None
            if current is expected:
                self._sessions[session_id] = (ledger, self._clock())
                return ledger
            logger.info(f"Session {session_id} changed during recompute, keeping newer ledger")
            return current

    def delete_session(self, session_id: Optional[str]) -> bool:
        if not session_id:
            return False
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def _evict_expired(self, now: float) -> None:
        expired = [sid for sid, (_, last_access) in self._sessions.items()
                   if now - last_access > self.ttl_seconds]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info(f"Ended {len(expired)} idle session(s)")
