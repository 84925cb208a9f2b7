"""
Ledger Service

Builds Ledgers from uploaded rows and keeps each session's ledger in
step with the tax configuration.
"""
from itertools import count
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import setup_logger
from ..exceptions import OversoldError
from ..models import Ledger, TaxConfig, TransactionRow
from ..repositories import SessionRepository, TaxConfigRepository
from ..utils import calculate_capital_gains
from .gain_classifier_service import GainClassifier
from .import_service import ImportService
from .lot_matcher_service import LotMatcher
from .position_service import PositionAggregator


logger = setup_logger(name="LedgerService")


def group_by_share(rows: Sequence[TransactionRow]) -> Dict[str, List[TransactionRow]]:
    """Group rows by share, keeping first-appearance order of shares and file order within"""
    grouped: Dict[str, List[TransactionRow]] = {}
    for row in rows:
        grouped.setdefault(row.share, []).append(row)
    return grouped


def build_ledger(rows: Sequence[TransactionRow], tax_config: TaxConfig,
                 config_version: int = 0, session_id: Optional[str] = None) -> Ledger:
    """
    Run the full computation over one set of rows.

    An oversold share is isolated: it is reported in `errors` and left
    out of transactions, closing balances, summary and capital gains.
    The rest of the portfolio is still computed.

    Parameters:
        rows: Uploaded rows in file order
        tax_config: Config snapshot, used for every classification
        config_version: Store version of the snapshot
        session_id: Owning session

    Returns:
        Ledger: New immutable ledger
    """
    matcher = LotMatcher()
    classifier = GainClassifier(tax_config, count(1))
    aggregator = PositionAggregator()

    transactions = []
    balances = []
    errors = []
    for share, share_rows in group_by_share(rows).items():
        try:
            result = matcher.match(share, share_rows)
            share_transactions = classifier.classify(result)
            balance = aggregator.closing_balance(
                share, share_rows, share_transactions, result.open_lots
            )
        except OversoldError as e:
            logger.warning(f"Excluding {share} from ledger: {e.message}")
            errors.append(e.to_dict())
            continue
        transactions.extend(share_transactions)
        balances.append(balance)

    ledger = Ledger(
        rows=list(rows),
        transactions=transactions,
        closing_balances=balances,
        summary=aggregator.summarize(balances),
        capital_gains=calculate_capital_gains(transactions, tax_config),
        tax_config=tax_config,
        config_version=config_version,
        errors=errors,
        session_id=session_id,
    )
    logger.info(
        f"Built ledger for session {session_id}: {len(balances)} shares, "
        f"{len(transactions)} transactions, {len(errors)} excluded, "
        f"config {tax_config.financial_year} v{config_version}"
    )
    return ledger


class LedgerService:
    """Service layer tying the engine to config and session storage."""

    def __init__(self, config_repo: TaxConfigRepository, session_repo: SessionRepository,
                 import_service: Optional[ImportService] = None):
        self.config_repo = config_repo
        self.session_repo = session_repo
        self.import_service = import_service or ImportService()

    def upload(self, stream, filename: str, session_id: Optional[str] = None) -> Ledger:
        """
        Parse an uploaded file and build the session's ledger.

        Raises:
            MalformedRowError, UnsupportedFileError: The whole upload is rejected
        """
        rows = self.import_service.read_upload(stream, filename)
        return self.load_rows(rows, session_id)

    def load_rows(self, rows: Sequence[TransactionRow], session_id: Optional[str] = None) -> Ledger:
        session_id = session_id or self.session_repo.new_session_id()
        tax_config, version = self.config_repo.snapshot()
        ledger = build_ledger(rows, tax_config, version, session_id)
        self.session_repo.save_ledger(session_id, ledger)
        return ledger

    def get_ledger(self, session_id: Optional[str]) -> Optional[Ledger]:
        """
        Current ledger of a session, rebuilt first if the config changed.

        Returns:
            Ledger or None when the session has no upload
        """
        current = self.session_repo.get_ledger(session_id)
        if current is None:
            return None

        tax_config, version = self.config_repo.snapshot(current.tax_config.financial_year)
        if version == current.config_version:
            return current

        logger.info(
            f"Recomputing session {session_id}: config v{current.config_version} -> v{version}"
        )
        rebuilt = build_ledger(current.rows, tax_config, version, session_id)
        return self.session_repo.replace_ledger(session_id, current, rebuilt)

    def get_ledger_or_empty(self, session_id: Optional[str]) -> Ledger:
        ledger = self.get_ledger(session_id)
        if ledger is None:
            tax_config, version = self.config_repo.snapshot()
            return Ledger.empty(tax_config, version)
        return ledger

    def update_config(self, changes: Dict, session_id: Optional[str] = None,
                      financial_year: Optional[str] = None) -> Tuple[TaxConfig, Optional[Ledger]]:
        """
        Apply a partial config update and recompute the caller's ledger.

        Other sessions are rebuilt lazily on their next read.

        Returns:
            tuple: (TaxConfig, Ledger), the ledger None unless the caller's
                ledger belongs to the updated year and was recomputed

        Raises:
            InvalidConfigError: Update rejected, config unchanged
        """
        tax_config = self.config_repo.update_config(changes, financial_year)
        current = self.session_repo.get_ledger(session_id)
        if current is None or current.tax_config.financial_year != tax_config.financial_year:
            return tax_config, None
        return tax_config, self.get_ledger(session_id)

    def end_session(self, session_id: Optional[str]) -> bool:
        """Drop a session and its ledger. Returns False if there was none."""
        ended = self.session_repo.delete_session(session_id)
        if ended:
            logger.info(f"Ended session {session_id}")
        return ended
