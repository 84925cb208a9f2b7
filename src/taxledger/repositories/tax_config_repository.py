"""
Tax Config Repository

In-process store of one TaxConfig per financial year.
"""
import threading
from typing import Dict, Optional, Tuple

from ..config import setup_logger, TaxDefaults
from ..exceptions import InvalidConfigError
from ..models import TaxConfig
from ..utils import validate_financial_year


logger = setup_logger(name="TaxConfigRepository")


class TaxConfigRepository:
    """
    Holds the current TaxConfig per financial year.

    Configs are frozen, so a read hands out a snapshot that a later
    update cannot change. Updates are serialised by a lock and bump the
    year's version, which marks ledgers built on the old one as stale.
    """

    def __init__(self, default_financial_year: str = TaxDefaults.financial_year):
        if not validate_financial_year(default_financial_year):
            raise InvalidConfigError(f"Invalid financial year: {default_financial_year}")
        self.default_financial_year = default_financial_year
        self._configs: Dict[str, TaxConfig] = {}
        self._versions: Dict[str, int] = {}
        self._lock = threading.Lock()

    def _resolve(self, financial_year: Optional[str]) -> str:
        financial_year = financial_year or self.default_financial_year
        if not validate_financial_year(financial_year):
            raise InvalidConfigError(
                f"Invalid financial year '{financial_year}', expected YYYY-YYYY"
            )
        return financial_year

    def _ensure(self, financial_year: str) -> None:
        # Caller holds the lock
        if financial_year not in self._configs:
            self._configs[financial_year] = TaxConfig.defaults(financial_year)
            self._versions[financial_year] = 0

    def get_config(self, financial_year: Optional[str] = None) -> TaxConfig:
        return self.snapshot(financial_year)[0]

    def get_version(self, financial_year: Optional[str] = None) -> int:
        return self.snapshot(financial_year)[1]

    def snapshot(self, financial_year: Optional[str] = None) -> Tuple[TaxConfig, int]:
        """
        Get config and its version together.

        Returns:
            tuple: (TaxConfig, version) read under the same lock
        """
        financial_year = self._resolve(financial_year)
        with self._lock:
            self._ensure(financial_year)
            return self._configs[financial_year], self._versions[financial_year]

    def update_config(self, changes: Dict, financial_year: Optional[str] = None) -> TaxConfig:
        """
        Merge a partial update into the year's config.

        Parameters:
            changes (dict): e.g. {"stcg": {"cess": 4.0}, "ltcg": {"cess": 4.0}}
            financial_year (str): Year to update, defaults to the current one

        Returns:
            TaxConfig: The new config

        Raises:
            InvalidConfigError: On invalid values, prior config is kept
        """
        financial_year = self._resolve(financial_year)
        with self._lock:
            self._ensure(financial_year)
            try:
                updated = self._configs[financial_year].merged(changes)
            except TypeError as e:
                raise InvalidConfigError(f"Unknown configuration field: {e}") from e
            self.validate(updated)

            self._configs[financial_year] = updated
            self._versions[financial_year] += 1
            logger.info(
                f"Tax config {financial_year} updated to version "
                f"{self._versions[financial_year]}: {changes}"
            )
            return updated

    @staticmethod
    def validate(config: TaxConfig) -> None:
        errors = []
        for bucket_name, bucket in (("stcg", config.stcg), ("ltcg", config.ltcg)):
            for field_name in ("rate", "cess", "holding_period"):
                if getattr(bucket, field_name) <= 0:
                    errors.append({
                        "field": f"{bucket_name}.{field_name}",
                        "message": "must be greater than zero",
                    })
        if config.ltcg.exemption_limit < 0:
            errors.append({
                "field": "ltcg.exemption_limit",
                "message": "must not be negative",
            })

        if errors:
            logger.warning(f"Rejected tax config update: {errors}")
            raise InvalidConfigError("Invalid tax configuration", errors=errors)
