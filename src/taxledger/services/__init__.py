from .lot_matcher_service import LotMatcher
from .gain_classifier_service import GainClassifier
from .position_service import PositionAggregator
from .carry_forward_service import CarryForwardExporter
from .import_service import ImportService
from .ledger_service import LedgerService, build_ledger, group_by_share
from .export_service import ExportService


__all__ = [
    "LotMatcher",
    "GainClassifier",
    "PositionAggregator",
    "CarryForwardExporter",
    "ImportService",
    "LedgerService",
    "build_ledger",
    "group_by_share",
    "ExportService",
]
