"""
Nankan Settlement - Umatan Results Module

Settle axis/companion umatan predictions against race results and
maintain the date-partitioned results archive.
"""

from .config import BET_POINTS, BET_TYPE, SettlementConfig
from .assignment import (
    ASSIGNMENT_MARKS,
    AXIS_ASSIGNMENTS,
    COMPANION_ASSIGNMENTS,
    Assignment,
)
from .types import (
    DayArchiveEntry,
    Finisher,
    HitResult,
    Horse,
    PayoutEntry,
    PredictionSet,
    RaceInfo,
    RaceOutcome,
    RacePrediction,
    RaceResult,
    ResultSet,
)
from .hit_evaluator import UmatanHitEvaluator, evaluate
from .aggregator import (
    DayAggregator,
    aggregate,
    parse_race_label,
    recovery_rate,
    split_date,
)
from .archive import ArchiveFile, ArchiveStore, merge_archive
from .loader import DocumentLoader
from .prediction_formatter import format_prediction

__all__ = [
    # Config
    "BET_POINTS",
    "BET_TYPE",
    "SettlementConfig",
    # Assignments
    "ASSIGNMENT_MARKS",
    "AXIS_ASSIGNMENTS",
    "COMPANION_ASSIGNMENTS",
    "Assignment",
    # Types
    "DayArchiveEntry",
    "Finisher",
    "HitResult",
    "Horse",
    "PayoutEntry",
    "PredictionSet",
    "RaceInfo",
    "RaceOutcome",
    "RacePrediction",
    "RaceResult",
    "ResultSet",
    # Settlement
    "UmatanHitEvaluator",
    "evaluate",
    "DayAggregator",
    "aggregate",
    "parse_race_label",
    "recovery_rate",
    "split_date",
    # Archive
    "ArchiveFile",
    "ArchiveStore",
    "merge_archive",
    # I/O
    "DocumentLoader",
    "format_prediction",
]
