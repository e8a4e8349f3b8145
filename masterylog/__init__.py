"""masterylog: topic mastery scoring over timestamped evaluation events."""

import logging
import sys

from .config import Config, default_config, load_config
from .database import (
    Database,
    EvaluationDraft,
    EvaluationEvent,
    EvaluationTier,
    EventRepository,
    EventStore,
    SourceType,
)
from .learning import (
    CoOccurrenceAnalyzer,
    LevelClassifier,
    MasteryLevel,
    ProficiencyAggregator,
    ProficiencySummary,
    RelatedTopic,
    TopicProficiency,
    classify,
    compute_all,
    decay_weight,
    related,
    summarize,
)
from .services import EvaluationService, ProgressService, ResetOutcome, ServiceResult
from .session import SessionManager, UserSession

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging for applications embedding masterylog."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


__all__ = [
    "CoOccurrenceAnalyzer",
    "Config",
    "Database",
    "EvaluationDraft",
    "EvaluationEvent",
    "EvaluationService",
    "EvaluationTier",
    "EventRepository",
    "EventStore",
    "LevelClassifier",
    "MasteryLevel",
    "ProficiencyAggregator",
    "ProficiencySummary",
    "ProgressService",
    "RelatedTopic",
    "ResetOutcome",
    "ServiceResult",
    "SessionManager",
    "SourceType",
    "TopicProficiency",
    "UserSession",
    "classify",
    "compute_all",
    "configure_logging",
    "decay_weight",
    "default_config",
    "load_config",
    "related",
    "summarize",
]
