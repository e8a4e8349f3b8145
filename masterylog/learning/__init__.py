"""Mastery scoring engine for masterylog."""

from .decay import age_in_days, decay_weight
from .levels import LevelClassifier, MasteryLevel, classify
from .mastery import (
    ProficiencyAggregator,
    ProficiencySummary,
    TopicProficiency,
    compute_all,
    summarize,
)
from .related import CoOccurrenceAnalyzer, RelatedTopic, related

__all__ = [
    "CoOccurrenceAnalyzer",
    "LevelClassifier",
    "MasteryLevel",
    "ProficiencyAggregator",
    "ProficiencySummary",
    "RelatedTopic",
    "TopicProficiency",
    "age_in_days",
    "classify",
    "compute_all",
    "decay_weight",
    "related",
    "summarize",
]
