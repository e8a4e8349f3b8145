"""Database layer for masterylog."""

from .connection import Database
from .models import EvaluationDraft, EvaluationEvent, EvaluationTier, SourceType
from .repositories import EventRepository
from .store import EventStore

__all__ = [
    "Database",
    "EvaluationDraft",
    "EvaluationEvent",
    "EvaluationTier",
    "EventRepository",
    "EventStore",
    "SourceType",
]
