"""Utility modules for masterylog."""

from .datetime_utils import ensure_utc, parse_datetime, utc_now
from .errors import (
    ComputationError,
    MasteryLogError,
    NotSignedInError,
    StoreUnavailableError,
    ValidationError,
)

__all__ = [
    "ensure_utc",
    "parse_datetime",
    "utc_now",
    "ComputationError",
    "MasteryLogError",
    "NotSignedInError",
    "StoreUnavailableError",
    "ValidationError",
]
