"""Recency weighting for evaluation events."""

from datetime import datetime

from ..constants import HALF_LIFE_DAYS, SECONDS_PER_DAY
from ..utils.datetime_utils import ensure_utc


def decay_weight(age_days: float, half_life_days: float = HALF_LIFE_DAYS) -> float:
    """Get the recency weight of an evaluation.

    Weight halves every ``half_life_days``: 1.0 when fresh, 0.5 at one
    half-life. Negative ages (future-dated events) count as fresh.

    Args:
        age_days: Age of the evaluation in days
        half_life_days: Age at which the weight is exactly 0.5

    Returns:
        Weight in (0, 1]; may underflow to 0.0 only for absurdly old ages

    Raises:
        ValueError: If half_life_days is not positive
    """
    if not half_life_days > 0:
        raise ValueError(f"half_life_days must be positive, got {half_life_days}")
    age = max(0.0, age_days)
    return 2.0 ** (-age / half_life_days)


def age_in_days(occurred_at: datetime, as_of: datetime) -> float:
    """Get the fractional age in days of ``occurred_at`` relative to ``as_of``."""
    delta = ensure_utc(as_of) - ensure_utc(occurred_at)
    return delta.total_seconds() / SECONDS_PER_DAY
