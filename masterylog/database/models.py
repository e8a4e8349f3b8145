"""Data models for masterylog evaluation events."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple, Union


class SourceType(str, Enum):
    """Kind of material an evaluation came from."""

    CURRICULUM_LESSON = "curriculum-lesson"
    PAST_EXAM = "past-exam"
    STANDARDIZED_TEST = "standardized-test"
    FREE_PRACTICE = "free-practice"


class EvaluationTier(str, Enum):
    """Shorthand outcome entered instead of a raw score."""

    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


@dataclass(frozen=True)
class EvaluationEvent:
    """A single timestamped evaluation across one or more topics.

    The first topic is the primary topic (the one actually assessed); any
    further topics are co-occurring.
    """

    id: Optional[int]
    user_id: str
    topic_ids: Tuple[str, ...]
    source_type: SourceType
    occurred_at: datetime
    performance_score: float
    source_ref: Optional[str] = None
    evaluation_tier: Optional[EvaluationTier] = None
    notes: str = ""
    created_at: Optional[datetime] = None

    @property
    def primary_topic_id(self) -> Optional[str]:
        """Get the primary topic, or None for a malformed event."""
        return self.topic_ids[0] if self.topic_ids else None

    @property
    def co_occurring_topic_ids(self) -> Tuple[str, ...]:
        """Get the non-primary topics."""
        return self.topic_ids[1:]


@dataclass
class EvaluationDraft:
    """Caller input for recording a new evaluation."""

    topic_ids: List[str] = field(default_factory=list)
    source_type: Union[SourceType, str] = SourceType.FREE_PRACTICE
    source_ref: Optional[str] = None
    occurred_at: Optional[datetime] = None
    performance_score: Optional[float] = None
    evaluation_tier: Optional[Union[EvaluationTier, str]] = None
    is_correct: Optional[bool] = None
    notes: str = ""
