"""Mastery calculation from evaluation events."""

import logging
import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ..config import ScoringConfig
from ..constants import SCORE_MAX, SCORE_MIN
from ..database.models import EvaluationEvent
from ..utils.datetime_utils import ensure_utc, utc_now
from ..utils.errors import ComputationError
from .decay import age_in_days, decay_weight
from .levels import LevelClassifier, MasteryLevel

logger = logging.getLogger(__name__)


@dataclass
class TopicProficiency:
    """Derived mastery of one topic. Recomputed on every query, never stored."""

    topic_id: str
    score: Optional[float] = None  # None: no direct evaluations
    level: MasteryLevel = MasteryLevel.NOT_EVALUATED
    direct_count: int = 0  # events where the topic was primary
    indirect_count: int = 0  # events where the topic was co-occurring only
    last_evaluated_at: Optional[datetime] = None


@dataclass
class ProficiencySummary:
    """Overview across all of a user's topics."""

    total_topics: int = 0
    evaluated_topics: int = 0
    average_score: float = 0.0
    level_counts: Dict[MasteryLevel, int] = field(default_factory=dict)


def check_event(event: EvaluationEvent) -> None:
    """Check that a stored event can take part in scoring.

    Raises:
        ComputationError: If the event has no topics, no timestamp, or a
            non-numeric performance score
    """
    if not event.topic_ids:
        raise ComputationError("event has no topics")
    if event.occurred_at is None:
        raise ComputationError("event has no occurred_at timestamp")
    try:
        score = float(event.performance_score)
    except (TypeError, ValueError):
        raise ComputationError(f"performance score {event.performance_score!r} is not numeric")
    if not math.isfinite(score):
        raise ComputationError(f"performance score {score} is not finite")


def scorable_events(events: Iterable[EvaluationEvent]) -> List[EvaluationEvent]:
    """Filter out malformed events, logging each one skipped."""
    valid = []
    for event in events:
        try:
            check_event(event)
        except ComputationError as e:
            logger.warning(f"Skipping malformed evaluation event {event.id}: {e}")
            continue
        valid.append(event)
    return valid


class ProficiencyAggregator:
    """Turns a user's evaluation events into per-topic proficiency records."""

    def __init__(
        self,
        scoring: ScoringConfig = None,
        classifier: LevelClassifier = None,
    ):
        self.scoring = scoring or ScoringConfig()
        self.classifier = classifier or LevelClassifier()

    def compute_all(
        self,
        events: Iterable[EvaluationEvent],
        as_of: Optional[datetime] = None,
    ) -> Dict[str, TopicProficiency]:
        """Compute proficiency for every topic that appears in any event.

        Only events where a topic is primary contribute to its score. Each
        event where it appears in any other position adds one to its
        indirect count instead.

        Args:
            events: Snapshot of a user's evaluation events
            as_of: Reference time for recency decay (defaults to now)

        Returns:
            Mapping of topic_id to TopicProficiency, in topic_id order
        """
        as_of = ensure_utc(as_of) if as_of else utc_now()

        direct: Dict[str, List[EvaluationEvent]] = defaultdict(list)
        indirect: Dict[str, int] = defaultdict(int)

        for event in scorable_events(events):
            primary = event.topic_ids[0]
            direct[primary].append(event)
            for topic_id in set(event.topic_ids[1:]):
                if topic_id != primary:
                    indirect[topic_id] += 1

        result: Dict[str, TopicProficiency] = {}
        for topic_id in sorted(set(direct) | set(indirect)):
            group = direct.get(topic_id, [])
            score = self.score_events(group, as_of)
            result[topic_id] = TopicProficiency(
                topic_id=topic_id,
                score=score,
                level=self.classifier.classify(score),
                direct_count=len(group),
                indirect_count=indirect.get(topic_id, 0),
                last_evaluated_at=max(
                    (ensure_utc(e.occurred_at) for e in group), default=None
                ),
            )

        logger.debug(
            f"Computed proficiency for {len(result)} topics "
            f"({len(direct)} directly evaluated)"
        )
        return result

    def score_events(
        self, events: List[EvaluationEvent], as_of: datetime
    ) -> Optional[float]:
        """Calculate the decay-weighted average performance of a topic's events.

        Weights are taken relative to the freshest event. This scales every
        weight by the same factor, leaving the average unchanged, and keeps
        the total weight at 1 or more so the score stays defined for very
        stale histories.

        Args:
            events: Events where the topic is primary
            as_of: Reference time for recency decay

        Returns:
            Score in [0, 100], or None if there are no events
        """
        if not events:
            return None

        ages = [max(0.0, age_in_days(e.occurred_at, as_of)) for e in events]
        youngest = min(ages)

        weighted_sum = 0.0
        total_weight = 0.0
        for event, age in zip(events, ages):
            weight = decay_weight(age - youngest, self.scoring.half_life_days)
            weighted_sum += float(event.performance_score) * weight
            total_weight += weight

        score = weighted_sum / total_weight
        # Floating error can push an all-100 history a hair past the bound
        return min(SCORE_MAX, max(SCORE_MIN, score))


def summarize(proficiencies: Dict[str, TopicProficiency]) -> ProficiencySummary:
    """Summarize proficiency records into level counts and an average score.

    Args:
        proficiencies: Output of compute_all

    Returns:
        ProficiencySummary; average_score covers evaluated topics only
    """
    level_counts = {level: 0 for level in MasteryLevel}
    scores = []
    for proficiency in proficiencies.values():
        level_counts[proficiency.level] += 1
        if proficiency.score is not None:
            scores.append(proficiency.score)

    return ProficiencySummary(
        total_topics=len(proficiencies),
        evaluated_topics=len(scores),
        average_score=sum(scores) / len(scores) if scores else 0.0,
        level_counts=level_counts,
    )


_default_aggregator = ProficiencyAggregator()


def compute_all(
    events: Iterable[EvaluationEvent], as_of: Optional[datetime] = None
) -> Dict[str, TopicProficiency]:
    """Compute proficiency for all topics with the default configuration."""
    return _default_aggregator.compute_all(events, as_of)
