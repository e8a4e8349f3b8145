"""Row-to-model mappers for database operations."""

import json
import logging
from typing import Any, Optional, Tuple

from ..utils.datetime_utils import parse_datetime
from .models import EvaluationEvent, EvaluationTier, SourceType

logger = logging.getLogger(__name__)


def _parse_topic_ids(value: Any) -> Tuple[str, ...]:
    """Parse the JSON topic list stored with an event.

    Corrupt values come back as an empty tuple so scoring can skip the event.
    """
    if not value:
        return ()
    try:
        topic_ids = json.loads(value)
    except (TypeError, ValueError):
        logger.warning(f"Unreadable topic list in stored event: {value!r}")
        return ()
    if not isinstance(topic_ids, list):
        return ()
    return tuple(str(topic_id) for topic_id in topic_ids)


def _parse_tier(value: Optional[str]) -> Optional[EvaluationTier]:
    if not value:
        return None
    try:
        return EvaluationTier(value)
    except ValueError:
        return None


def _parse_source_type(value: Optional[str]) -> SourceType:
    try:
        return SourceType(value)
    except ValueError:
        return SourceType.FREE_PRACTICE


def topic_ids_to_json(topic_ids: Tuple[str, ...]) -> str:
    """Serialize a topic list for storage."""
    return json.dumps(list(topic_ids), ensure_ascii=False)


def row_to_evaluation_event(row: Any) -> EvaluationEvent:
    """Convert database row to EvaluationEvent model."""
    return EvaluationEvent(
        id=row["id"],
        user_id=row["user_id"],
        topic_ids=_parse_topic_ids(row["topic_ids"]),
        source_type=_parse_source_type(row["source_type"]),
        source_ref=row["source_ref"],
        occurred_at=parse_datetime(row["occurred_at"]),
        performance_score=row["performance_score"],
        evaluation_tier=_parse_tier(row["evaluation_tier"]),
        notes=row["notes"] or "",
        created_at=parse_datetime(row["created_at"]),
    )
