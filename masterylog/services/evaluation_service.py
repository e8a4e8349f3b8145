"""Evaluation service: the only entry point that changes stored events."""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from ..constants import (
    ERROR_BLANK_TOPIC,
    ERROR_CODE_NOT_SIGNED_IN,
    ERROR_CODE_STORE_UNAVAILABLE,
    ERROR_CODE_VALIDATION,
    ERROR_EMPTY_TOPICS,
    ERROR_NO_SCORE,
    ERROR_SCORE_RANGE,
    ERROR_STORE,
    ERROR_TOPICS_NOT_LIST,
    SCORE_MAX,
    SCORE_MIN,
)
from ..database.models import (
    EvaluationDraft,
    EvaluationEvent,
    EvaluationTier,
    SourceType,
)
from ..session import UserSession
from ..utils.datetime_utils import ensure_utc, utc_now
from ..utils.errors import NotSignedInError, StoreUnavailableError, ValidationError
from .base import BaseService, ServiceResult

logger = logging.getLogger(__name__)


@dataclass
class ResetOutcome:
    """Result of erasing a topic's evaluation history."""

    topic_id: str
    deleted_count: int
    partial: bool = False  # a later delete batch failed; leftovers go on the next reset


def clean_topic_id(topic_id: Optional[str]) -> str:
    """Strip a topic identifier, rejecting blank ones.

    Raises:
        ValidationError: If the identifier is empty or whitespace
    """
    cleaned = (topic_id or "").strip()
    if not cleaned:
        raise ValidationError(ERROR_BLANK_TOPIC)
    return cleaned


class EvaluationService(BaseService):
    """Service for recording evaluations and resetting topics.

    Neither operation recomputes proficiency; callers fetch the event list
    again and re-run the aggregation.
    """

    async def append(
        self, user: Union[str, UserSession], draft: EvaluationDraft
    ) -> ServiceResult[EvaluationEvent]:
        """Validate a draft and store it as a new evaluation event.

        Args:
            user: Owner of the event, as a user id or a signed-in session
            draft: Caller input

        Returns:
            ServiceResult with the stored event (including its id)
        """
        try:
            user_id = self.resolve_user_id(user)
        except NotSignedInError as e:
            return ServiceResult.fail(ERROR_CODE_NOT_SIGNED_IN, str(e))

        try:
            event = self.build_event(user_id, draft)
        except ValidationError as e:
            logger.info(f"Rejected evaluation for user {user_id}: {e}")
            return ServiceResult.fail(ERROR_CODE_VALIDATION, str(e))

        try:
            stored = await self.store.append(user_id, event)
        except StoreUnavailableError as e:
            logger.error(f"Failed to append evaluation for user {user_id}: {e}")
            return ServiceResult.fail(ERROR_CODE_STORE_UNAVAILABLE, ERROR_STORE)

        logger.info(
            f"Recorded evaluation {stored.id} for user {user_id}: "
            f"{stored.topic_ids[0]} scored {stored.performance_score:g}"
        )
        return ServiceResult.ok(stored)

    async def reset_topic(
        self, user: Union[str, UserSession], topic_id: str
    ) -> ServiceResult[ResetOutcome]:
        """Delete every event that references a topic at any position.

        Deletion runs in batches. If a batch after the first fails, the
        result is still a success carrying the true deleted count and
        ``partial=True``.

        Args:
            user: Owner of the events, as a user id or a signed-in session
            topic_id: Topic whose evaluation history is erased

        Returns:
            ServiceResult with a ResetOutcome
        """
        try:
            user_id = self.resolve_user_id(user)
        except NotSignedInError as e:
            return ServiceResult.fail(ERROR_CODE_NOT_SIGNED_IN, str(e))

        try:
            topic_id = clean_topic_id(topic_id)
        except ValidationError as e:
            return ServiceResult.fail(ERROR_CODE_VALIDATION, str(e))

        try:
            events = await self.store.list_by_topic(user_id, topic_id)
        except StoreUnavailableError as e:
            logger.error(f"Failed to list events for topic {topic_id}: {e}")
            return ServiceResult.fail(ERROR_CODE_STORE_UNAVAILABLE, ERROR_STORE)

        event_ids = [event.id for event in events if event.id is not None]
        batch_size = max(1, self.config.store.delete_batch_size)
        deleted = 0

        for start in range(0, len(event_ids), batch_size):
            batch = event_ids[start:start + batch_size]
            try:
                deleted += await self.store.delete_many(user_id, batch)
            except StoreUnavailableError as e:
                if start == 0:
                    logger.error(f"Failed to reset topic {topic_id}: {e}")
                    return ServiceResult.fail(ERROR_CODE_STORE_UNAVAILABLE, ERROR_STORE)
                logger.warning(
                    f"Partial reset of topic {topic_id}: deleted {deleted} of "
                    f"{len(event_ids)} events before failure: {e}"
                )
                return ServiceResult.ok(
                    ResetOutcome(topic_id=topic_id, deleted_count=deleted, partial=True)
                )

        logger.info(f"Reset topic {topic_id} for user {user_id}: deleted {deleted} events")
        return ServiceResult.ok(ResetOutcome(topic_id=topic_id, deleted_count=deleted))

    def build_event(self, user_id: str, draft: EvaluationDraft) -> EvaluationEvent:
        """Validate a draft and turn it into an unsaved EvaluationEvent.

        Raises:
            ValidationError: If the draft cannot be stored
        """
        if not user_id or not str(user_id).strip():
            raise ValidationError("User identifier must not be blank.")
        topic_ids = self._clean_topic_ids(draft.topic_ids)
        source_type = self._resolve_source_type(draft.source_type)
        score, tier = self.resolve_score(draft)
        occurred_at = ensure_utc(draft.occurred_at) if draft.occurred_at else utc_now()

        return EvaluationEvent(
            id=None,
            user_id=user_id,
            topic_ids=topic_ids,
            source_type=source_type,
            source_ref=draft.source_ref or None,
            occurred_at=occurred_at,
            performance_score=score,
            evaluation_tier=tier,
            notes=draft.notes or "",
        )

    def resolve_score(
        self, draft: EvaluationDraft
    ) -> Tuple[float, Optional[EvaluationTier]]:
        """Resolve the performance score of a draft.

        Priority:
        1. An explicit performance score
        2. The configured score of the evaluation tier
        3. The configured correct/incorrect score

        Returns:
            Tuple of (performance_score, evaluation_tier)

        Raises:
            ValidationError: If no score can be resolved or it is out of range
        """
        scoring = self.config.scoring

        if draft.performance_score is not None:
            try:
                score = float(draft.performance_score)
            except (TypeError, ValueError):
                raise ValidationError(ERROR_NO_SCORE)
            # The tier is only a label here, so an unrecognized one is dropped
            tier = self._label_tier(draft.evaluation_tier)
        else:
            tier = self._resolve_tier(draft.evaluation_tier)
            if tier is not None:
                if tier.value not in scoring.tier_scores:
                    raise ValidationError(f"No score configured for tier '{tier.value}'.")
                score = float(scoring.tier_scores[tier.value])
            elif draft.is_correct is not None:
                score = scoring.correct_score if draft.is_correct else scoring.incorrect_score
            else:
                raise ValidationError(ERROR_NO_SCORE)

        if not math.isfinite(score) or not SCORE_MIN <= score <= SCORE_MAX:
            raise ValidationError(ERROR_SCORE_RANGE)

        return score, tier

    @staticmethod
    def _clean_topic_ids(topic_ids: List[str]) -> Tuple[str, ...]:
        if topic_ids is None:
            raise ValidationError(ERROR_EMPTY_TOPICS)
        if not isinstance(topic_ids, (list, tuple)):
            raise ValidationError(ERROR_TOPICS_NOT_LIST)
        cleaned = tuple(
            str(topic_id).strip()
            for topic_id in topic_ids
            if topic_id is not None and str(topic_id).strip()
        )
        if not cleaned:
            raise ValidationError(ERROR_EMPTY_TOPICS)
        return cleaned

    @staticmethod
    def _resolve_source_type(value) -> SourceType:
        if isinstance(value, SourceType):
            return value
        try:
            return SourceType(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(s.value for s in SourceType)
            raise ValidationError(f"Unknown source type '{value}'. Expected one of: {valid}.")

    @staticmethod
    def _resolve_tier(value) -> Optional[EvaluationTier]:
        if value is None or value == "":
            return None
        if isinstance(value, EvaluationTier):
            return value
        try:
            return EvaluationTier(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(t.value for t in EvaluationTier)
            raise ValidationError(f"Unknown evaluation tier '{value}'. Expected one of: {valid}.")

    @classmethod
    def _label_tier(cls, value) -> Optional[EvaluationTier]:
        try:
            return cls._resolve_tier(value)
        except ValidationError as e:
            logger.info(f"Ignoring tier alongside an explicit score: {e}")
            return None
