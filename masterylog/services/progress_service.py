"""Service for on-demand proficiency and related topic queries."""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Union

from ..config import Config
from ..constants import (
    ERROR_CODE_NOT_SIGNED_IN,
    ERROR_CODE_STORE_UNAVAILABLE,
    ERROR_CODE_VALIDATION,
    ERROR_STORE,
)
from ..database.models import EvaluationEvent
from ..database.store import EventStore
from ..learning.levels import LevelClassifier
from ..learning.mastery import (
    ProficiencyAggregator,
    ProficiencySummary,
    TopicProficiency,
    summarize,
)
from ..learning.related import CoOccurrenceAnalyzer, RelatedTopic
from ..session import UserSession
from ..utils.datetime_utils import ensure_utc
from ..utils.errors import NotSignedInError, StoreUnavailableError, ValidationError
from .base import BaseService, ServiceResult
from .evaluation_service import clean_topic_id

logger = logging.getLogger(__name__)


class ProgressService(BaseService):
    """Service for progress queries.

    Every call fetches a fresh snapshot from the event store and recomputes
    from scratch; nothing derived is cached between calls.
    """

    def __init__(
        self,
        store: EventStore,
        config: Optional[Config] = None,
        aggregator: Optional[ProficiencyAggregator] = None,
        analyzer: Optional[CoOccurrenceAnalyzer] = None,
    ):
        super().__init__(store, config)
        self.aggregator = aggregator or ProficiencyAggregator(
            scoring=self.config.scoring,
            classifier=LevelClassifier(self.config.levels),
        )
        self.analyzer = analyzer or CoOccurrenceAnalyzer()

    async def get_proficiencies(
        self, user: Union[str, UserSession], as_of: Optional[datetime] = None
    ) -> ServiceResult[Dict[str, TopicProficiency]]:
        """Get proficiency for every topic the user has been evaluated on."""
        try:
            user_id = self.resolve_user_id(user)
        except NotSignedInError as e:
            return ServiceResult.fail(ERROR_CODE_NOT_SIGNED_IN, str(e))

        try:
            events = await self.store.list_by_user(user_id)
        except StoreUnavailableError as e:
            logger.error(f"Failed to load events for user {user_id}: {e}")
            return ServiceResult.fail(ERROR_CODE_STORE_UNAVAILABLE, ERROR_STORE)

        return ServiceResult.ok(self.aggregator.compute_all(events, as_of))

    async def get_summary(
        self, user: Union[str, UserSession], as_of: Optional[datetime] = None
    ) -> ServiceResult[ProficiencySummary]:
        """Get level counts and average score across the user's topics."""
        result = await self.get_proficiencies(user, as_of)
        if not result.success:
            return ServiceResult.fail(result.error_code, result.error)

        return ServiceResult.ok(summarize(result.data))

    async def get_related(
        self,
        user: Union[str, UserSession],
        anchor_topic_id: str,
        limit: Optional[int] = None,
    ) -> ServiceResult[List[RelatedTopic]]:
        """Get topics most often evaluated alongside an anchor topic.

        Args:
            user: Owner of the events, as a user id or a signed-in session
            anchor_topic_id: Topic being drilled into
            limit: Maximum number of topics (defaults to related.default_limit)
        """
        try:
            user_id = self.resolve_user_id(user)
        except NotSignedInError as e:
            return ServiceResult.fail(ERROR_CODE_NOT_SIGNED_IN, str(e))

        try:
            anchor_topic_id = clean_topic_id(anchor_topic_id)
        except ValidationError as e:
            return ServiceResult.fail(ERROR_CODE_VALIDATION, str(e))

        if limit is None:
            limit = self.config.related.default_limit

        try:
            events = await self.store.list_by_user(user_id)
        except StoreUnavailableError as e:
            logger.error(f"Failed to load events for user {user_id}: {e}")
            return ServiceResult.fail(ERROR_CODE_STORE_UNAVAILABLE, ERROR_STORE)

        return ServiceResult.ok(self.analyzer.related(events, anchor_topic_id, limit))

    async def get_topic_history(
        self, user: Union[str, UserSession], topic_id: str
    ) -> ServiceResult[List[EvaluationEvent]]:
        """Get every event that references a topic, newest first."""
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
            logger.error(f"Failed to load history of topic {topic_id}: {e}")
            return ServiceResult.fail(ERROR_CODE_STORE_UNAVAILABLE, ERROR_STORE)

        events = [event for event in events if event.occurred_at is not None]
        events.sort(key=lambda e: (ensure_utc(e.occurred_at), e.id or 0), reverse=True)
        return ServiceResult.ok(events)
