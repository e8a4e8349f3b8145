"""Event store interface consumed by the scoring services."""

from abc import ABC, abstractmethod
from typing import List, Sequence

from .models import EvaluationEvent


class EventStore(ABC):
    """Abstract append-only store of evaluation events.

    Implementations raise StoreUnavailableError when a call cannot be
    completed. Retries, timeouts and cancellation are the implementation's
    concern; the services above never retry.
    """

    @abstractmethod
    async def list_by_user(self, user_id: str) -> List[EvaluationEvent]:
        """Get a full snapshot of a user's events.

        Args:
            user_id: Owner of the events

        Returns:
            Every stored event for the user
        """
        pass

    @abstractmethod
    async def append(self, user_id: str, event: EvaluationEvent) -> EvaluationEvent:
        """Insert a single event.

        Args:
            user_id: Owner of the event
            event: Event to store; its id is ignored

        Returns:
            The stored event, including its assigned id and created_at
        """
        pass

    @abstractmethod
    async def delete_many(self, user_id: str, event_ids: Sequence[int]) -> int:
        """Delete events by identifier.

        Args:
            user_id: Owner of the events
            event_ids: Identifiers to delete

        Returns:
            Number of events actually deleted
        """
        pass

    async def list_by_topic(self, user_id: str, topic_id: str) -> List[EvaluationEvent]:
        """Get every event whose topic list contains the topic, at any position."""
        events = await self.list_by_user(user_id)
        return [event for event in events if topic_id in event.topic_ids]
