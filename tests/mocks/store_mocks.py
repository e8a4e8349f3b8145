"""Mock event stores for testing services without a database."""

import dataclasses
from typing import Dict, List, Sequence

from masterylog.database.models import EvaluationEvent
from masterylog.database.store import EventStore
from masterylog.utils.datetime_utils import utc_now
from masterylog.utils.errors import StoreUnavailableError

TEST_USER_ID = "user-123"


class InMemoryEventStore(EventStore):
    """Event store backed by a dict, recording every call."""

    def __init__(self):
        self._events: Dict[int, EvaluationEvent] = {}
        self._next_id = 1
        self.call_history: List[str] = []

    async def list_by_user(self, user_id: str) -> List[EvaluationEvent]:
        self.call_history.append("list_by_user")
        return [e for e in self._events.values() if e.user_id == user_id]

    async def append(self, user_id: str, event: EvaluationEvent) -> EvaluationEvent:
        self.call_history.append("append")
        stored = dataclasses.replace(
            event, id=self._next_id, user_id=user_id, created_at=utc_now()
        )
        self._events[stored.id] = stored
        self._next_id += 1
        return stored

    async def delete_many(self, user_id: str, event_ids: Sequence[int]) -> int:
        self.call_history.append("delete_many")
        deleted = 0
        for event_id in event_ids:
            event = self._events.get(event_id)
            if event is not None and event.user_id == user_id:
                del self._events[event_id]
                deleted += 1
        return deleted

    def add(self, event: EvaluationEvent) -> EvaluationEvent:
        """Seed an event directly, bypassing validation."""
        stored = dataclasses.replace(event, id=self._next_id)
        self._events[stored.id] = stored
        self._next_id += 1
        return stored

    @property
    def events(self) -> List[EvaluationEvent]:
        return list(self._events.values())


class UnavailableEventStore(InMemoryEventStore):
    """Event store whose every call fails."""

    async def list_by_user(self, user_id: str) -> List[EvaluationEvent]:
        self.call_history.append("list_by_user")
        raise StoreUnavailableError("store offline")

    async def append(self, user_id: str, event: EvaluationEvent) -> EvaluationEvent:
        self.call_history.append("append")
        raise StoreUnavailableError("store offline")

    async def delete_many(self, user_id: str, event_ids: Sequence[int]) -> int:
        self.call_history.append("delete_many")
        raise StoreUnavailableError("store offline")


class FailingDeleteEventStore(InMemoryEventStore):
    """Event store whose delete_many fails from the given call onwards (1-based)."""

    def __init__(self, fail_on_call: int):
        super().__init__()
        self.fail_on_call = fail_on_call
        self._delete_calls = 0

    async def delete_many(self, user_id: str, event_ids: Sequence[int]) -> int:
        self._delete_calls += 1
        if self._delete_calls >= self.fail_on_call:
            self.call_history.append("delete_many")
            raise StoreUnavailableError("connection dropped mid-batch")
        return await super().delete_many(user_id, event_ids)
