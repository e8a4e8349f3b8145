"""Event repository: SQLite-backed evaluation event store."""

import logging
from typing import List, Sequence

from ...utils.datetime_utils import ensure_utc, utc_now
from ..mappers import row_to_evaluation_event, topic_ids_to_json
from ..models import EvaluationEvent
from ..store import EventStore
from .base import BaseRepository

logger = logging.getLogger(__name__)


def _to_timestamp(value) -> str:
    return ensure_utc(value).isoformat(timespec="microseconds")


class EventRepository(BaseRepository, EventStore):
    """Repository for evaluation event operations."""

    async def list_by_user(self, user_id: str) -> List[EvaluationEvent]:
        """Get all evaluation events for a user, oldest first."""
        async with self.store_call("list evaluation events") as conn:
            cursor = await conn.execute(
                """SELECT * FROM evaluation_events
                   WHERE user_id = ?
                   ORDER BY occurred_at, id""",
                (user_id,),
            )
            rows = await cursor.fetchall()

        return [row_to_evaluation_event(row) for row in rows]

    async def list_by_topic(self, user_id: str, topic_id: str) -> List[EvaluationEvent]:
        """Get evaluation events that reference a topic anywhere, newest first."""
        async with self.store_call("list evaluation events for topic") as conn:
            cursor = await conn.execute(
                """SELECT DISTINCT e.* FROM evaluation_events e
                   JOIN event_topics t ON t.event_id = e.id
                   WHERE e.user_id = ? AND t.topic_id = ?
                   ORDER BY e.occurred_at DESC, e.id DESC""",
                (user_id, topic_id),
            )
            rows = await cursor.fetchall()

        return [row_to_evaluation_event(row) for row in rows]

    async def append(self, user_id: str, event: EvaluationEvent) -> EvaluationEvent:
        """Insert an evaluation event and its topic index rows."""
        created_at = utc_now()
        tier = event.evaluation_tier.value if event.evaluation_tier else None

        async with self.store_call("append evaluation event") as conn:
            cursor = await conn.execute(
                """INSERT INTO evaluation_events
                   (user_id, topic_ids, source_type, source_ref, occurred_at,
                    performance_score, evaluation_tier, notes, created_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    user_id,
                    topic_ids_to_json(event.topic_ids),
                    event.source_type.value,
                    event.source_ref,
                    _to_timestamp(event.occurred_at),
                    event.performance_score,
                    tier,
                    event.notes,
                    _to_timestamp(created_at),
                ),
            )
            event_id = cursor.lastrowid

            await conn.executemany(
                "INSERT INTO event_topics (event_id, topic_id, position) VALUES (?, ?, ?)",
                [
                    (event_id, topic_id, position)
                    for position, topic_id in enumerate(event.topic_ids)
                ],
            )
            await conn.commit()

        logger.debug(f"Stored evaluation event {event_id} for user {user_id}")

        return EvaluationEvent(
            id=event_id,
            user_id=user_id,
            topic_ids=tuple(event.topic_ids),
            source_type=event.source_type,
            source_ref=event.source_ref,
            occurred_at=ensure_utc(event.occurred_at),
            performance_score=event.performance_score,
            evaluation_tier=event.evaluation_tier,
            notes=event.notes,
            created_at=created_at,
        )

    async def delete_many(self, user_id: str, event_ids: Sequence[int]) -> int:
        """Delete a user's events by id.

        Returns:
            Number of events deleted
        """
        if not event_ids:
            return 0

        placeholders = ",".join("?" * len(event_ids))
        async with self.store_call("delete evaluation events") as conn:
            await conn.execute(
                f"DELETE FROM event_topics WHERE event_id IN ({placeholders}) "
                f"AND event_id IN (SELECT id FROM evaluation_events WHERE user_id = ?)",
                (*event_ids, user_id),
            )
            cursor = await conn.execute(
                f"""DELETE FROM evaluation_events
                   WHERE user_id = ? AND id IN ({placeholders})""",
                (user_id, *event_ids),
            )
            deleted = cursor.rowcount
            await conn.commit()

        return deleted
