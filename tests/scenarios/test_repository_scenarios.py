"""Scenario-based tests for the SQLite event repository."""

from datetime import timedelta

import pytest

from masterylog.database.models import EvaluationEvent, EvaluationTier, SourceType

from tests.mocks import TEST_USER_ID


def _event(topic_ids, occurred_at, score=70.0, user_id=TEST_USER_ID, **kwargs):
    return EvaluationEvent(
        id=None,
        user_id=user_id,
        topic_ids=tuple(topic_ids),
        source_type=kwargs.pop("source_type", SourceType.PAST_EXAM),
        occurred_at=occurred_at,
        performance_score=score,
        **kwargs,
    )


class TestEventRepositoryScenarios:
    """Test scenarios for storing and querying evaluation events."""

    @pytest.mark.asyncio
    async def test_scenario_append_preserves_topic_order(self, event_repository, as_of):
        """
        Scenario: Recording an exam question tagged with several topics

        Given: An event tagged [fractions, ratios, percentages]
        When: It is appended and re-fetched
        Then: Topic order, source, tier, and notes survive the round-trip
        """
        stored = await event_repository.append(
            TEST_USER_ID,
            _event(
                ["fractions", "ratios", "percentages"],
                as_of,
                source_ref="exam-2025-q7",
                evaluation_tier=EvaluationTier.STRONG,
                notes="checked work",
            ),
        )

        [fetched] = await event_repository.list_by_user(TEST_USER_ID)

        assert fetched.id == stored.id
        assert fetched.topic_ids == ("fractions", "ratios", "percentages")
        assert fetched.primary_topic_id == "fractions"
        assert fetched.source_type == SourceType.PAST_EXAM
        assert fetched.source_ref == "exam-2025-q7"
        assert fetched.evaluation_tier == EvaluationTier.STRONG
        assert fetched.notes == "checked work"
        assert fetched.occurred_at == as_of

    @pytest.mark.asyncio
    async def test_scenario_list_by_topic_repeated_tag(self, event_repository, as_of):
        """
        Scenario: A topic tagged twice on the same event

        Given: An event tagged [A, B, A] and another tagged [C]
        When: Events for A are listed
        Then: The first event is returned exactly once
        """
        tagged = await event_repository.append(TEST_USER_ID, _event(["A", "B", "A"], as_of))
        await event_repository.append(TEST_USER_ID, _event(["C"], as_of))

        events = await event_repository.list_by_topic(TEST_USER_ID, "A")

        assert [e.id for e in events] == [tagged.id]

    @pytest.mark.asyncio
    async def test_scenario_list_by_user_is_scoped(self, event_repository, as_of):
        """
        Scenario: Two learners share one database

        Given: Events for two users
        When: One user's events are listed
        Then: Only that user's events are returned, oldest first
        """
        late = await event_repository.append(TEST_USER_ID, _event(["A"], as_of))
        early = await event_repository.append(
            TEST_USER_ID, _event(["A"], as_of - timedelta(days=3))
        )
        await event_repository.append("other-user", _event(["A"], as_of))

        events = await event_repository.list_by_user(TEST_USER_ID)

        assert [e.id for e in events] == [early.id, late.id]

    @pytest.mark.asyncio
    async def test_scenario_delete_many_ignores_other_users(self, event_repository, as_of):
        """
        Scenario: A delete names an event owned by someone else

        Given: One event per user
        When: Both ids are deleted on behalf of the first user
        Then: Only the first user's event is removed
        """
        mine = await event_repository.append(TEST_USER_ID, _event(["A"], as_of))
        theirs = await event_repository.append("other-user", _event(["A"], as_of))

        deleted = await event_repository.delete_many(TEST_USER_ID, [mine.id, theirs.id])

        assert deleted == 1
        assert await event_repository.list_by_user(TEST_USER_ID) == []
        remaining = await event_repository.list_by_topic("other-user", "A")
        assert [e.id for e in remaining] == [theirs.id]

    @pytest.mark.asyncio
    async def test_scenario_delete_nothing(self, event_repository):
        """
        Scenario: Deleting an empty batch

        Given: No event ids
        When: delete_many is called
        Then: Zero is returned without touching the store
        """
        assert await event_repository.delete_many(TEST_USER_ID, []) == 0
