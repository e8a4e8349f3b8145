"""Pytest configuration and shared fixtures for masterylog tests."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Sequence

import pytest
import pytest_asyncio

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from masterylog.database.models import EvaluationEvent, SourceType
from tests.mocks.store_mocks import (
    TEST_USER_ID,
    FailingDeleteEventStore,
    InMemoryEventStore,
    UnavailableEventStore,
)

# Fixed reference time so decay-dependent assertions are exact
AS_OF = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# Time Fixtures
# ============================================================================


@pytest.fixture
def as_of() -> datetime:
    """Reference time used for scoring in tests."""
    return AS_OF


# ============================================================================
# Event Fixtures
# ============================================================================


@pytest.fixture
def make_event() -> Callable[..., EvaluationEvent]:
    """Factory for evaluation events aged relative to AS_OF."""
    counter = {"next_id": 1}

    def _make_event(
        topic_ids: Sequence[str],
        score: float,
        age_days: float = 0,
        source_type: SourceType = SourceType.FREE_PRACTICE,
        user_id: str = TEST_USER_ID,
    ) -> EvaluationEvent:
        event = EvaluationEvent(
            id=counter["next_id"],
            user_id=user_id,
            topic_ids=tuple(topic_ids),
            source_type=source_type,
            occurred_at=AS_OF - timedelta(days=age_days),
            performance_score=score,
        )
        counter["next_id"] += 1
        return event

    return _make_event


# ============================================================================
# Config Fixtures
# ============================================================================


@pytest.fixture
def config():
    """Default configuration."""
    from masterylog.config import default_config

    return default_config()


@pytest.fixture
def small_batch_config():
    """Configuration that deletes two events per batch."""
    from masterylog.config import Config, StoreConfig

    return Config(store=StoreConfig(delete_batch_size=2))


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def test_database():
    """Create an in-memory database for testing."""
    from masterylog.database.connection import Database

    # Use in-memory SQLite
    db = Database(":memory:")
    await db.connect()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def event_repository(test_database):
    """Create an event repository with the test database."""
    from masterylog.database.repositories import EventRepository

    return EventRepository(test_database)


# ============================================================================
# Mock Store Fixtures
# ============================================================================


@pytest.fixture
def memory_store():
    """Create an in-memory event store."""
    return InMemoryEventStore()


@pytest.fixture
def unavailable_store():
    """Create an event store that always fails."""
    return UnavailableEventStore()


@pytest.fixture
def failing_delete_store_factory():
    """Factory for stores whose deletes fail from a given batch onwards."""

    def _factory(fail_on_call: int) -> FailingDeleteEventStore:
        return FailingDeleteEventStore(fail_on_call=fail_on_call)

    return _factory


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def evaluation_service(event_repository, config):
    """Create an evaluation service backed by the test database."""
    from masterylog.services import EvaluationService

    return EvaluationService(event_repository, config)


@pytest_asyncio.fixture
async def progress_service(event_repository, config):
    """Create a progress service backed by the test database."""
    from masterylog.services import ProgressService

    return ProgressService(event_repository, config)
