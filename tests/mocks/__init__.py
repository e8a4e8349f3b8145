"""Mock utilities for testing."""

from .store_mocks import (
    TEST_USER_ID,
    FailingDeleteEventStore,
    InMemoryEventStore,
    UnavailableEventStore,
)

__all__ = [
    "TEST_USER_ID",
    "FailingDeleteEventStore",
    "InMemoryEventStore",
    "UnavailableEventStore",
]
