"""Database repositories for domain-specific operations."""

from .base import BaseRepository
from .event_repository import EventRepository

__all__ = [
    "BaseRepository",
    "EventRepository",
]
