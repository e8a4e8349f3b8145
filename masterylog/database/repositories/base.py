"""Base repository with common database operations."""

import logging
import sqlite3
from contextlib import asynccontextmanager
from typing import AsyncIterator

import aiosqlite

from ...utils.errors import StoreUnavailableError
from ..connection import Database

logger = logging.getLogger(__name__)


class BaseRepository:
    """Base class for all repositories."""

    def __init__(self, database: Database):
        self.db = database

    @property
    def connection(self) -> aiosqlite.Connection:
        """Get the database connection."""
        return self.db.connection

    @asynccontextmanager
    async def store_call(self, action: str) -> AsyncIterator[aiosqlite.Connection]:
        """Run a block of database work, reporting failures as StoreUnavailableError.

        Args:
            action: Short description used in logs and the raised error
        """
        try:
            conn = self.connection
        except RuntimeError as e:
            logger.error(f"Event store unavailable while trying to {action}: {e}")
            raise StoreUnavailableError(f"Could not {action}: {e}") from e

        try:
            yield conn
        except (sqlite3.Error, ValueError) as e:
            logger.error(f"Event store failed to {action}: {e}")
            try:
                await conn.rollback()
            except (sqlite3.Error, ValueError) as rollback_error:
                logger.warning(f"Rollback after failed {action} also failed: {rollback_error}")
            raise StoreUnavailableError(f"Could not {action}: {e}") from e
