"""SQLite database connection manager for masterylog."""

import aiosqlite
from pathlib import Path
from typing import Optional


class Database:
    """Async SQLite database connection manager."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._connection: Optional[aiosqlite.Connection] = None

    async def connect(self) -> None:
        """Establish database connection and initialize schema."""
        # Ensure data directory exists
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        self._connection = await aiosqlite.connect(self.db_path)
        self._connection.row_factory = aiosqlite.Row
        await self._connection.execute("PRAGMA foreign_keys = ON")
        await self._init_schema()

    async def close(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    @property
    def connection(self) -> aiosqlite.Connection:
        """Get the database connection."""
        if not self._connection:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._connection

    async def _init_schema(self) -> None:
        """Initialize database schema."""
        schema = """
        -- Evaluation events (append-only)
        CREATE TABLE IF NOT EXISTS evaluation_events (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id TEXT NOT NULL,
            topic_ids TEXT NOT NULL,
            source_type TEXT NOT NULL,
            source_ref TEXT,
            occurred_at TIMESTAMP NOT NULL,
            performance_score REAL NOT NULL,
            evaluation_tier TEXT,
            notes TEXT DEFAULT '',
            created_at TIMESTAMP NOT NULL
        );

        -- One row per (event, topic) for topic lookups
        CREATE TABLE IF NOT EXISTS event_topics (
            event_id INTEGER NOT NULL,
            topic_id TEXT NOT NULL,
            position INTEGER NOT NULL,
            PRIMARY KEY (event_id, position),
            FOREIGN KEY (event_id) REFERENCES evaluation_events(id) ON DELETE CASCADE
        );

        -- Indexes for performance
        CREATE INDEX IF NOT EXISTS idx_evaluation_events_user ON evaluation_events(user_id);
        CREATE INDEX IF NOT EXISTS idx_event_topics_topic ON event_topics(topic_id);
        """

        await self._connection.executescript(schema)
        await self._connection.commit()
