"""SQLite key-value store backing the persisted dictionary record.

All store operations catch ``aiosqlite.Error`` internally and degrade
gracefully: read failures return ``None`` (treated as an absent record by
callers), write failures are logged and ignored. Infrastructure errors never
cross the store boundary, so a broken disk leaves the session running on its
last-known-good dictionary. Errors are logged with ``exc_info=True`` so they
remain observable via stderr.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol

import aiosqlite
import structlog

log = structlog.get_logger()

_CREATE_KV_TABLE = """
CREATE TABLE IF NOT EXISTS kv_store (
    key         TEXT PRIMARY KEY,
    value       TEXT NOT NULL,
    updated_at  TEXT NOT NULL
)
"""


class StoreProtocol(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...


class SqliteStore:
    """SQLite-backed durable key-value store implementing StoreProtocol."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def init_db(self) -> None:
        """Create the table and set WAL mode. Called once at startup."""
        await self._db.execute("PRAGMA journal_mode = WAL")
        await self._db.execute(_CREATE_KV_TABLE)
        await self._db.commit()

    async def get(self, key: str) -> str | None:
        """Read a value. Returns ``None`` when absent or on read failure."""
        try:
            cursor = await self._db.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return row[0]
        except aiosqlite.Error:
            log.warning("store_read_error", key=key, exc_info=True)
            return None

    async def set(self, key: str, value: str) -> None:
        """Write a value. Non-fatal on failure."""
        try:
            await self._db.execute(
                "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
                (key, value, datetime.now(UTC).isoformat()),
            )
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("store_write_error", key=key, exc_info=True)

    async def delete(self, key: str) -> None:
        """Remove a value. Non-fatal on failure."""
        try:
            await self._db.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("store_delete_error", key=key, exc_info=True)
