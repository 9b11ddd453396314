"""
SQLite-backed store for sessions, tickets and ratings.

One connection is shared across the process. Every statement runs in a
worker thread through asyncio.to_thread so a slow disk never blocks the
event loop, and a threading.Lock serializes use of the connection so
concurrent handlers for different users cannot interleave statements.
"""

import asyncio
import logging
import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar, Union

from frioger_bot.config import StorageConfig
from frioger_bot.schemas.session_schema import Rating, Session, Stage, Ticket
from frioger_bot.storage.base import StorageError
from frioger_bot.storage.memory import InMemoryStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SCHEMA = """
CREATE TABLE IF NOT EXISTS sessions (
    user_id TEXT PRIMARY KEY,
    stage TEXT NOT NULL,
    display_name TEXT NOT NULL DEFAULT '',
    last_updated INTEGER NOT NULL
);
CREATE TABLE IF NOT EXISTS tickets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    display_name TEXT NOT NULL,
    product TEXT NOT NULL,
    report TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'open',
    created_at INTEGER NOT NULL
);
CREATE TABLE IF NOT EXISTS ratings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    display_name TEXT NOT NULL,
    score TEXT NOT NULL,
    created_at INTEGER NOT NULL
);
"""

_UPSERT_SESSION = """
INSERT INTO sessions (user_id, stage, display_name, last_updated)
VALUES (?, ?, ?, ?)
ON CONFLICT(user_id) DO UPDATE SET
    stage = excluded.stage,
    display_name = excluded.display_name,
    last_updated = excluded.last_updated
"""


def _to_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def _from_millis(value: int) -> datetime:
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


class SQLiteStore:
    """SessionStore, TicketSink and RatingSink over a single SQLite file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = str(path)
        self._lock = threading.Lock()
        try:
            self._conn = sqlite3.connect(self._path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            with self._conn:
                self._conn.executescript(_SCHEMA)
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open session database at {self._path}: {exc}") from exc
        logger.info("Connected to session database at %s", self._path)

    def _run(self, fn: Callable[[sqlite3.Connection], T]) -> T:
        with self._lock:
            try:
                with self._conn:
                    return fn(self._conn)
            except sqlite3.Error as exc:
                raise StorageError(str(exc)) from exc

    async def _execute(self, fn: Callable[[sqlite3.Connection], T]) -> T:
        return await asyncio.to_thread(self._run, fn)

    async def get(self, user_id: str) -> Optional[Session]:
        row = await self._execute(
            lambda conn: conn.execute(
                "SELECT user_id, stage, display_name, last_updated FROM sessions WHERE user_id = ?",
                (user_id,),
            ).fetchone()
        )
        if row is None:
            return None
        return Session(
            user_id=row["user_id"],
            stage=Stage.parse(row["stage"]),
            display_name=row["display_name"] or "",
            last_updated=_from_millis(row["last_updated"]),
        )

    async def upsert(self, user_id: str, stage: Stage, display_name: str) -> None:
        now = _to_millis(datetime.now(timezone.utc))
        await self._execute(
            lambda conn: conn.execute(
                _UPSERT_SESSION, (user_id, Stage(stage).value, display_name, now)
            )
        )

    async def delete(self, user_id: str) -> None:
        await self._execute(
            lambda conn: conn.execute("DELETE FROM sessions WHERE user_id = ?", (user_id,))
        )

    async def append_ticket(self, ticket: Ticket) -> int:
        params: tuple[Any, ...] = (
            ticket.user_id,
            ticket.display_name,
            ticket.product,
            ticket.report,
            ticket.status.value,
            _to_millis(ticket.created_at),
        )
        return await self._execute(
            lambda conn: conn.execute(
                "INSERT INTO tickets (user_id, display_name, product, report, status, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                params,
            ).lastrowid
        )

    async def append_rating(self, rating: Rating) -> int:
        params: tuple[Any, ...] = (
            rating.user_id,
            rating.display_name,
            rating.score,
            _to_millis(rating.created_at),
        )
        return await self._execute(
            lambda conn: conn.execute(
                "INSERT INTO ratings (user_id, display_name, score, created_at) "
                "VALUES (?, ?, ?, ?)",
                params,
            ).lastrowid
        )

    def close(self) -> None:
        with self._lock:
            self._conn.close()
        logger.info("Session database closed.")


def open_store(config: StorageConfig) -> Union[SQLiteStore, InMemoryStore]:
    """Open the configured backend. Failure here must abort startup."""
    if config.backend == "memory":
        logger.warning("Using in-memory storage; sessions will not survive a restart.")
        return InMemoryStore()
    return SQLiteStore(config.db_path)
