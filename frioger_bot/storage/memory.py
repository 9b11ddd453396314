"""
In-memory store for sessions, tickets and ratings.

Used by tests and the console demo. Mirrors the SQLite backend's
behaviour so the engine sees identical semantics from both.
"""

import itertools
from datetime import datetime, timezone
from typing import Optional

from frioger_bot.schemas.session_schema import Rating, Session, Stage, Ticket


class InMemoryStore:
    """Dict-backed SessionStore, TicketSink and RatingSink."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._tickets: dict[int, Ticket] = {}
        self._ratings: dict[int, Rating] = {}
        self._ticket_ids = itertools.count(1)
        self._rating_ids = itertools.count(1)

    async def get(self, user_id: str) -> Optional[Session]:
        return self._sessions.get(user_id)

    async def upsert(self, user_id: str, stage: Stage, display_name: str) -> None:
        self._sessions[user_id] = Session(
            user_id=user_id,
            stage=stage,
            display_name=display_name,
            last_updated=datetime.now(timezone.utc),
        )

    async def delete(self, user_id: str) -> None:
        self._sessions.pop(user_id, None)

    async def append_ticket(self, ticket: Ticket) -> int:
        ticket_id = next(self._ticket_ids)
        self._tickets[ticket_id] = ticket
        return ticket_id

    async def append_rating(self, rating: Rating) -> int:
        rating_id = next(self._rating_ids)
        self._ratings[rating_id] = rating
        return rating_id

    @property
    def tickets(self) -> list[Ticket]:
        return list(self._tickets.values())

    @property
    def ratings(self) -> list[Rating]:
        return list(self._ratings.values())

    def close(self) -> None:
        """Nothing to release; present for parity with SQLiteStore."""

    def reset(self) -> None:
        """Drop every session, ticket and rating; ids keep counting up."""
        self._sessions.clear()
        self._tickets.clear()
        self._ratings.clear()
