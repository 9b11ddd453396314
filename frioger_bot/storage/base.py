"""
Storage contracts for the conversation engine.

Sessions are a key-value record per user id; tickets and ratings are
append-only logs. Backends raise StorageError for any failure of the
underlying store and never swallow it.
"""

from typing import Optional, Protocol

from frioger_bot.schemas.session_schema import Rating, Session, Stage, Ticket


class StorageError(Exception):
    """Raised when the underlying store cannot complete an operation."""


class SessionStore(Protocol):
    async def get(self, user_id: str) -> Optional[Session]:
        """Return the live session for user_id, or None for a new user."""
        ...

    async def upsert(self, user_id: str, stage: Stage, display_name: str) -> None:
        """Create or overwrite the session, refreshing last_updated."""
        ...

    async def delete(self, user_id: str) -> None:
        """Remove the session. Deleting an absent session is not an error."""
        ...


class TicketSink(Protocol):
    async def append_ticket(self, ticket: Ticket) -> int:
        """Persist a ticket and return its monotonically increasing id."""
        ...


class RatingSink(Protocol):
    async def append_rating(self, rating: Rating) -> int:
        """Persist a rating and return its monotonically increasing id."""
        ...
