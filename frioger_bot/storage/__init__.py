from frioger_bot.storage.base import RatingSink, SessionStore, StorageError, TicketSink
from frioger_bot.storage.memory import InMemoryStore
from frioger_bot.storage.sqlite import SQLiteStore, open_store

__all__ = [
    "SessionStore",
    "TicketSink",
    "RatingSink",
    "StorageError",
    "InMemoryStore",
    "SQLiteStore",
    "open_store",
]
