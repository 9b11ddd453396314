"""Per-customer log correlation.

The engine calls set_user_id with the sender id before handling each
message. Because the id lives in a ContextVar, concurrent handlers for
different customers each log their own sender. Records emitted outside
any message (startup, catalog load) carry ``NO_USER``.
"""

import logging
from contextvars import ContextVar

NO_USER = "NO_USER"

_user_id: ContextVar[str] = ContextVar("user_id", default=NO_USER)


def set_user_id(user_id: str) -> None:
    _user_id.set(user_id)


def get_user_id() -> str:
    return _user_id.get()


class UserIdFilter(logging.Filter):
    """Stamps ``record.user_id`` so formats can use ``%(user_id)s``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.user_id = _user_id.get()  # type: ignore[attr-defined]
        return True


def get_user_logger(name: str) -> logging.Logger:
    """Module logger with a single UserIdFilter attached."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, UserIdFilter) for f in logger.filters):
        logger.addFilter(UserIdFilter())
    return logger
