"""Per-user session state and the append-only support records."""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

UNSPECIFIED_PRODUCT = "Equipamento não especificado"


class Stage(str, Enum):
    """Every node a persisted conversation can sit in."""
    NAME_CAPTURE = "NAME_CAPTURE"
    MAIN_MENU = "MAIN_MENU"
    SUPPORT_TRIAGE = "SUPPORT_TRIAGE"
    AWAITING_HUMAN = "AWAITING_HUMAN"
    RATING = "RATING"
    SILENT = "SILENT"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["Stage"]:
        """Map a stored stage string to a Stage, or None when unrecognized."""
        try:
            return cls(raw)
        except ValueError:
            logger.warning("Unrecognized stored stage: %r", raw)
            return None


class TicketStatus(str, Enum):
    OPEN = "open"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Session(BaseModel):
    """
    Durable conversation record, one per user id.

    ``stage`` is None only when the stored value could not be mapped to
    a known Stage; the engine routes such sessions through its recovery
    branch instead of dispatching on them.
    """
    user_id: str
    stage: Optional[Stage]
    display_name: str = ""
    last_updated: datetime = Field(default_factory=_utc_now)

    @property
    def has_name(self) -> bool:
        return bool(self.display_name)


class Ticket(BaseModel):
    """Technical support request opened at the end of triage."""
    user_id: str
    display_name: str
    product: str = UNSPECIFIED_PRODUCT
    report: str
    status: TicketStatus = TicketStatus.OPEN
    created_at: datetime = Field(default_factory=_utc_now)


class Rating(BaseModel):
    """Satisfaction feedback left when the customer closes the chat."""
    user_id: str
    display_name: str
    score: str
    created_at: datetime = Field(default_factory=_utc_now)
