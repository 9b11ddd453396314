"""Inbound and outbound message shapes exchanged with the transport."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class MessageType(str, Enum):
    CHAT = "chat"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"
    STICKER = "sticker"
    LOCATION = "location"
    REVOKED = "revoked"
    E2E_NOTIFICATION = "e2e_notification"
    CALL_LOG = "call_log"


# Event types that carry no customer content.
SYSTEM_MESSAGE_TYPES = frozenset({
    MessageType.REVOKED,
    MessageType.E2E_NOTIFICATION,
    MessageType.CALL_LOG,
})

GROUP_SUFFIX = "@g.us"
BROADCAST_ID = "status@broadcast"


class InboundMessage(BaseModel):
    """A message event delivered by the messaging transport."""
    sender_id: str
    text: str = ""
    has_media: bool = False
    type: MessageType = MessageType.CHAT
    is_from_self: bool = False

    def is_customer_content(self) -> bool:
        """False for groups, broadcasts, our own echoes and system notices."""
        if self.is_from_self or not self.sender_id:
            return False
        if GROUP_SUFFIX in self.sender_id or self.sender_id == BROADCAST_ID:
            return False
        return self.type not in SYSTEM_MESSAGE_TYPES


class MediaAttachment(BaseModel):
    """A file to send to a recipient, with an optional caption."""
    path: str
    caption: Optional[str] = None
