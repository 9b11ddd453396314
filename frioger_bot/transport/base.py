"""
Messaging transport contract.

The engine only needs to send text or a media file to a recipient and
to show a typing indicator. Connecting to the channel, login and
receiving events belong to the concrete transport.
"""

from typing import Protocol, Union

from frioger_bot.schemas.message_schema import MediaAttachment

OutboundContent = Union[str, MediaAttachment]


class TransportError(Exception):
    """Raised when the channel fails to deliver an outbound message."""


class MessagingTransport(Protocol):
    async def send_message(self, recipient_id: str, content: OutboundContent) -> None:
        ...

    async def send_typing(self, recipient_id: str) -> None:
        ...
