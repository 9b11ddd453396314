from frioger_bot.transport.base import MessagingTransport, OutboundContent, TransportError
from frioger_bot.transport.console import ConsoleTransport

__all__ = ["MessagingTransport", "OutboundContent", "TransportError", "ConsoleTransport"]
