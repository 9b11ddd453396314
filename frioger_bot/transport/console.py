"""Terminal transport for the offline console demo."""

from pathlib import Path

from frioger_bot.schemas.message_schema import MediaAttachment
from frioger_bot.transport.base import OutboundContent, TransportError

GREEN = "\033[92m"
YELLOW = "\033[93m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"


class ConsoleTransport:
    """Prints outbound messages; the specialist's inbox is shown in yellow."""

    def __init__(self, specialist_id: str) -> None:
        self._specialist_id = specialist_id

    async def send_message(self, recipient_id: str, content: OutboundContent) -> None:
        color = YELLOW if recipient_id == self._specialist_id else GREEN
        label = "Especialista" if recipient_id == self._specialist_id else "Bot"
        if isinstance(content, MediaAttachment):
            if not Path(content.path).exists():
                raise TransportError(f"Media file not found: {content.path}")
            print(f"{color}{BOLD}[{label}]{RESET} {DIM}<arquivo: {content.path}>{RESET}")
            if content.caption:
                print(f"{color}{content.caption}{RESET}")
            return
        print(f"{color}{BOLD}[{label}]{RESET} {color}{content}{RESET}")

    async def send_typing(self, recipient_id: str) -> None:
        print(f"{DIM}  ... digitando{RESET}")
