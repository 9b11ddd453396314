"""Shared test fixtures and helpers."""

from dataclasses import dataclass
from typing import Optional

import pytest

from frioger_bot.config import AppConfig, ChannelConfig, PacingConfig
from frioger_bot.conversation.engine import ConversationEngine
from frioger_bot.schemas.message_schema import InboundMessage, MessageType
from frioger_bot.storage.memory import InMemoryStore
from frioger_bot.tools.catalog import CatalogIndex, parse_catalog
from frioger_bot.transport.base import OutboundContent

USER_ID = "5511999990000@c.us"
OTHER_USER_ID = "5511888880000@c.us"
SPECIALIST_ID = "5511930167985@c.us"

SAMPLE_CATALOG = [
    {
        "title": "Refrigeração",
        "sub": "Geladeiras",
        "items": [
            {
                "n": "Geladeira Frost Free 480L",
                "d": "Refrigerador duplex com controle eletrônico",
                "techSpecs": ["480 litros", "Frost Free", "127V"],
            },
            {
                "n": "Geladeira Compacta 120L",
                "d": "Frigobar para escritórios",
            },
        ],
    },
    {
        "title": "Climatização",
        "sub": "Splits",
        "items": [
            {
                "n": "Split Midea 12.000 BTUs",
                "d": "Ar condicionado inverter com Wi-Fi",
                "techSpecs": ["Inverter", "Gás R-32"],
            },
        ],
    },
]


@dataclass
class SentMessage:
    recipient_id: str
    content: OutboundContent


class RecordingTransport:
    """Transport double that records every outbound call."""

    def __init__(self) -> None:
        self.sent: list[SentMessage] = []
        self.typing: list[str] = []

    async def send_message(self, recipient_id: str, content: OutboundContent) -> None:
        self.sent.append(SentMessage(recipient_id, content))

    async def send_typing(self, recipient_id: str) -> None:
        self.typing.append(recipient_id)

    def to(self, recipient_id: str) -> list[OutboundContent]:
        return [m.content for m in self.sent if m.recipient_id == recipient_id]

    def last_to(self, recipient_id: str) -> OutboundContent:
        return self.to(recipient_id)[-1]

    def clear(self) -> None:
        self.sent.clear()
        self.typing.clear()


def make_message(
    text: str,
    sender_id: str = USER_ID,
    has_media: bool = False,
    message_type: MessageType = MessageType.CHAT,
    is_from_self: bool = False,
) -> InboundMessage:
    """Helper to create an InboundMessage."""
    return InboundMessage(
        sender_id=sender_id,
        text=text,
        has_media=has_media,
        type=message_type,
        is_from_self=is_from_self,
    )


def make_config(pdf_path: Optional[str] = None) -> AppConfig:
    """AppConfig with no pacing delays and a fixed specialist."""
    return AppConfig(
        channel=ChannelConfig(
            specialist_id=SPECIALIST_ID,
            contact_link_base="https://wa.me/",
            catalog_pdf_path=pdf_path or "/nonexistent/catalog.pdf",
            catalog_json_path="/nonexistent/catalog.json",
        ),
        pacing=PacingConfig(
            welcome_delay_sec=0.0,
            reply_delay_sec=0.0,
            catalog_delay_sec=0.0,
            triage_delay_sec=0.0,
        ),
    )


async def converse(engine: ConversationEngine, *texts: str, sender_id: str = USER_ID) -> None:
    """Send several plain text messages from one customer, in order."""
    for text in texts:
        await engine.handle_message(make_message(text, sender_id=sender_id))


@pytest.fixture
def catalog() -> CatalogIndex:
    return parse_catalog(SAMPLE_CATALOG)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def config() -> AppConfig:
    return make_config()


@pytest.fixture
def engine(transport, catalog, store, config) -> ConversationEngine:
    return ConversationEngine(
        transport=transport,
        catalog=catalog,
        sessions=store,
        tickets=store,
        ratings=store,
        config=config,
    )
