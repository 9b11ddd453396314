"""
Conversation engine for the per-customer chat state machine.

Consumes one inbound message at a time per customer, checks the global
keyword commands, dispatches on the persisted stage and performs the
resulting sends and store mutations in order.

Usage:
    engine = ConversationEngine(transport, catalog, store, store, store, config)
    await engine.handle_message(InboundMessage(sender_id="5511...@c.us", text="Olá"))
"""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Optional

from frioger_bot.config import AppConfig
from frioger_bot.conversation.keyed_lock import KeyedLock
from frioger_bot.conversation.state_machine import (
    SESSION_START,
    TransitionTrigger,
    resolve_transition,
)
from frioger_bot.conversation.triggers import (
    SILENT_REACTIVATION_TRIGGERS,
    WARM_RATING_TRIGGERS,
    GlobalCommand,
    GlobalCommandDetector,
)
from frioger_bot.logging_context import get_user_logger, set_user_id
from frioger_bot.prompts import messages
from frioger_bot.schemas.message_schema import InboundMessage, MediaAttachment
from frioger_bot.schemas.session_schema import (
    UNSPECIFIED_PRODUCT,
    Rating,
    Session,
    Stage,
    Ticket,
)
from frioger_bot.storage.base import RatingSink, SessionStore, TicketSink
from frioger_bot.tools.catalog import CatalogIndex
from frioger_bot.transport.base import MessagingTransport, OutboundContent, TransportError
from frioger_bot.utils import contact_link, normalize_text

logger = get_user_logger(__name__)

MIN_NAME_LENGTH = 2


@dataclass(frozen=True)
class Turn:
    """One inbound message as seen by a stage handler."""
    session: Session
    message: InboundMessage
    text: str
    normalized: str

    @property
    def user_id(self) -> str:
        return self.session.user_id


class ConversationEngine:
    """
    Drives every customer's conversation through its stages.

    The catalog and stores are injected; the engine keeps no
    conversation state of its own beyond the per-customer locks.
    """

    def __init__(
        self,
        transport: MessagingTransport,
        catalog: CatalogIndex,
        sessions: SessionStore,
        tickets: TicketSink,
        ratings: RatingSink,
        config: AppConfig,
        detector: Optional[GlobalCommandDetector] = None,
    ) -> None:
        self._transport = transport
        self._catalog = catalog
        self._sessions = sessions
        self._tickets = tickets
        self._ratings = ratings
        self._config = config
        self._detector = detector or GlobalCommandDetector()
        self._locks = KeyedLock()
        self._stage_handlers: dict[Stage, Callable[[Turn], Awaitable[None]]] = {
            Stage.NAME_CAPTURE: self._handle_name_capture,
            Stage.MAIN_MENU: self._handle_main_menu,
            Stage.SUPPORT_TRIAGE: self._handle_support_triage,
            Stage.AWAITING_HUMAN: self._handle_awaiting_human,
            Stage.SILENT: self._handle_silent,
            Stage.RATING: self._handle_rating,
        }

    async def handle_message(self, message: InboundMessage) -> None:
        """Process one inbound message. Never raises."""
        if not message.is_customer_content():
            return
        text = message.text.strip()
        if not text:
            return

        set_user_id(message.sender_id)
        try:
            async with self._locks.hold(message.sender_id):
                await self._process(message, text)
        except Exception:
            logger.exception("Failed to process message from %s", message.sender_id)

    async def _process(self, message: InboundMessage, text: str) -> None:
        normalized = normalize_text(text)
        session = await self._sessions.get(message.sender_id)

        if session is None:
            await self._start_session(message.sender_id)
            return

        turn = Turn(session=session, message=message, text=text, normalized=normalized)

        command = self._detector.detect(normalized, session.has_name)
        if command == GlobalCommand.EXIT:
            await self._handle_exit(turn)
            return
        if command == GlobalCommand.HUMAN_HANDOFF:
            await self._handle_human_handoff(turn, messages.HANDOFF_REASON_MENU)
            return
        if command == GlobalCommand.MENU_RESET:
            await self._send_main_menu(session, session.display_name)
            return

        handler = self._stage_handlers.get(session.stage) if session.stage else None
        if handler is None:
            await self._recover_unknown_stage(session)
            return
        await handler(turn)

    # ------------------------------------------------------------------ #
    # Shared steps
    # ------------------------------------------------------------------ #

    async def _send(self, recipient_id: str, content: OutboundContent) -> None:
        await self._transport.send_message(recipient_id, content)

    async def _typing_pause(self, user_id: str, delay: float) -> None:
        await self._transport.send_typing(user_id)
        if delay > 0:
            await asyncio.sleep(delay)

    async def _transition(
        self, session: Session, trigger: TransitionTrigger, display_name: Optional[str] = None
    ) -> Stage:
        stage = resolve_transition(session.stage, trigger)
        name = session.display_name if display_name is None else display_name
        await self._sessions.upsert(session.user_id, stage, name)
        return stage

    async def _send_main_menu(self, session: Session, display_name: str) -> None:
        """Render the menu and move the session to MAIN_MENU under display_name."""
        await self._send(session.user_id, messages.render_main_menu(display_name))
        await self._transition(session, TransitionTrigger.MENU_RENDERED, display_name)

    def _link(self, user_id: str) -> str:
        return contact_link(user_id, self._config.channel.contact_link_base)

    # ------------------------------------------------------------------ #
    # Session start and global commands
    # ------------------------------------------------------------------ #

    async def _start_session(self, user_id: str) -> None:
        logger.info("Starting new session for %s", user_id)
        await self._typing_pause(user_id, self._config.pacing.welcome_delay_sec)
        await self._send(user_id, messages.welcome_message(self._config.business))
        await self._sessions.upsert(user_id, SESSION_START.to_stage, "")

    async def _handle_exit(self, turn: Turn) -> None:
        session = turn.session
        if session.has_name:
            await self._transition(session, TransitionTrigger.EXIT_REQUESTED)
            await self._send(turn.user_id, messages.rating_prompt(session.display_name))
            return
        await self._send(turn.user_id, messages.GOODBYE_ANONYMOUS)
        await self._sessions.delete(turn.user_id)
        logger.info("Session closed before name capture for %s", turn.user_id)

    async def _handle_human_handoff(self, turn: Turn, reason: str) -> None:
        session = turn.session
        await self._send(turn.user_id, messages.HUMAN_HANDOFF_NOTICE)
        await self._transition(session, TransitionTrigger.HUMAN_REQUESTED)
        await self._send(
            self._config.channel.specialist_id,
            messages.handoff_alert(session.display_name, reason, self._link(turn.user_id)),
        )
        logger.info("Customer %s handed off to specialist (%s)", turn.user_id, reason)

    # ------------------------------------------------------------------ #
    # Stage handlers
    # ------------------------------------------------------------------ #

    async def _handle_name_capture(self, turn: Turn) -> None:
        candidate = turn.text.split()[0]
        if len(candidate) < MIN_NAME_LENGTH:
            await self._send(turn.user_id, messages.NAME_INVALID)
            return
        display_name = candidate[0].upper() + candidate[1:].lower()
        await self._typing_pause(turn.user_id, self._config.pacing.reply_delay_sec)
        await self._send_main_menu(turn.session, display_name)

    async def _handle_main_menu(self, turn: Turn) -> None:
        option = turn.normalized
        if option == "1":
            await self._send_catalog(turn)
            await asyncio.sleep(self._config.pacing.catalog_delay_sec)
            await self._send_main_menu(turn.session, turn.session.display_name)
        elif option == "2":
            # Stage stays MAIN_MENU; the next free text is handled as a product search.
            await self._send(turn.user_id, messages.CATEGORY_PROMPT)
        elif option == "3":
            await self._send(turn.user_id, messages.PARTS_PROMPT)
            await self._transition(turn.session, TransitionTrigger.PARTS_REQUESTED)
        elif option in ("4", "5"):
            await self._send(turn.user_id, messages.SUPPORT_PROMPT)
            await self._transition(turn.session, TransitionTrigger.SUPPORT_REQUESTED)
        else:
            await self._answer_product_query(turn)

    async def _send_catalog(self, turn: Turn) -> None:
        await self._send(turn.user_id, messages.CATALOG_SENDING)
        pdf_path = Path(self._config.channel.catalog_pdf_path)
        try:
            if pdf_path.is_file():
                caption = messages.catalog_caption(
                    turn.session.display_name, self._config.business
                )
                await self._send(turn.user_id, MediaAttachment(path=str(pdf_path), caption=caption))
            else:
                logger.error("Catalog PDF missing at %s", pdf_path)
                await self._send(turn.user_id, messages.CATALOG_UNAVAILABLE)
        except (TransportError, OSError):
            logger.exception("Failed to send catalog PDF to %s", turn.user_id)

    async def _answer_product_query(self, turn: Turn) -> None:
        match = self._catalog.find_product(turn.text)
        if match is None:
            await self._send(turn.user_id, messages.OPTION_NOT_RECOGNIZED)
            return
        await self._typing_pause(turn.user_id, self._config.pacing.reply_delay_sec)
        await self._send(turn.user_id, messages.product_card(match))

    async def _handle_support_triage(self, turn: Turn) -> None:
        session = turn.session
        match = self._catalog.find_product(turn.text)
        product = match.name if match else UNSPECIFIED_PRODUCT

        await self._typing_pause(turn.user_id, self._config.pacing.triage_delay_sec)
        await self._send(turn.user_id, messages.ticket_acknowledgement(session.display_name))
        ticket_id = await self._tickets.append_ticket(Ticket(
            user_id=turn.user_id,
            display_name=session.display_name,
            product=product,
            report=turn.text,
        ))
        await self._send(
            self._config.channel.specialist_id,
            messages.ticket_alert(session.display_name, product, turn.text, self._link(turn.user_id)),
        )
        await self._transition(session, TransitionTrigger.TICKET_OPENED)
        logger.info("Ticket %d opened for %s (product: %s)", ticket_id, turn.user_id, product)

    async def _handle_awaiting_human(self, turn: Turn) -> None:
        # Relay only; the stage changes when a global command fires.
        await self._send(
            self._config.channel.specialist_id,
            messages.relay_message(
                turn.session.display_name,
                turn.text,
                turn.message.has_media,
                self._link(turn.user_id),
            ),
        )

    async def _handle_silent(self, turn: Turn) -> None:
        if not SILENT_REACTIVATION_TRIGGERS.matches(turn.normalized):
            return
        logger.info("Reactivating bot for %s at the customer's request", turn.user_id)
        await self._send_main_menu(turn.session, turn.session.display_name)

    async def _handle_rating(self, turn: Turn) -> None:
        session = turn.session
        rating_id = await self._ratings.append_rating(Rating(
            user_id=turn.user_id,
            display_name=session.display_name,
            score=turn.text,
        ))
        warm = WARM_RATING_TRIGGERS.matches(turn.normalized)
        await self._send(turn.user_id, messages.rating_thanks(self._config.business, warm))
        await self._sessions.delete(turn.user_id)
        logger.info("Rating %d recorded; session closed for %s", rating_id, turn.user_id)

    async def _recover_unknown_stage(self, session: Session) -> None:
        logger.warning("Unknown stage for %s; re-rendering the main menu", session.user_id)
        await self._send_main_menu(session, session.display_name or messages.FALLBACK_NAME)
