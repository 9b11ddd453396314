"""
Chat attendant entry point.

Loads the catalog, opens the session store and wires the conversation
engine to a transport. A live messaging channel adapter plugs in by
implementing MessagingTransport and calling engine.handle_message for
each inbound event; the bundled transport is the offline console.

Usage:
    Console mode:  python main.py
    Scenario:      python main.py --scenario support
"""

import argparse
import logging
from typing import Optional

from frioger_bot.config import AppConfig, settings
from frioger_bot.conversation.engine import ConversationEngine
from frioger_bot.storage import open_store
from frioger_bot.tools.catalog import load_catalog
from frioger_bot.transport.base import MessagingTransport

logger = logging.getLogger(__name__)


def build_engine(config: AppConfig, transport: MessagingTransport):
    """Create the engine and return it with the store it owns."""
    catalog = load_catalog(config.channel.catalog_json_path)
    store = open_store(config.storage)
    engine = ConversationEngine(
        transport=transport,
        catalog=catalog,
        sessions=store,
        tickets=store,
        ratings=store,
        config=config,
    )
    return engine, store


def _run_console_mode(scenario: Optional[str]) -> None:
    """Start the offline console demo (no channel connection required)."""
    from console_demo import ConsoleSession

    session = ConsoleSession(settings)
    try:
        if scenario:
            session.run_scenario(scenario)
        else:
            session.run()
    finally:
        session.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=f"{settings.bot_name} chat attendant")
    parser.add_argument("--scenario", help="Play a scripted conversation instead of reading stdin")
    args = parser.parse_args()
    logger.info("%s starting for '%s'", settings.bot_name, settings.business.name)
    _run_console_mode(args.scenario)
