"""
Offline console demo: chat with the attendant in the terminal.

Runs the real conversation engine, catalog search and session store
behind a console transport. No messaging channel, no network calls.

Usage:
    python console_demo.py
    python console_demo.py --scenario support
    python console_demo.py --scenario handoff
"""

import argparse
import asyncio

from frioger_bot.config import AppConfig, settings
from frioger_bot.schemas.message_schema import InboundMessage
from frioger_bot.transport.console import ConsoleTransport

BLUE = "\033[94m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

CONSOLE_USER_ID = "5511900000000@c.us"


class ConsoleSession:
    """Feeds terminal input to the engine as messages from one customer."""

    # Pre-scripted scenarios for --scenario flag
    SCENARIOS: dict[str, list[str]] = {
        "catalog": [
            "Olá",
            "maria silva",
            "2",
            "geladeira",
            "tchau",
            "5",
        ],
        "support": [
            "Oi",
            "João",
            "5",
            "Meu split Midea está pingando",
            "alô?",
            "#menu",
            "sair",
            "4",
        ],
        "handoff": [
            "Bom dia",
            "Carlos",
            "quero falar com um vendedor",
            "É sobre o freezer horizontal",
            "encerrar",
            "excelente",
        ],
    }

    def __init__(self, config: AppConfig, user_id: str = CONSOLE_USER_ID) -> None:
        from main import build_engine

        self.user_id = user_id
        self.transport = ConsoleTransport(config.channel.specialist_id)
        self.engine, self.store = build_engine(config, self.transport)

    async def _say(self, text: str) -> None:
        await self.engine.handle_message(InboundMessage(sender_id=self.user_id, text=text))

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        async def _play() -> None:
            for step in steps:
                print(f"\n{BLUE}[Cliente] {RESET}{step}")
                await self._say(step)
                await self._log_stage()

        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  ATENDIMENTO - Scenario: {scenario}{RESET}")
        print(f"{BOLD}  Business: {settings.business.name}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        asyncio.run(_play())
        print(f"\n{BOLD}  Scenario '{scenario}' complete.{RESET}")

    def run(self) -> None:
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  ATENDIMENTO - Console Demo{RESET}")
        print(f"{BOLD}  Business: {settings.business.name}{RESET}")
        print(f"{BOLD}  Type 'quit' to exit{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

        async def _loop() -> None:
            while True:
                user_input = (await asyncio.to_thread(input, f"\n{BLUE}[Cliente] {RESET}")).strip()
                if user_input.lower() in ("quit", "exit", "q"):
                    print(f"\n{DIM}Session ended.{RESET}")
                    return
                await self._say(user_input)
                await self._log_stage()

        try:
            asyncio.run(_loop())
        except (KeyboardInterrupt, EOFError):
            print(f"\n{DIM}Session ended.{RESET}")

    async def _log_stage(self) -> None:
        session = await self.store.get(self.user_id)
        stage = session.stage.value if session and session.stage else "no session"
        print(f"{DIM}  >> Stage: {stage}{RESET}")

    def close(self) -> None:
        self.store.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Console demo")
    parser.add_argument("--scenario", choices=list(ConsoleSession.SCENARIOS))
    args = parser.parse_args()

    session = ConsoleSession(settings)
    try:
        if args.scenario:
            session.run_scenario(args.scenario)
        else:
            session.run()
    finally:
        session.close()
