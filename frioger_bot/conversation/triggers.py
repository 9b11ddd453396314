"""
Keyword trigger tables for global commands.

Each trigger set is a declarative list of (pattern, match kind) pairs
evaluated against normalized text. GlobalCommandDetector checks the
sets in a fixed priority order:

1. EXIT: any stage, with or without a captured name
2. HUMAN_HANDOFF: only once the customer has given a name
3. MENU_RESET: only once the customer has given a name

Stage-specific dispatch runs only when none of these fire.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MatchKind(str, Enum):
    EXACT = "exact"
    SUBSTRING = "substring"


class GlobalCommand(str, Enum):
    EXIT = "exit"
    HUMAN_HANDOFF = "human_handoff"
    MENU_RESET = "menu_reset"


@dataclass(frozen=True)
class Trigger:
    """A single normalized pattern and how it is compared."""
    pattern: str
    kind: MatchKind = MatchKind.SUBSTRING

    def matches(self, normalized: str) -> bool:
        if self.kind == MatchKind.EXACT:
            return normalized == self.pattern
        return self.pattern in normalized


@dataclass(frozen=True)
class TriggerSet:
    name: str
    triggers: tuple[Trigger, ...]

    def matches(self, normalized: str) -> bool:
        return any(t.matches(normalized) for t in self.triggers)

    def patterns(self) -> list[str]:
        return [t.pattern for t in self.triggers]


def _substring(*patterns: str) -> tuple[Trigger, ...]:
    return tuple(Trigger(p, MatchKind.SUBSTRING) for p in patterns)


def _exact(*patterns: str) -> tuple[Trigger, ...]:
    return tuple(Trigger(p, MatchKind.EXACT) for p in patterns)


EXIT_TRIGGERS = TriggerSet(
    "exit",
    _substring("sair", "encerrar", "fim", "cancelar", "tchau", "obrigado", "0"),
)

# Single-character codes would fire inside any free text, so they match exactly.
HUMAN_HANDOFF_TRIGGERS = TriggerSet(
    "human_handoff",
    _substring("consultor", "vendedor", "especialista", "humano", "atendente", "falar com")
    + _exact("6"),
)

MENU_RESET_TRIGGERS = TriggerSet(
    "menu_reset",
    _exact("menu", "voltar", "inicio", "oi", "ola"),
)

SILENT_REACTIVATION_TRIGGERS = TriggerSet(
    "silent_reactivation",
    _exact("#menu", "#iniciar", "#voltar", "menu principal"),
)

WARM_RATING_TRIGGERS = TriggerSet(
    "warm_rating",
    _substring("5", "excelente"),
)


class GlobalCommandDetector:
    """Resolves the highest-priority global command for a message, if any."""

    def __init__(
        self,
        exit_triggers: TriggerSet = EXIT_TRIGGERS,
        handoff_triggers: TriggerSet = HUMAN_HANDOFF_TRIGGERS,
        reset_triggers: TriggerSet = MENU_RESET_TRIGGERS,
    ) -> None:
        # (command, trigger set, requires a captured name)
        self._table: tuple[tuple[GlobalCommand, TriggerSet, bool], ...] = (
            (GlobalCommand.EXIT, exit_triggers, False),
            (GlobalCommand.HUMAN_HANDOFF, handoff_triggers, True),
            (GlobalCommand.MENU_RESET, reset_triggers, True),
        )

    def detect(self, normalized: str, has_name: bool) -> Optional[GlobalCommand]:
        for command, trigger_set, needs_name in self._table:
            if needs_name and not has_name:
                continue
            if trigger_set.matches(normalized):
                return command
        return None
