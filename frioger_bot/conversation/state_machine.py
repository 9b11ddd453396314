"""
Stage transition table for the per-user conversation.

The conversation state itself is persisted in the session store; this
module only decides which stage a trigger leads to. Every stage change
the engine persists is resolved here first, so a session can never be
written with a stage the table does not know.

Usage:
    stage = resolve_transition(Stage.MAIN_MENU, TransitionTrigger.SUPPORT_REQUESTED)
    assert stage == Stage.SUPPORT_TRIAGE
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from frioger_bot.schemas.session_schema import Stage

logger = logging.getLogger(__name__)


class TransitionTrigger(str, Enum):
    """Events that cause stage transitions."""
    SESSION_STARTED = "session_started"
    MENU_RENDERED = "menu_rendered"
    EXIT_REQUESTED = "exit_requested"
    HUMAN_REQUESTED = "human_requested"
    PARTS_REQUESTED = "parts_requested"
    SUPPORT_REQUESTED = "support_requested"
    TICKET_OPENED = "ticket_opened"


@dataclass(frozen=True)
class Transition:
    """A single valid stage transition; from_stage None means any stage."""
    from_stage: Optional[Stage]
    to_stage: Stage
    trigger: TransitionTrigger


class InvalidTransitionError(Exception):
    """Raised when a trigger is not valid from the current stage."""


TRANSITIONS: list[Transition] = [
    # --- Global ---
    Transition(None, Stage.MAIN_MENU, TransitionTrigger.MENU_RENDERED),
    Transition(None, Stage.RATING, TransitionTrigger.EXIT_REQUESTED),
    Transition(None, Stage.AWAITING_HUMAN, TransitionTrigger.HUMAN_REQUESTED),

    # --- Main menu options ---
    Transition(Stage.MAIN_MENU, Stage.AWAITING_HUMAN, TransitionTrigger.PARTS_REQUESTED),
    Transition(Stage.MAIN_MENU, Stage.SUPPORT_TRIAGE, TransitionTrigger.SUPPORT_REQUESTED),

    # --- Support intake ---
    Transition(Stage.SUPPORT_TRIAGE, Stage.SILENT, TransitionTrigger.TICKET_OPENED),
]

# Entered from the "no session" pre-state only.
SESSION_START = Transition(None, Stage.NAME_CAPTURE, TransitionTrigger.SESSION_STARTED)


def resolve_transition(current: Optional[Stage], trigger: TransitionTrigger) -> Stage:
    """
    Return the stage reached from ``current`` via ``trigger``.

    ``current`` is None for a session whose stored stage is unrecognized;
    only global transitions apply to it.

    Raises:
        InvalidTransitionError: If no transition matches.
    """
    for t in TRANSITIONS:
        if t.trigger != trigger:
            continue
        if t.from_stage is None or t.from_stage == current:
            logger.debug(
                "Stage transition: %s -> %s (trigger: %s)",
                current.value if current else None, t.to_stage.value, trigger.value,
            )
            return t.to_stage

    valid = [t.value for t in get_valid_triggers(current)]
    raise InvalidTransitionError(
        f"No valid transition from '{current.value if current else None}' "
        f"with trigger '{trigger.value}'. Valid triggers: {valid}"
    )


def get_valid_triggers(current: Optional[Stage]) -> list[TransitionTrigger]:
    """Return all triggers valid from the given stage."""
    return [
        t.trigger for t in TRANSITIONS
        if t.from_stage is None or t.from_stage == current
    ]
