from frioger_bot.conversation.engine import ConversationEngine
from frioger_bot.conversation.keyed_lock import KeyedLock
from frioger_bot.conversation.state_machine import (
    InvalidTransitionError,
    TransitionTrigger,
    resolve_transition,
)
from frioger_bot.conversation.triggers import GlobalCommand, GlobalCommandDetector

__all__ = [
    "ConversationEngine",
    "KeyedLock",
    "InvalidTransitionError",
    "TransitionTrigger",
    "resolve_transition",
    "GlobalCommand",
    "GlobalCommandDetector",
]
