"""Tests for the stage transition table."""

import pytest

from frioger_bot.conversation.state_machine import (
    SESSION_START,
    TRANSITIONS,
    InvalidTransitionError,
    TransitionTrigger,
    get_valid_triggers,
    resolve_transition,
)
from frioger_bot.schemas.session_schema import Stage

ALL_STAGES = list(Stage) + [None]


class TestGlobalTransitions:
    @pytest.mark.parametrize("stage", ALL_STAGES)
    def test_menu_rendered_from_any_stage(self, stage):
        assert resolve_transition(stage, TransitionTrigger.MENU_RENDERED) == Stage.MAIN_MENU

    @pytest.mark.parametrize("stage", ALL_STAGES)
    def test_exit_from_any_stage(self, stage):
        assert resolve_transition(stage, TransitionTrigger.EXIT_REQUESTED) == Stage.RATING

    @pytest.mark.parametrize("stage", ALL_STAGES)
    def test_human_from_any_stage(self, stage):
        assert resolve_transition(stage, TransitionTrigger.HUMAN_REQUESTED) == Stage.AWAITING_HUMAN


class TestMenuTransitions:
    def test_parts_goes_to_awaiting_human(self):
        assert resolve_transition(
            Stage.MAIN_MENU, TransitionTrigger.PARTS_REQUESTED
        ) == Stage.AWAITING_HUMAN

    def test_support_goes_to_triage(self):
        assert resolve_transition(
            Stage.MAIN_MENU, TransitionTrigger.SUPPORT_REQUESTED
        ) == Stage.SUPPORT_TRIAGE

    def test_ticket_opened_goes_silent(self):
        assert resolve_transition(
            Stage.SUPPORT_TRIAGE, TransitionTrigger.TICKET_OPENED
        ) == Stage.SILENT


class TestInvalidTransitions:
    def test_ticket_from_main_menu_rejected(self):
        with pytest.raises(InvalidTransitionError):
            resolve_transition(Stage.MAIN_MENU, TransitionTrigger.TICKET_OPENED)

    def test_support_from_silent_rejected(self):
        with pytest.raises(InvalidTransitionError, match="support_requested"):
            resolve_transition(Stage.SILENT, TransitionTrigger.SUPPORT_REQUESTED)

    def test_session_started_is_not_in_table(self):
        with pytest.raises(InvalidTransitionError):
            resolve_transition(Stage.MAIN_MENU, TransitionTrigger.SESSION_STARTED)


class TestTable:
    def test_every_target_is_a_known_stage(self):
        for t in TRANSITIONS:
            assert isinstance(t.to_stage, Stage)

    def test_session_start_enters_name_capture(self):
        assert SESSION_START.to_stage == Stage.NAME_CAPTURE

    def test_valid_triggers_from_main_menu(self):
        triggers = get_valid_triggers(Stage.MAIN_MENU)
        assert TransitionTrigger.SUPPORT_REQUESTED in triggers
        assert TransitionTrigger.PARTS_REQUESTED in triggers
        assert TransitionTrigger.TICKET_OPENED not in triggers

    def test_valid_triggers_from_unknown_stage_are_global(self):
        assert set(get_valid_triggers(None)) == {
            TransitionTrigger.MENU_RENDERED,
            TransitionTrigger.EXIT_REQUESTED,
            TransitionTrigger.HUMAN_REQUESTED,
        }
