"""Command interpreter tests."""

import pytest

from flowpilot import lifecycle
from flowpilot.catalog import BUILTIN_WORKFLOWS
from flowpilot.constants import (
    CANCELLED_NOTE,
    DETAILS_NOT_FOUND_MESSAGE,
    FIRST_STEP_MESSAGE,
    HELP_MESSAGE,
    IDLE_MESSAGE,
    NO_ACTIVE_RUN_MESSAGE,
    NOTE_SYNTAX_MESSAGE,
    START_NOT_FOUND_MESSAGE,
    SUPERSEDED_NOTE,
)
from flowpilot.contracts import ActiveRun, Intent
from flowpilot.interpreter import INTENT_RULES, classify, extract_note, interpret
from flowpilot.quick_actions import derive_quick_actions


@pytest.fixture
def say(catalog, clock):
    def _say(text, run=None):
        return interpret(text, run, catalog=catalog, clock=clock)

    return _say


@pytest.fixture
def incident_run(catalog, started_at) -> ActiveRun:
    return lifecycle.start_run(catalog.get("incident-response"), started_at)


def test_rule_priority_order():
    assert [rule.intent for rule in INTENT_RULES] == [
        Intent.EMPTY,
        Intent.HELP,
        Intent.LIST,
        Intent.DETAILS,
        Intent.START,
        Intent.ADVANCE,
        Intent.STATUS,
        Intent.NOTE,
        Intent.CANCEL,
        Intent.EXPORT,
        Intent.BACK,
    ]


@pytest.mark.parametrize(
    "text, intent",
    [
        ("", Intent.EMPTY),
        ("hi", Intent.HELP),
        ("  Hello  ", Intent.HELP),
        ("Hey there", Intent.FALLBACK),
        ("I need help", Intent.HELP),
        ("this thing", Intent.FALLBACK),
        ("list", Intent.LIST),
        ("List workflows", Intent.LIST),
        ("open the catalog", Intent.LIST),
        ("Show details for Feature Launch", Intent.DETAILS),
        ("Start Incident Response", Intent.START),
        ("run onboarding", Intent.START),
        ("kickoff release", Intent.START),
        ("next", Intent.ADVANCE),
        ("mark it done", Intent.ADVANCE),
        ("how far along are we", Intent.STATUS),
        ("Add note: follow up", Intent.NOTE),
        ("abort", Intent.CANCEL),
        ("stop run", Intent.CANCEL),
        ("Export summary", Intent.EXPORT),
        ("go back", Intent.BACK),
        ("previous step please", Intent.BACK),
        ("what is the weather", Intent.FALLBACK),
    ],
)
def test_classify(text, intent):
    assert classify(text) == intent


@pytest.mark.parametrize(
    "text, expected",
    [
        ("add note: waiting on legal", "waiting on legal"),
        ("Note- vendor replied", "vendor replied"),
        ("NOTE:   spaced out  ", "spaced out"),
        ("add note", None),
        ("note", None),
    ],
)
def test_extract_note(text, expected):
    assert extract_note(text) == expected


def test_empty_input_keeps_state(say, incident_run):
    result = say("   ", incident_run)
    assert result.intent == Intent.EMPTY
    assert [m.content for m in result.replies] == [IDLE_MESSAGE]
    assert result.next_run is incident_run


def test_help_reply(say):
    result = say("hello")
    assert result.replies[0].content == HELP_MESSAGE
    assert result.replies[0].role == "assistant"


def test_list_renders_every_workflow(say):
    content = say("show workflows").replies[0].content
    assert content.startswith("Here are the available playbooks:")
    for workflow in BUILTIN_WORKFLOWS:
        assert workflow.name in content


def test_details_found(say, incident_run):
    result = say("tell me about onboarding", incident_run)
    assert result.intent == Intent.DETAILS
    content = result.replies[0].content
    assert content.startswith("Employee Onboarding (5 steps)")
    assert "Readiness checklist:" in content
    assert "Resources:" in content
    assert result.next_run is incident_run


def test_details_unknown_workflow(say):
    result = say("show details for the mystery workflow")
    assert result.intent == Intent.DETAILS
    assert result.replies[0].content == DETAILS_NOT_FOUND_MESSAGE


def test_show_without_match_falls_through(say):
    result = say("show summary")
    assert result.intent == Intent.EXPORT
    assert [m.content for m in result.replies] == [NO_ACTIVE_RUN_MESSAGE]


def test_start_incident_response(say):
    result = say("Start Incident Response")
    content = result.replies[0].content
    assert 'Starting "Incident Response"' in content
    assert "Step 1/5: Triage and declare severity" in content
    assert result.next_run.workflow.id == "incident-response"
    assert result.next_run.current_step_index == 0
    assert result.next_run.completed_step_ids == ()
    assert result.closed_run is None


def test_start_uses_clock(say, now):
    assert say("launch the release").next_run.started_at == now


def test_start_unknown_workflow(say, incident_run):
    result = say("start something else", incident_run)
    assert result.replies[0].content == START_NOT_FOUND_MESSAGE
    assert result.next_run is incident_run
    assert result.closed_run is None


def test_start_supersedes_other_workflow(say, incident_run, now):
    active = lifecycle.add_note(incident_run, "paged database team")
    result = say("Start Employee Onboarding", active)

    assert result.closed_run.workflow.id == "incident-response"
    assert result.closed_run.status == "cancelled"
    assert result.closed_run.notes == ("paged database team", SUPERSEDED_NOTE)
    assert result.closed_run.completed_at == now
    assert result.next_run.workflow.id == "employee-onboarding"
    assert result.next_run.current_step_index == 0
    assert len(result.replies) == 1


def test_restart_same_workflow_resets_without_record(say, incident_run, now):
    progressed = lifecycle.complete_current_step(incident_run, now).run
    result = say("start incident response", progressed)
    assert result.closed_run is None
    assert result.next_run.current_step_index == 0
    assert result.next_run.completed_step_ids == ()


@pytest.mark.parametrize(
    "text, intent",
    [
        ("complete", Intent.ADVANCE),
        ("show status", Intent.STATUS),
        ("add note: blocked", Intent.NOTE),
        ("cancel", Intent.CANCEL),
        ("export", Intent.EXPORT),
        ("go back", Intent.BACK),
    ],
)
def test_guarded_commands_without_run(say, text, intent):
    result = say(text)
    assert result.intent == intent
    assert len(result.replies) == 1
    assert result.replies[0].content == NO_ACTIVE_RUN_MESSAGE
    assert result.next_run is None
    assert result.closed_run is None


def test_advance_moves_to_next_step(say, incident_run):
    result = say("Complete Triage and declare severity", incident_run)
    content = result.replies[0].content
    assert content.startswith('Marked "Triage and declare severity" complete. Up next:')
    assert "Step 2/5: Contain customer impact" in content
    assert result.next_run.current_step_index == 1
    assert result.next_run.completed_step_ids == ("triage",)
    assert incident_run.current_step_index == 0


def test_completing_last_step_closes_run(mini_catalog, mini_workflow, started_at, clock):
    run = ActiveRun(
        workflow=mini_workflow,
        current_step_index=2,
        completed_step_ids=("draft", "review"),
        started_at=started_at,
    )
    result = interpret("complete", run, catalog=mini_catalog, clock=clock)

    assert result.next_run is None
    assert result.closed_run.status == "completed"
    assert len(result.closed_run.completed_step_ids) == 3
    assert result.replies[0].content.startswith('Nice work! "Mini Review" is fully complete.')


def test_completing_all_steps_in_order(say, incident_run):
    run = incident_run
    closed = []
    for _ in range(len(run.workflow.steps)):
        result = say("next", run)
        run = result.next_run
        if result.closed_run is not None:
            closed.append(result.closed_run)

    assert run is None
    assert len(closed) == 1
    assert closed[0].status == "completed"
    assert len(closed[0].completed_step_ids) == 5


def test_completing_same_step_twice_is_noop(say, incident_run):
    advanced = say("done", incident_run).next_run
    revisited = say("go back", advanced).next_run

    result = say("done", revisited)
    assert result.next_run == revisited
    assert result.replies[0].content.startswith(
        'Step "Triage and declare severity" is already marked complete.'
    )


def test_status_reply(say, incident_run):
    run = lifecycle.add_note(incident_run, "bridge opened")
    content = say("where are we?", run).replies[0].content
    assert content.startswith("Incident Response is 0% complete (0/5 steps).")
    assert "Current focus: Triage and declare severity (Incident commander)" in content
    assert content.endswith("Notes captured: bridge opened")


def test_note_capture(say, incident_run):
    result = say("add note: waiting on legal", incident_run)
    assert result.next_run.notes == incident_run.notes + ("waiting on legal",)
    assert result.replies[0].content.startswith(
        'Captured note on "Incident Response": waiting on legal'
    )


def test_note_preserves_original_casing(say, incident_run):
    result = say("Note: Call ACME Support", incident_run)
    assert result.next_run.notes == ("Call ACME Support",)


def test_note_without_text(say, incident_run):
    result = say("add note", incident_run)
    assert result.replies[0].content == NOTE_SYNTAX_MESSAGE
    assert result.next_run is incident_run


def test_cancel(say, incident_run):
    result = say("cancel this run", incident_run)
    assert result.next_run is None
    assert result.closed_run.status == "cancelled"
    assert result.closed_run.notes[-1] == CANCELLED_NOTE
    assert result.replies[0].content.startswith('Stopped "Incident Response".')


@pytest.mark.parametrize("steps_done", [0, 2])
def test_export_never_changes_run(say, incident_run, now, steps_done):
    run = incident_run
    for _ in range(steps_done):
        run = lifecycle.complete_current_step(run, now).run

    result = say("export summary", run)
    assert result.next_run == run
    assert result.closed_run is None
    assert "is still in progress." in result.replies[0].content
    assert "Snapshot: 2024-05-01 09:30 UTC" in result.replies[0].content


def test_export_reports_completed_when_all_steps_done(
    mini_catalog, mini_workflow, started_at, clock
):
    run = ActiveRun(
        workflow=mini_workflow,
        current_step_index=1,
        completed_step_ids=("draft", "review", "publish"),
        started_at=started_at,
    )
    result = interpret("summary", run, catalog=mini_catalog, clock=clock)
    assert result.replies[0].content.startswith('Workflow "Mini Review" finished successfully.')
    assert result.next_run is run


def test_go_back_at_first_step(say, incident_run):
    result = say("go back", incident_run)
    assert result.replies[0].content == FIRST_STEP_MESSAGE
    assert result.next_run.current_step_index == 0


def test_go_back_keeps_completed_steps(say, incident_run):
    advanced = say("complete", incident_run).next_run
    result = say("previous step", advanced)
    assert result.replies[0].content.startswith("Revisiting:\n\nStep 1/5")
    assert result.next_run.current_step_index == 0
    assert result.next_run.completed_step_ids == ("triage",)


def test_fallback_echoes_original_text(say, incident_run):
    result = say("  Order Pizza  ", incident_run)
    assert result.intent == Intent.FALLBACK
    assert result.replies[0].content.startswith(
        'I\'m not sure how to help with "Order Pizza".'
    )
    assert result.next_run is incident_run


@pytest.mark.parametrize(
    "workflow", BUILTIN_WORKFLOWS, ids=[wf.id for wf in BUILTIN_WORKFLOWS]
)
def test_quick_actions_route_to_expected_intents(say, workflow, started_at, now):
    run = lifecycle.start_run(workflow, started_at)
    for _ in workflow.steps:
        complete_action, status_action, note_action, export_action = derive_quick_actions(run)
        assert say(status_action, run).intent == Intent.STATUS
        assert say(note_action, run).intent == Intent.NOTE
        assert say(export_action, run).intent == Intent.EXPORT
        result = say(complete_action, run)
        assert result.intent == Intent.ADVANCE
        run = result.next_run
    assert run is None


def test_message_ids_are_unique(say):
    first = say("hello").replies[0]
    second = say("hello").replies[0]
    assert first.id != second.id


def test_greeting_words_inside_notes_are_recorded(say, incident_run):
    result = say("add note: hi from legal, hey they replied", incident_run)
    assert result.intent == Intent.NOTE
    assert result.next_run.notes == ("hi from legal, hey they replied",)


def test_greeting_prefix_does_not_block_start(say):
    result = say("hey, start incident response")
    assert result.intent == Intent.START
    assert result.next_run.workflow.id == "incident-response"
