"""Command interpreter for the workflow copilot.

:func:`interpret` classifies free text into an :class:`Intent` using the
ordered keyword rules in :data:`INTENT_RULES` and applies the matching
handler to the current run. Rules intentionally overlap ("show" belongs to
details, but "show status" must still reach the status rule), so the order
of :data:`INTENT_RULES` is significant: the first rule whose keywords match
and whose handler produces a result wins. User mistakes never raise; they
come back as conversational replies with the run left as it was.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import cached_property
from typing import Callable, Optional, Tuple

from . import lifecycle
from .catalog import WorkflowCatalog, get_catalog
from .constants import (
    DETAILS_NOT_FOUND_MESSAGE,
    FIRST_STEP_MESSAGE,
    HELP_MESSAGE,
    IDLE_MESSAGE,
    NO_ACTIVE_RUN_MESSAGE,
    NOTE_SYNTAX_MESSAGE,
    START_NOT_FOUND_MESSAGE,
)
from .contracts import ActiveRun, AssistantResult, Intent, Message, RunRecord
from .formatting import (
    render_catalog,
    render_run_summary,
    render_status,
    render_step,
    render_workflow_details,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

_NOTE_PATTERNS = (
    re.compile(r"note[:\-]?\s*(.+)$", re.IGNORECASE),
    re.compile(r"add\s+note\s+(.*)$", re.IGNORECASE),
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def extract_note(text: str) -> Optional[str]:
    """Return the note text following a ``note:``/``add note`` marker."""
    for pattern in _NOTE_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1).strip() or None
    return None


class _Turn:
    """Inputs of a single ``interpret`` call."""

    def __init__(
        self,
        text: str,
        run: Optional[ActiveRun],
        catalog: WorkflowCatalog,
        clock: Clock,
    ) -> None:
        self.text = text.strip()
        self.lower = self.text.lower()
        self.run = run
        self.catalog = catalog
        self._clock = clock

    @cached_property
    def now(self) -> datetime:
        return self._clock()

    def reply(
        self,
        intent: Intent,
        content: str,
        next_run: Optional[ActiveRun] = None,
        closed_run: Optional[RunRecord] = None,
        keep_run: bool = False,
    ) -> AssistantResult:
        return AssistantResult(
            intent=intent,
            replies=[Message.assistant(content)],
            next_run=self.run if keep_run else next_run,
            closed_run=closed_run,
        )


Handler = Callable[[_Turn], Optional[AssistantResult]]


@dataclass(frozen=True)
class IntentRule:
    """Keyword predicate plus the handler it routes to.

    ``contains`` and ``starts_with`` are substring checks and ``equals`` is an
    exact comparison. All checks run against the trimmed, lower-cased input.
    """

    intent: Intent
    handler: Handler
    contains: Tuple[str, ...] = ()
    starts_with: Tuple[str, ...] = ()
    equals: Tuple[str, ...] = ()
    requires_run: bool = False

    def matches(self, lower: str) -> bool:
        if lower in self.equals:
            return True
        if any(keyword in lower for keyword in self.contains):
            return True
        return any(lower.startswith(prefix) for prefix in self.starts_with)


def ensure_active(turn: _Turn, intent: Intent) -> Optional[AssistantResult]:
    """Return the redirect reply when no run is active, else ``None``."""
    if turn.run is None:
        return turn.reply(intent, NO_ACTIVE_RUN_MESSAGE)
    return None


# ----------------------------------------------------------------------
# Handlers


def _handle_empty(turn: _Turn) -> AssistantResult:
    return turn.reply(Intent.EMPTY, IDLE_MESSAGE, keep_run=True)


def _handle_help(turn: _Turn) -> AssistantResult:
    return turn.reply(Intent.HELP, HELP_MESSAGE, keep_run=True)


def _handle_list(turn: _Turn) -> AssistantResult:
    return turn.reply(
        Intent.LIST,
        f"Here are the available playbooks:\n\n{render_catalog(turn.catalog.list_all())}",
        keep_run=True,
    )


def _handle_details(turn: _Turn) -> Optional[AssistantResult]:
    target = turn.catalog.find(turn.text)
    if target is not None:
        return turn.reply(Intent.DETAILS, render_workflow_details(target), keep_run=True)
    if "workflow" in turn.lower:
        return turn.reply(Intent.DETAILS, DETAILS_NOT_FOUND_MESSAGE, keep_run=True)
    # "show status" and friends belong to later rules
    return None


def _handle_start(turn: _Turn) -> AssistantResult:
    target = turn.catalog.find(turn.text)
    if target is None:
        return turn.reply(Intent.START, START_NOT_FOUND_MESSAGE, keep_run=True)

    closed, run = lifecycle.supersede(turn.run, target, turn.now)
    return turn.reply(
        Intent.START,
        f'Starting "{target.name}". Here\'s the first checkpoint:\n\n'
        f"{render_step(run)}\n\n"
        'Need context on later steps? Ask for "Show status" at any time.',
        next_run=run,
        closed_run=closed,
    )


def _handle_advance(turn: _Turn) -> AssistantResult:
    run = turn.run
    step = run.current_step
    outcome = lifecycle.complete_current_step(run, turn.now)
    if outcome.already_completed:
        return turn.reply(
            Intent.ADVANCE,
            f'Step "{step.title}" is already marked complete. '
            'Ask for "Show status" to review what\'s next.',
            keep_run=True,
        )
    if outcome.record is not None:
        return turn.reply(
            Intent.ADVANCE,
            f'Nice work! "{run.workflow.name}" is fully complete.\n\n'
            f"{render_run_summary(outcome.record)}",
            closed_run=outcome.record,
        )
    return turn.reply(
        Intent.ADVANCE,
        f'Marked "{step.title}" complete. Up next:\n\n{render_step(outcome.run)}',
        next_run=outcome.run,
    )


def _handle_status(turn: _Turn) -> AssistantResult:
    return turn.reply(Intent.STATUS, render_status(turn.run), keep_run=True)


def _handle_note(turn: _Turn) -> AssistantResult:
    note = extract_note(turn.text)
    if not note:
        return turn.reply(Intent.NOTE, NOTE_SYNTAX_MESSAGE, keep_run=True)
    run = lifecycle.add_note(turn.run, note)
    return turn.reply(
        Intent.NOTE,
        f'Captured note on "{run.workflow.name}": {note}\n'
        'Ask for "Show status" to view the latest context.',
        next_run=run,
    )


def _handle_cancel(turn: _Turn) -> AssistantResult:
    record = lifecycle.cancel_run(turn.run, turn.now)
    return turn.reply(
        Intent.CANCEL,
        f'Stopped "{record.workflow.name}".\n\n{render_run_summary(record)}',
        closed_run=record,
    )


def _handle_export(turn: _Turn) -> AssistantResult:
    record = lifecycle.snapshot(turn.run, turn.now)
    return turn.reply(Intent.EXPORT, render_run_summary(record), keep_run=True)


def _handle_back(turn: _Turn) -> AssistantResult:
    previous = lifecycle.go_back(turn.run)
    if previous is None:
        return turn.reply(Intent.BACK, FIRST_STEP_MESSAGE, keep_run=True)
    return turn.reply(
        Intent.BACK, f"Revisiting:\n\n{render_step(previous)}", next_run=previous
    )


def _handle_fallback(turn: _Turn) -> AssistantResult:
    return turn.reply(
        Intent.FALLBACK,
        f'I\'m not sure how to help with "{turn.text}". Try commands like '
        '"List workflows", "Start Incident Response", "Complete current step", '
        'or "Add note: waiting on finance".',
        keep_run=True,
    )


INTENT_RULES: Tuple[IntentRule, ...] = (
    IntentRule(Intent.EMPTY, _handle_empty, equals=("",)),
    IntentRule(
        Intent.HELP, _handle_help, contains=("help",), equals=("hi", "hello", "hey")
    ),
    IntentRule(
        Intent.LIST,
        _handle_list,
        contains=("list workflows", "show workflows", "catalog"),
        equals=("list",),
    ),
    IntentRule(
        Intent.DETAILS, _handle_details, contains=("details", "show", "tell me about")
    ),
    IntentRule(
        Intent.START,
        _handle_start,
        contains=("start ", "launch"),
        starts_with=("run ", "kick"),
    ),
    IntentRule(
        Intent.ADVANCE,
        _handle_advance,
        contains=("complete", "advance", "done"),
        starts_with=("next",),
        requires_run=True,
    ),
    IntentRule(
        Intent.STATUS,
        _handle_status,
        contains=("status", "progress", "where are we", "how far"),
        requires_run=True,
    ),
    IntentRule(Intent.NOTE, _handle_note, contains=("note",), requires_run=True),
    IntentRule(
        Intent.CANCEL,
        _handle_cancel,
        contains=("cancel", "stop run", "abort"),
        requires_run=True,
    ),
    IntentRule(
        Intent.EXPORT, _handle_export, contains=("export", "summary"), requires_run=True
    ),
    IntentRule(
        Intent.BACK,
        _handle_back,
        contains=("previous step", "go back"),
        requires_run=True,
    ),
)


def classify(text: str) -> Intent:
    """Return the first rule whose keywords match ``text``.

    This ignores fall-through, so unmatched "show ..." phrases still report
    :attr:`Intent.DETAILS` here even though :func:`interpret` may route them
    further down.
    """
    lower = text.strip().lower()
    for rule in INTENT_RULES:
        if rule.matches(lower):
            return rule.intent
    return Intent.FALLBACK


def interpret(
    input_text: str,
    current_run: Optional[ActiveRun],
    *,
    catalog: Optional[WorkflowCatalog] = None,
    clock: Optional[Clock] = None,
) -> AssistantResult:
    """Turn one user command into replies and the next run state.

    Args:
        input_text: Raw user text; surrounding whitespace is ignored.
        current_run: The caller's active run, if any. It is never modified.
        catalog: Workflow catalog to resolve names against. Defaults to
            :func:`get_catalog`.
        clock: Returns the current UTC time. Read at most once per call.

    Returns:
        The replies, the run the caller should hold next, and the record of
        any run closed by this command.
    """
    turn = _Turn(input_text, current_run, catalog or get_catalog(), clock or utc_now)

    for rule in INTENT_RULES:
        if not rule.matches(turn.lower):
            continue
        if rule.requires_run:
            redirect = ensure_active(turn, rule.intent)
            if redirect is not None:
                logger.debug(f"Rejected {rule.intent.value} command without active run")
                return redirect
        result = rule.handler(turn)
        if result is not None:
            logger.debug(f"Handled input as {rule.intent.value}")
            return result

    logger.debug("No intent matched input; replying with fallback")
    return _handle_fallback(turn)
