"""Run lifecycle rules.

A caller holds at most one :class:`ActiveRun`. Runs move
``NONE -> ACTIVE -> {COMPLETED, CANCELLED}``; starting a different workflow
while one is active closes the old run as cancelled and opens the new one in
the same transition. Every function here is pure and returns new values.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import NamedTuple, Optional, Tuple

from .catalog.models import WorkflowDefinition
from .constants import CANCELLED_NOTE, SUPERSEDED_NOTE
from .contracts import ActiveRun, RunRecord, RunStatus

logger = logging.getLogger(__name__)


class StepOutcome(NamedTuple):
    """Result of completing the current step."""

    run: Optional[ActiveRun]
    record: Optional[RunRecord] = None
    already_completed: bool = False


def start_run(workflow: WorkflowDefinition, now: datetime) -> ActiveRun:
    """Open a fresh run positioned at the first step."""
    logger.info(f"Started run for workflow {workflow.id}")
    return ActiveRun(workflow=workflow, started_at=now)


def close_run(
    run: ActiveRun,
    status: RunStatus,
    now: datetime,
    extra_note: Optional[str] = None,
) -> RunRecord:
    """Freeze ``run`` into a :class:`RunRecord`."""
    notes = run.notes + (extra_note,) if extra_note else run.notes
    return RunRecord(
        workflow=run.workflow,
        started_at=run.started_at,
        completed_at=now,
        completed_step_ids=run.completed_step_ids,
        notes=notes,
        status=status,
    )


def supersede(
    current: Optional[ActiveRun], workflow: WorkflowDefinition, now: datetime
) -> Tuple[Optional[RunRecord], ActiveRun]:
    """Replace ``current`` with a new run of ``workflow``.

    A run of a different workflow is closed as cancelled first. Restarting
    the workflow that is already active discards its progress without a
    record.
    """
    closed = None
    if current is not None and current.workflow.id != workflow.id:
        closed = close_run(current, "cancelled", now, SUPERSEDED_NOTE)
        logger.info(
            f"Run for workflow {current.workflow.id} superseded by {workflow.id}"
        )
    return closed, start_run(workflow, now)


def complete_current_step(run: ActiveRun, now: datetime) -> StepOutcome:
    """Mark the current step complete and advance or close the run."""
    if run.current_step_completed:
        return StepOutcome(run=run, already_completed=True)

    progressed = run.model_copy(
        update={"completed_step_ids": run.completed_step_ids + (run.current_step.id,)}
    )
    if run.is_last_step:
        record = close_run(progressed, "completed", now)
        logger.info(f"Run for workflow {run.workflow.id} completed")
        return StepOutcome(run=None, record=record)

    advanced = progressed.model_copy(
        update={"current_step_index": run.current_step_index + 1}
    )
    logger.debug(
        f"Run for workflow {run.workflow.id} advanced to step "
        f"{advanced.current_step_index + 1}/{advanced.total_steps}"
    )
    return StepOutcome(run=advanced)


def cancel_run(run: ActiveRun, now: datetime) -> RunRecord:
    logger.info(f"Run for workflow {run.workflow.id} cancelled")
    return close_run(run, "cancelled", now, CANCELLED_NOTE)


def snapshot(run: ActiveRun, now: datetime) -> RunRecord:
    """Export view of a still-open run; the run itself is left untouched."""
    status: RunStatus = "completed" if run.all_steps_completed else "in-progress"
    return close_run(run, status, now)


def go_back(run: ActiveRun) -> Optional[ActiveRun]:
    """Step back one position, or return ``None`` at the first step.

    Completed step ids are kept; revisiting a step does not reopen it.
    """
    if run.current_step_index == 0:
        return None
    return run.model_copy(update={"current_step_index": run.current_step_index - 1})


def add_note(run: ActiveRun, note: str) -> ActiveRun:
    return run.model_copy(update={"notes": run.notes + (note,)})
