"""Plain-text rendering of runs, steps, and catalog entries."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Iterable, List, Sequence

from .catalog.models import WorkflowDefinition
from .constants import NO_NOTES_TEXT
from .contracts import ActiveRun, RunRecord

BULLET = "•"


def percent_complete(completed: int, total: int) -> int:
    """Round ``completed / total`` to the nearest whole percent, halves up."""
    if total <= 0:
        return 0
    return math.floor(completed / total * 100 + 0.5)


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def _bullets(items: Iterable[str]) -> str:
    return "\n".join(f"{BULLET} {item}" for item in items)


def render_step(run: ActiveRun) -> str:
    """Render the current step of ``run`` with its optional timing and outputs."""
    step = run.current_step
    lines = [
        f"Step {run.current_step_index + 1}/{run.total_steps}: {step.title}",
        step.description,
        f"Owner: {step.owner}",
    ]
    if step.duration:
        lines.append(f"Timing: {step.duration}")
    if step.outputs:
        lines.append(f"Expected outputs: {', '.join(step.outputs)}")
    return "\n".join(lines)


def render_status(run: ActiveRun) -> str:
    total = run.total_steps
    completed = len(run.completed_step_ids)
    focus = run.workflow.steps[min(run.current_step_index, total - 1)]
    if run.notes:
        notes_line = f"Notes captured: {f' {BULLET} '.join(run.notes[-3:])}"
    else:
        notes_line = "Notes captured: none yet."
    return "\n".join(
        [
            f"{run.workflow.name} is {percent_complete(completed, total)}% complete "
            f"({completed}/{total} steps).",
            f"Current focus: {focus.title} ({focus.owner})",
            focus.description,
            notes_line,
        ]
    )


def render_run_summary(record: RunRecord) -> str:
    """Render a closed run or an export snapshot."""
    workflow = record.workflow
    total = len(workflow.steps)
    completed = len(record.completed_step_ids)
    titles = [
        step.title
        for step in (workflow.step_by_id(step_id) for step_id in record.completed_step_ids)
        if step is not None
    ]

    if record.status == "completed":
        header = f'Workflow "{workflow.name}" finished successfully.'
    elif record.status == "cancelled":
        header = f'Workflow "{workflow.name}" was cancelled.'
    else:
        header = f'Workflow "{workflow.name}" is still in progress.'
    closed_label = "Snapshot" if record.status == "in-progress" else "Closed"

    lines = [
        header,
        f"Started: {format_timestamp(record.started_at)}",
        f"{closed_label}: {format_timestamp(record.completed_at)}",
        f"Progress: {completed}/{total} steps ({percent_complete(completed, total)}%)",
        f"Steps completed: {' → '.join(titles) if titles else 'none'}",
    ]
    if record.notes:
        lines.append(f"Captured notes:\n{_bullets(record.notes)}")
    else:
        lines.append(NO_NOTES_TEXT)
    return "\n".join(lines)


def render_workflow_headline(workflow: WorkflowDefinition) -> str:
    headline = f"{workflow.name} ({len(workflow.steps)} steps)"
    if workflow.tags:
        headline += f" [{', '.join(workflow.tags)}]"
    return headline


def render_workflow_steps(workflow: WorkflowDefinition) -> str:
    blocks: List[str] = []
    for position, step in enumerate(workflow.steps, start=1):
        owner = f"{step.owner}, {step.duration}" if step.duration else step.owner
        blocks.append(f"{position}. {step.title} ({owner})\n   {step.description}")
    return "\n".join(blocks)


def render_workflow_details(workflow: WorkflowDefinition) -> str:
    """Headline, summary, ordered steps, checklist, and resources."""
    sections = [
        render_workflow_headline(workflow),
        f"Summary: {workflow.summary}",
        f"Steps:\n{render_workflow_steps(workflow)}",
    ]
    if workflow.checklist:
        sections.append(f"Readiness checklist:\n{_bullets(workflow.checklist)}")
    if workflow.resources:
        sections.append(f"Resources:\n{_bullets(workflow.resources)}")
    return "\n\n".join(sections)


def render_catalog(workflows: Sequence[WorkflowDefinition]) -> str:
    entries = []
    for workflow in workflows:
        entry = f"{BULLET} {workflow.name} — {workflow.summary}"
        if workflow.metrics:
            entry += f"\n  Success metrics: {'; '.join(workflow.metrics)}"
        entries.append(entry)
    return "\n\n".join(entries)


def render_history(records: Sequence[RunRecord]) -> str:
    """Compact listing of recently closed runs, most recent first."""
    if not records:
        return "Summaries of completed or cancelled workflows will show up here."
    entries = []
    for record in records:
        entry = (
            f"{BULLET} {record.workflow.name} [{record.status}] "
            f"{format_timestamp(record.completed_at)}\n"
            f"  Steps done: {len(record.completed_step_ids)}/{len(record.workflow.steps)}"
        )
        if record.notes:
            entry += f"\n  Latest note: {record.notes[-1]}"
        entries.append(entry)
    return "\n".join(entries)
