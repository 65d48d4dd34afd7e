"""Suggested follow-up commands derived from the current run."""

from __future__ import annotations

from typing import List, Optional

from .constants import IDLE_QUICK_ACTIONS, NOTE_QUICK_ACTION
from .contracts import ActiveRun


def derive_quick_actions(run: Optional[ActiveRun]) -> List[str]:
    if run is None:
        return list(IDLE_QUICK_ACTIONS)
    return [
        f"Complete {run.current_step.title}",
        "Show status",
        NOTE_QUICK_ACTION,
        "Export summary",
    ]
