"""Read-only workflow catalog with substring and alias lookup.

Lookup is deliberately narrow. ``find_by_name`` checks whether the workflow
name appears in the text. ``find_by_query`` walks :data:`MATCH_RULES` in
order and, for each rule, scans workflows in catalog order; the first hit
wins. Nothing here attempts real language understanding.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

from .models import WorkflowDefinition

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[a-z0-9][a-z0-9-]*")


def _contains_phrase(text: str, phrase: str) -> bool:
    """Return ``True`` when ``phrase`` occurs in ``text`` on word boundaries."""
    pattern = rf"(?<![a-z0-9]){re.escape(phrase.lower())}(?![a-z0-9])"
    return re.search(pattern, text) is not None


def _match_id(text: str, workflow: WorkflowDefinition) -> bool:
    return _contains_phrase(text, workflow.id) or _contains_phrase(
        text, workflow.id.replace("-", " ")
    )


def _match_alias(text: str, workflow: WorkflowDefinition) -> bool:
    return any(_contains_phrase(text, alias) for alias in workflow.aliases)


def _match_tag(text: str, workflow: WorkflowDefinition) -> bool:
    tokens = set(_TOKEN_RE.findall(text))
    return any(tag.lower() in tokens for tag in workflow.tags)


@dataclass(frozen=True)
class MatchRule:
    """Named predicate applied to lower-cased free text."""

    name: str
    matches: Callable[[str, WorkflowDefinition], bool]


MATCH_RULES: Tuple[MatchRule, ...] = (
    MatchRule("id", _match_id),
    MatchRule("alias", _match_alias),
    MatchRule("tag", _match_tag),
)


class WorkflowCatalog:
    """Immutable collection of workflow definitions."""

    def __init__(self, workflows: Iterable[WorkflowDefinition]) -> None:
        self._workflows: Tuple[WorkflowDefinition, ...] = tuple(workflows)
        if not self._workflows:
            raise ValueError("a catalog needs at least one workflow")
        ids = [wf.id for wf in self._workflows]
        if len(set(ids)) != len(ids):
            raise ValueError("workflow ids must be unique within a catalog")

    def __len__(self) -> int:
        return len(self._workflows)

    def __iter__(self):
        return iter(self._workflows)

    def list_all(self) -> Tuple[WorkflowDefinition, ...]:
        return self._workflows

    def get(self, workflow_id: str) -> Optional[WorkflowDefinition]:
        return next((wf for wf in self._workflows if wf.id == workflow_id), None)

    def find_by_name(self, text: str) -> Optional[WorkflowDefinition]:
        """Return the first workflow whose name appears in ``text``."""
        lower = text.lower()
        return next(
            (wf for wf in self._workflows if wf.name.lower() in lower), None
        )

    def find_by_query(self, text: str) -> Optional[WorkflowDefinition]:
        """Fuzzy lookup for text that only hints at a workflow."""
        lower = text.strip().lower()
        if not lower:
            return None
        for rule in MATCH_RULES:
            for wf in self._workflows:
                if rule.matches(lower, wf):
                    logger.debug(f"Matched workflow {wf.id} by {rule.name} rule")
                    return wf
        return None

    def find(self, text: str) -> Optional[WorkflowDefinition]:
        """Resolve ``text`` by literal name first, then by fuzzy query."""
        return self.find_by_name(text) or self.find_by_query(text)
