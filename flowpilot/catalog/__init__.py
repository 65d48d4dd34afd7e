"""Workflow catalog: static playbook definitions consumed by the copilot."""

from __future__ import annotations

import os
from typing import Optional

from ..config import FlowpilotConfig, load_config
from .builtin import BUILTIN_WORKFLOWS
from .loader import load_catalog
from .matching import MATCH_RULES, MatchRule, WorkflowCatalog
from .models import StepDefinition, WorkflowDefinition

_catalog_instance: WorkflowCatalog | None = None


def get_catalog(
    path: Optional[str] = None, config: Optional[FlowpilotConfig] = None
) -> WorkflowCatalog:
    """Factory function to obtain the workflow catalog.

    The source is selected from ``path``, the ``FLOWPILOT_CATALOG``
    environment variable, or ``catalog.path`` in the loaded configuration.
    When none is set the built-in playbooks are used. The result is cached
    until an explicit ``path`` or ``config`` is passed.
    """

    global _catalog_instance
    if _catalog_instance is not None and path is None and config is None:
        return _catalog_instance

    config = config or load_config()
    path = path or os.getenv("FLOWPILOT_CATALOG") or config.catalog.path

    if path:
        _catalog_instance = load_catalog(path)
    else:
        _catalog_instance = WorkflowCatalog(BUILTIN_WORKFLOWS)
    return _catalog_instance


def reset_catalog() -> None:
    """Drop the cached catalog so the next lookup reloads it."""
    global _catalog_instance
    _catalog_instance = None


__all__ = [
    "BUILTIN_WORKFLOWS",
    "MATCH_RULES",
    "MatchRule",
    "StepDefinition",
    "WorkflowCatalog",
    "WorkflowDefinition",
    "get_catalog",
    "load_catalog",
    "reset_catalog",
]
