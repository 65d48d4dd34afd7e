"""Flowpilot: a conversational copilot for operational workflow playbooks."""

from .catalog import WorkflowCatalog, WorkflowDefinition, StepDefinition, get_catalog
from .contracts import ActiveRun, AssistantResult, Intent, Message, RunRecord
from .interpreter import INTENT_RULES, classify, interpret
from .quick_actions import derive_quick_actions
from .session import ChatSession

__version__ = "0.1.0"
__all__ = [
    "ActiveRun",
    "AssistantResult",
    "ChatSession",
    "INTENT_RULES",
    "Intent",
    "Message",
    "RunRecord",
    "StepDefinition",
    "WorkflowCatalog",
    "WorkflowDefinition",
    "classify",
    "derive_quick_actions",
    "get_catalog",
    "interpret",
]
