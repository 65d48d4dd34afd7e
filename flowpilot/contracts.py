"""Core value types exchanged between the interpreter and its caller."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .catalog.models import StepDefinition, WorkflowDefinition

RunStatus = Literal["completed", "cancelled", "in-progress"]


class Intent(str, Enum):
    """Categories a user command can be classified into."""

    EMPTY = "empty"
    HELP = "help"
    LIST = "list"
    DETAILS = "details"
    START = "start"
    ADVANCE = "advance"
    STATUS = "status"
    NOTE = "note"
    CANCEL = "cancel"
    EXPORT = "export"
    BACK = "back"
    FALLBACK = "fallback"


class Message(BaseModel):
    """A single chat message."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    role: Literal["assistant", "user"]
    content: str

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role="assistant", content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role="user", content=content)


class ActiveRun(BaseModel):
    """The single in-progress execution of a workflow.

    Instances are frozen. Every transition builds a new value with
    ``model_copy`` so references held by the caller never change underneath it.
    """

    model_config = ConfigDict(frozen=True)

    workflow: WorkflowDefinition
    current_step_index: int = 0
    completed_step_ids: Tuple[str, ...] = ()
    started_at: datetime
    notes: Tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_progress(self) -> "ActiveRun":
        if not 0 <= self.current_step_index < len(self.workflow.steps):
            raise ValueError(
                f"current_step_index {self.current_step_index} is outside "
                f"the {len(self.workflow.steps)} steps of {self.workflow.id}"
            )
        if len(set(self.completed_step_ids)) != len(self.completed_step_ids):
            raise ValueError("completed_step_ids must not contain duplicates")
        return self

    @property
    def total_steps(self) -> int:
        return len(self.workflow.steps)

    @property
    def current_step(self) -> StepDefinition:
        return self.workflow.steps[self.current_step_index]

    @property
    def is_last_step(self) -> bool:
        return self.current_step_index >= self.total_steps - 1

    @property
    def current_step_completed(self) -> bool:
        return self.current_step.id in self.completed_step_ids

    @property
    def all_steps_completed(self) -> bool:
        return len(self.completed_step_ids) == self.total_steps


class RunRecord(BaseModel):
    """Frozen snapshot of a run taken when it closes or is exported."""

    model_config = ConfigDict(frozen=True)

    workflow: WorkflowDefinition
    started_at: datetime
    completed_at: datetime
    completed_step_ids: Tuple[str, ...] = ()
    notes: Tuple[str, ...] = ()
    status: RunStatus


class AssistantResult(BaseModel):
    """Outcome of interpreting one user command.

    ``closed_run`` is only set when a run was closed by this call. A
    supersession fills both ``closed_run`` and ``next_run``.
    """

    model_config = ConfigDict(frozen=True)

    intent: Intent
    replies: List[Message] = Field(default_factory=list)
    next_run: Optional[ActiveRun] = None
    closed_run: Optional[RunRecord] = None
