"""Pydantic models describing catalog entries."""

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class StepDefinition(BaseModel):
    """One unit of work inside a workflow playbook."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    owner: str
    duration: Optional[str] = None
    outputs: Tuple[str, ...] = ()


class WorkflowDefinition(BaseModel):
    """Immutable playbook definition loaded once at startup."""

    model_config = ConfigDict(frozen=True)

    # Identity
    id: str
    name: str
    summary: str

    # Catalog metadata
    metrics: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    checklist: Tuple[str, ...] = ()
    resources: Tuple[str, ...] = ()
    aliases: Tuple[str, ...] = ()

    steps: Tuple[StepDefinition, ...]

    @field_validator("steps")
    @classmethod
    def _ensure_steps(
        cls, v: Tuple[StepDefinition, ...]
    ) -> Tuple[StepDefinition, ...]:
        if not v:
            raise ValueError("workflow must declare at least one step")
        ids = [step.id for step in v]
        if len(set(ids)) != len(ids):
            raise ValueError("step ids must be unique within a workflow")
        return v

    def step_by_id(self, step_id: str) -> Optional[StepDefinition]:
        return next((step for step in self.steps if step.id == step_id), None)
