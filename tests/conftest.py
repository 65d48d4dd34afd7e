"""Shared fixtures for flowpilot tests."""

from datetime import datetime, timezone

import pytest

import flowpilot.catalog as catalog_module
from flowpilot.catalog import (
    BUILTIN_WORKFLOWS,
    StepDefinition,
    WorkflowCatalog,
    WorkflowDefinition,
)

T0 = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
T1 = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path, monkeypatch):
    monkeypatch.delenv("FLOWPILOT_CONFIG", raising=False)
    monkeypatch.delenv("FLOWPILOT_CATALOG", raising=False)
    monkeypatch.chdir(tmp_path)
    catalog_module.reset_catalog()
    yield
    catalog_module.reset_catalog()


@pytest.fixture
def clock():
    return lambda: T1


@pytest.fixture
def catalog() -> WorkflowCatalog:
    return WorkflowCatalog(BUILTIN_WORKFLOWS)


@pytest.fixture
def mini_workflow() -> WorkflowDefinition:
    return WorkflowDefinition(
        id="mini-review",
        name="Mini Review",
        summary="Three step review used in tests.",
        metrics=("Reviewed on time",),
        tags=("qa",),
        checklist=("Draft exists",),
        resources=("Review guide",),
        steps=(
            StepDefinition(
                id="draft",
                title="Draft plan",
                description="Write the first version.",
                owner="Author",
                duration="1 day",
                outputs=("Draft document",),
            ),
            StepDefinition(
                id="review",
                title="Review plan",
                description="Collect feedback.",
                owner="Reviewer",
            ),
            StepDefinition(
                id="publish",
                title="Publish plan",
                description="Share the final version.",
                owner="Author",
            ),
        ),
    )


@pytest.fixture
def mini_catalog(mini_workflow) -> WorkflowCatalog:
    return WorkflowCatalog([mini_workflow])


@pytest.fixture
def started_at() -> datetime:
    return T0


@pytest.fixture
def now() -> datetime:
    return T1
