"""Load workflow catalogs from YAML files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import yaml

from .matching import WorkflowCatalog
from .models import WorkflowDefinition

logger = logging.getLogger(__name__)


def load_catalog(path: Union[str, Path]) -> WorkflowCatalog:
    """Build a :class:`WorkflowCatalog` from a YAML document.

    The file must contain a top-level ``workflows`` list whose entries match
    :class:`WorkflowDefinition`.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the document has no workflows.
        pydantic.ValidationError: If an entry is malformed.
    """

    catalog_path = Path(path).expanduser()
    with catalog_path.open() as f:
        data = yaml.safe_load(f) or {}

    entries = data.get("workflows") if isinstance(data, dict) else None
    if not entries:
        raise ValueError(f"No workflows defined in {catalog_path}")

    workflows = [WorkflowDefinition.model_validate(entry) for entry in entries]
    logger.info(f"Loaded {len(workflows)} workflows from {catalog_path}")
    return WorkflowCatalog(workflows)
