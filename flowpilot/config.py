from __future__ import annotations

import os
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from .constants import DEFAULT_HISTORY_LIMIT


class CatalogConfig(BaseModel):
    """Where the workflow catalog comes from."""

    path: Optional[str] = None


class FlowpilotConfig(BaseModel):
    """Top-level configuration model."""

    catalog: CatalogConfig = CatalogConfig()
    history_limit: int = Field(default=DEFAULT_HISTORY_LIMIT, ge=1)
    log_level: str = "WARNING"


def load_config(path: Optional[str] = None) -> FlowpilotConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to FLOWPILOT_CONFIG env
            variable or 'flowpilot.yaml' in the current directory.
    """

    config_path = path or os.getenv("FLOWPILOT_CONFIG", "flowpilot.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = FlowpilotConfig(**data)
    else:
        config = FlowpilotConfig()

    env_catalog = os.getenv("FLOWPILOT_CATALOG")
    if env_catalog:
        config.catalog.path = env_catalog
    return config
