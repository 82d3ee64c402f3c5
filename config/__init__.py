# PATH: config/__init__.py
"""
Configuration loading utilities for POOLSCAN.
"""

from pathlib import Path
from typing import Any, Dict

import yaml


CONFIG_DIR = Path(__file__).parent
DEFAULT_CONFIG_FILE = CONFIG_DIR / "engines.yaml"


def load_yaml(filename: str | Path) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Absolute path, or name of a file in the config directory

    Returns:
        Parsed YAML as dict
    """
    filepath = Path(filename)
    if not filepath.is_absolute() and not filepath.exists():
        filepath = CONFIG_DIR / filepath
    if not filepath.exists():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    with open(filepath, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


from config.run_config import (  # noqa: E402
    OrchestratorConfig,
    ReportConfig,
    RunConfig,
    ScoringConfig,
    load_run_config,
)

__all__ = [
    "CONFIG_DIR",
    "DEFAULT_CONFIG_FILE",
    "load_yaml",
    "OrchestratorConfig",
    "ReportConfig",
    "RunConfig",
    "ScoringConfig",
    "load_run_config",
]
