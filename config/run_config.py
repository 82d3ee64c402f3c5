"""
config/run_config.py - Run configuration.

Engine selection, scoring backend and presentation settings,
loaded from YAML (default: config/engines.yaml).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from config import DEFAULT_CONFIG_FILE, load_yaml
from core.constants import (
    BackendKind,
    DEFAULT_ENGINES,
    DEFAULT_MAX_WORKERS,
    DEFAULT_TOP_N,
    FEE_BPS_DENOMINATOR,
    SCORE_SCALE,
)
from core.exceptions import ConfigError


@dataclass
class ScoringConfig:
    """Scoring backend configuration."""

    backend: BackendKind = BackendKind.HEURISTIC
    model_path: Optional[str] = None

    # Heuristic scaling
    fee_denominator: int = FEE_BPS_DENOMINATOR
    score_scale: int = SCORE_SCALE

    def validate(self) -> None:
        _require_int(self.fee_denominator, "scoring.fee_denominator")
        _require_int(self.score_scale, "scoring.score_scale")
        if self.fee_denominator <= 0:
            raise ConfigError(f"scoring.fee_denominator must be positive, got {self.fee_denominator}")
        if self.score_scale <= 0:
            raise ConfigError(f"scoring.score_scale must be positive, got {self.score_scale}")
        if self.backend == BackendKind.MODEL and not self.model_path:
            raise ConfigError("scoring.backend is 'model' but no model_path is set")


@dataclass
class OrchestratorConfig:
    """Orchestrator execution settings."""
    max_workers: int = DEFAULT_MAX_WORKERS


@dataclass
class ReportConfig:
    """Presentation settings."""
    top_n: Optional[int] = DEFAULT_TOP_N


@dataclass
class RunConfig:
    """Full run configuration."""

    engines: list[str] = field(default_factory=lambda: list(DEFAULT_ENGINES))
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    orchestrator: OrchestratorConfig = field(default_factory=OrchestratorConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    def validate(self) -> None:
        if not isinstance(self.engines, list) or not all(isinstance(n, str) for n in self.engines):
            raise ConfigError(f"engines must be a list of names, got {self.engines!r}")
        self.scoring.validate()
        _require_int(self.orchestrator.max_workers, "orchestrator.max_workers")
        if self.report.top_n is not None:
            _require_int(self.report.top_n, "report.top_n")
        if self.orchestrator.max_workers < 1:
            raise ConfigError(f"orchestrator.max_workers must be >= 1, got {self.orchestrator.max_workers}")
        if self.report.top_n is not None and self.report.top_n < 0:
            raise ConfigError(f"report.top_n must be >= 0, got {self.report.top_n}")


def _require_int(value: Any, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer, got {value!r}")


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"{key} must be a mapping, got {type(section).__name__}")
    return section


def _backend_kind(value: Any) -> BackendKind:
    try:
        return BackendKind(str(value).lower())
    except ValueError:
        choices = ", ".join(k.value for k in BackendKind)
        raise ConfigError(f"unknown scoring backend {value!r} (expected one of: {choices})")


def run_config_from_dict(data: dict[str, Any]) -> RunConfig:
    """Build and validate a RunConfig from parsed YAML."""
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    scoring_data = _section(data, "scoring")
    orchestrator_data = _section(data, "orchestrator")
    report_data = _section(data, "report")

    config = RunConfig(
        engines=data.get("engines", list(DEFAULT_ENGINES)),
        scoring=ScoringConfig(
            backend=_backend_kind(scoring_data.get("backend", BackendKind.HEURISTIC.value)),
            model_path=scoring_data.get("model_path"),
            fee_denominator=scoring_data.get("fee_denominator", FEE_BPS_DENOMINATOR),
            score_scale=scoring_data.get("score_scale", SCORE_SCALE),
        ),
        orchestrator=OrchestratorConfig(
            max_workers=orchestrator_data.get("max_workers", DEFAULT_MAX_WORKERS),
        ),
        report=ReportConfig(
            top_n=report_data.get("top_n", DEFAULT_TOP_N),
        ),
    )
    config.validate()
    return config


def load_run_config(config_path: Path | None = None) -> RunConfig:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to a YAML file (default: config/engines.yaml)

    Returns:
        RunConfig; defaults when the file does not exist

    Raises:
        ConfigError: invalid YAML or invalid values
    """
    config_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_FILE
    if not config_path.exists():
        return RunConfig()

    try:
        data = load_yaml(config_path)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {config_path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"{config_path} is not valid UTF-8: {e.reason} at byte {e.start}") from e

    return run_config_from_dict(data)
