"""
core - Core utilities and models for POOLSCAN.

This package contains:
- models.py: Snapshot data model (Token, Pool, Snapshot, ScoredPool)
- snapshot.py: Producer document parsing
- constants.py: Enums and constants
- exceptions.py: Typed exceptions with error codes
- logging.py: Structured JSON logging
"""

from core.constants import (
    BackendKind,
    EngineStatus,
    ErrorCode,
    FEATURE_SCHEMA_VERSION,
    FEE_BPS_DENOMINATOR,
    SCHEMA_VERSION,
    SCORE_SCALE,
)
from core.exceptions import (
    ConfigError,
    EngineError,
    MalformedSnapshot,
    PoolscanError,
    ScoringBackendLoadError,
    ScoringError,
)
from core.logging import get_logger, setup_logging
from core.models import (
    Pool,
    ScoredPool,
    SkippedPool,
    Snapshot,
    Token,
)
from core.snapshot import parse_snapshot, parse_snapshot_json

__all__ = [
    # Constants
    "BackendKind",
    "EngineStatus",
    "ErrorCode",
    "FEATURE_SCHEMA_VERSION",
    "FEE_BPS_DENOMINATOR",
    "SCHEMA_VERSION",
    "SCORE_SCALE",
    # Exceptions
    "ConfigError",
    "EngineError",
    "MalformedSnapshot",
    "PoolscanError",
    "ScoringBackendLoadError",
    "ScoringError",
    # Models
    "Pool",
    "ScoredPool",
    "SkippedPool",
    "Snapshot",
    "Token",
    # Parsing
    "parse_snapshot",
    "parse_snapshot_json",
    # Logging
    "get_logger",
    "setup_logging",
]
