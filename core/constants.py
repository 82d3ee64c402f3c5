# PATH: core/constants.py
"""
Constants for POOLSCAN.

Contains enums, defaults, and scaling constants shared by the
snapshot model, scoring backends and engines.
"""

from enum import Enum
from typing import Final

# =============================================================================
# SCHEMA VERSIONS
# =============================================================================

# Run report schema. Bump on any field addition/removal/rename.
SCHEMA_VERSION: Final[str] = "1.0.0"

# Feature vector layout consumed by scoring backends.
FEATURE_SCHEMA_VERSION: Final[str] = "v1"

# =============================================================================
# NUMERIC LIMITS (producer wire format)
# =============================================================================

MAX_UINT32: Final[int] = 2**32 - 1
MAX_UINT64: Final[int] = 2**64 - 1

# =============================================================================
# HEURISTIC SCORING
# =============================================================================

# Fee is treated as basis points: fee / FEE_BPS_DENOMINATOR is the fraction
# taken by the pool. Override in config/engines.yaml if the producer differs.
FEE_BPS_DENOMINATOR: Final[int] = 10_000

# Divisor that brings raw reserve sums into a readable score range.
SCORE_SCALE: Final[int] = 1_000_000

# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_ENGINES: Final[tuple] = ("summary", "top_pool", "scoring")
DEFAULT_TOP_N: Final[int] = 10
DEFAULT_MAX_WORKERS: Final[int] = 1

# Characters kept when shortening an address for display (0x1234...abcd).
ADDRESS_DISPLAY_CHARS: Final[int] = 6


class ErrorCode(str, Enum):
    """Error codes carried by every POOLSCAN exception and failed outcome."""
    SNAPSHOT_MALFORMED = "SNAPSHOT_MALFORMED"
    BACKEND_LOAD_FAILED = "BACKEND_LOAD_FAILED"
    SCORING_FAILED = "SCORING_FAILED"
    FEATURE_SCHEMA_MISMATCH = "FEATURE_SCHEMA_MISMATCH"
    ENGINE_FAILED = "ENGINE_FAILED"
    CONFIG_INVALID = "CONFIG_INVALID"
    UNKNOWN = "UNKNOWN"


class EngineStatus(str, Enum):
    """Per-engine outcome status."""
    OK = "OK"
    FAILED = "FAILED"


class BackendKind(str, Enum):
    """Scoring backend variants selectable from config."""
    HEURISTIC = "heuristic"
    MODEL = "model"
