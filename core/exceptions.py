# PATH: core/exceptions.py
"""
Typed exceptions for POOLSCAN.

Fatal vs recoverable:
- MalformedSnapshot: aborts the run before any engine executes
- ScoringBackendLoadError: fails the engine that needs the backend only
- ScoringError: per-pool, the pool is skipped
- EngineError: per-engine, recorded by the orchestrator
"""

from typing import Optional

from core.constants import ErrorCode


class PoolscanError(Exception):
    """Base exception for POOLSCAN."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self):
        return f"[{self.code.value}] {self.message}"

    def to_dict(self) -> dict:
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class MalformedSnapshot(PoolscanError):
    """Snapshot document does not match the producer schema."""

    def __init__(self, path: str, message: str, details: Optional[dict] = None):
        super().__init__(
            f"{path}: {message}",
            ErrorCode.SNAPSHOT_MALFORMED,
            {"path": path, **(details or {})},
        )
        self.path = path


class ScoringBackendLoadError(PoolscanError):
    """Model artifact missing or unusable."""

    def __init__(self, model_path: str, message: str, details: Optional[dict] = None):
        super().__init__(
            f"cannot load model {model_path}: {message}",
            ErrorCode.BACKEND_LOAD_FAILED,
            {"model_path": model_path, **(details or {})},
        )
        self.model_path = model_path


class ScoringError(PoolscanError):
    """A single score call failed."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SCORING_FAILED,
        details: Optional[dict] = None,
    ):
        super().__init__(message, code, details)


class EngineError(PoolscanError):
    """An engine could not produce its report."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, ErrorCode.ENGINE_FAILED, details)


class ConfigError(PoolscanError):
    """Invalid run configuration."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, ErrorCode.CONFIG_INVALID, details)
