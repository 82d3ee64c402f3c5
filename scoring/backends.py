# PATH: scoring/backends.py
"""
Scoring backends: feature vector -> scalar score.

BACKEND CONTRACT:
    prepare() -> None               raises ScoringBackendLoadError
    score(vector) -> float          raises ScoringError

- score() failures are per call; callers skip the pool and continue
- prepare() failures are fatal to the engine using the backend only
- Backends are interchangeable behind ScoringBackend; engines never see
  the inference runtime

Variants:
- HeuristicBackend: (reserve0 + reserve1) * (1 - fee / fee_denominator) / score_scale
- ModelBackend: joblib-serialized estimator exposing predict()
- LazyModelBackend: ModelBackend loaded on first use, load failure remembered
"""

import math
import threading
from pathlib import Path
from typing import Any, Optional, Protocol

import joblib
import numpy as np

from core.constants import ErrorCode, FEE_BPS_DENOMINATOR, SCORE_SCALE
from core.exceptions import ScoringBackendLoadError, ScoringError
from core.logging import get_logger
from scoring.features import FEATURE_SCHEMA_V1, FeatureSchema, FeatureVector

logger = get_logger("poolscan.scoring.backends")


class ScoringBackend(Protocol):
    """Protocol for all scoring backends."""

    name: str

    def prepare(self) -> None:
        """Acquire whatever the backend needs before the first score() call."""
        ...

    def score(self, vector: FeatureVector) -> float:
        """Score one feature vector."""
        ...


def _check_schema(vector: FeatureVector, schema: FeatureSchema, width: int) -> None:
    if vector.schema_version != schema.version:
        raise ScoringError(
            f"feature schema {vector.schema_version} does not match backend schema {schema.version}",
            ErrorCode.FEATURE_SCHEMA_MISMATCH,
            {"expected": schema.version, "got": vector.schema_version},
        )
    if len(vector) != width:
        raise ScoringError(
            f"expected {width} features, got {len(vector)}",
            ErrorCode.FEATURE_SCHEMA_MISMATCH,
            {"expected": width, "got": len(vector)},
        )


# =============================================================================
# HEURISTIC
# =============================================================================

class HeuristicBackend:
    """
    Deterministic liquidity-weighted score.

    Uses the v1 layout [reserve0, reserve1, fee]. Fee is interpreted as
    fee / fee_denominator (basis points with the default denominator).
    """

    name = "heuristic"

    def __init__(
        self,
        fee_denominator: int = FEE_BPS_DENOMINATOR,
        score_scale: int = SCORE_SCALE,
    ):
        if fee_denominator <= 0:
            raise ValueError(f"fee_denominator must be positive, got {fee_denominator}")
        if score_scale <= 0:
            raise ValueError(f"score_scale must be positive, got {score_scale}")
        self.fee_denominator = fee_denominator
        self.score_scale = score_scale
        self.schema = FEATURE_SCHEMA_V1

    def prepare(self) -> None:
        return None

    def score(self, vector: FeatureVector) -> float:
        _check_schema(vector, self.schema, len(self.schema))

        reserve0, reserve1, fee = vector.values
        total_reserve = reserve0 + reserve1
        if total_reserve == 0:
            return 0.0

        fee_factor = 1.0 - fee / self.fee_denominator
        return total_reserve * fee_factor / self.score_scale

    def __repr__(self) -> str:
        return (
            f"HeuristicBackend(fee_denominator={self.fee_denominator}, "
            f"score_scale={self.score_scale})"
        )


# =============================================================================
# MODEL INFERENCE
# =============================================================================

class ModelBackend:
    """
    Wraps a loaded estimator. Build with ModelBackend.load(path).

    Input width is the estimator's n_features_in_ when it has one,
    otherwise the schema length.
    """

    name = "model"

    def __init__(
        self,
        model: Any,
        model_path: str = "<memory>",
        schema: FeatureSchema = FEATURE_SCHEMA_V1,
    ):
        self.model = model
        self.model_path = model_path
        self.schema = schema

        n_features = getattr(model, "n_features_in_", None)
        self.n_features = int(n_features) if n_features is not None else len(schema)

        if self.n_features != len(schema):
            logger.warning(
                "Model input width differs from feature schema",
                extra={"context": {
                    "model_path": model_path,
                    "model_features": self.n_features,
                    "schema_features": len(schema),
                    "schema_version": schema.version,
                }},
            )

    @classmethod
    def load(cls, model_path: str | Path, schema: FeatureSchema = FEATURE_SCHEMA_V1) -> "ModelBackend":
        """
        Load a joblib artifact. Never retries.

        Raises:
            ScoringBackendLoadError: missing file, corrupt artifact, or no predict()
        """
        path = Path(model_path)
        if not path.is_file():
            raise ScoringBackendLoadError(str(path), "file not found")

        try:
            model = joblib.load(path)
        except Exception as e:
            raise ScoringBackendLoadError(
                str(path),
                f"corrupt artifact ({type(e).__name__}: {e})",
            ) from e

        if not callable(getattr(model, "predict", None)):
            raise ScoringBackendLoadError(
                str(path),
                f"{type(model).__name__} has no predict()",
            )

        logger.info(
            "Scoring model loaded",
            extra={"context": {"model_path": str(path), "model_type": type(model).__name__}},
        )
        return cls(model, model_path=str(path), schema=schema)

    def prepare(self) -> None:
        return None

    def score(self, vector: FeatureVector) -> float:
        _check_schema(vector, self.schema, self.n_features)

        inputs = np.asarray([vector.values], dtype=np.float32)
        try:
            prediction = self.model.predict(inputs)
            flat = np.ravel(np.asarray(prediction, dtype=np.float64))
        except Exception as e:
            raise ScoringError(
                f"predict failed ({type(e).__name__}: {e})",
                details={"model_path": self.model_path},
            ) from e

        if flat.size == 0:
            raise ScoringError("model returned an empty prediction", details={"model_path": self.model_path})

        score = float(flat[0])
        if not math.isfinite(score):
            raise ScoringError(f"model returned non-finite score {score}", details={"model_path": self.model_path})
        return score

    def __repr__(self) -> str:
        return f"ModelBackend(model_path={self.model_path!r}, n_features={self.n_features})"


class LazyModelBackend:
    """
    ModelBackend loaded on first prepare()/score().

    Lets the load error surface inside the engine that needs the model.
    A failed load is cached and re-raised; the artifact is read at most once.
    """

    name = "model"

    def __init__(self, model_path: str | Path, schema: FeatureSchema = FEATURE_SCHEMA_V1):
        self.model_path = str(model_path)
        self.schema = schema
        self._backend: Optional[ModelBackend] = None
        self._load_error: Optional[ScoringBackendLoadError] = None
        self._lock = threading.Lock()

    def _resolve(self) -> ModelBackend:
        with self._lock:
            if self._load_error is not None:
                raise self._load_error
            if self._backend is None:
                try:
                    self._backend = ModelBackend.load(self.model_path, self.schema)
                except ScoringBackendLoadError as e:
                    self._load_error = e
                    raise
            return self._backend

    def prepare(self) -> None:
        self._resolve()

    def score(self, vector: FeatureVector) -> float:
        return self._resolve().score(vector)

    def __repr__(self) -> str:
        return f"LazyModelBackend(model_path={self.model_path!r})"
