"""
scoring/ - Feature extraction and scoring backends.

Modules:
- features: Pool -> FeatureVector under a versioned FeatureSchema
- backends: HeuristicBackend, ModelBackend, LazyModelBackend
"""

from scoring.backends import (
    HeuristicBackend,
    LazyModelBackend,
    ModelBackend,
    ScoringBackend,
)
from scoring.features import (
    FEATURE_SCHEMA_V1,
    FeatureSchema,
    FeatureVector,
    extract_features,
)

__all__ = [
    # Features
    "FEATURE_SCHEMA_V1",
    "FeatureSchema",
    "FeatureVector",
    "extract_features",
    # Backends
    "HeuristicBackend",
    "LazyModelBackend",
    "ModelBackend",
    "ScoringBackend",
]
