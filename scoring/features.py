# PATH: scoring/features.py
"""
Feature extraction for pool scoring.

FEATURE SCHEMA CONTRACT:
- A FeatureSchema names the pool attributes, in order, that make up a vector
- Every FeatureVector carries the version of the schema that built it
- Backends reject vectors from a schema they were not built for

v1 layout: [reserve0, reserve1, fee]

Reserves and fee are unsigned integers up to 2**64-1. Converting them to
float loses precision for large values. This is accepted: scores are a
ranking signal, not an accounting value.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

from core.constants import FEATURE_SCHEMA_VERSION
from core.models import Pool


@dataclass(frozen=True)
class FeatureSchema:
    """Ordered list of pool attributes that form a feature vector."""
    version: str
    names: Tuple[str, ...]

    def __len__(self) -> int:
        return len(self.names)


FEATURE_SCHEMA_V1 = FeatureSchema(
    version=FEATURE_SCHEMA_VERSION,
    names=("reserve0", "reserve1", "fee"),
)


@dataclass(frozen=True)
class FeatureVector:
    """Fixed-length float vector tagged with its schema version."""
    schema_version: str
    values: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)

    def __getitem__(self, i: int) -> float:
        return self.values[i]


def extract_features(pool: Pool, schema: FeatureSchema = FEATURE_SCHEMA_V1) -> FeatureVector:
    """
    Map a pool to its feature vector.

    Pure and total for any parsed Pool.
    """
    return FeatureVector(
        schema_version=schema.version,
        values=tuple(float(getattr(pool, name)) for name in schema.names),
    )
