# PATH: engines/ranking.py
"""
ScoringEngine - ranks every pool of a snapshot with a scoring backend.

RANKING CONTRACT:
- Each pool: extract_features() -> backend.score()
- A failed score call skips that pool only (logged + listed in the report)
- Sort descending by score; equal scores keep snapshot order (stable sort)
- The full ranking is reported; top-N is a presentation concern
- backend.prepare() failures propagate: the whole engine fails
"""

from typing import List, Optional

from core.exceptions import ScoringError
from core.logging import get_logger
from core.models import ScoredPool, SkippedPool, Snapshot
from engines.reports import RankedReport
from scoring.backends import ScoringBackend
from scoring.features import FEATURE_SCHEMA_V1, FeatureSchema, extract_features


class ScoringEngine:
    """Scores and ranks pools with a pluggable backend."""

    def __init__(
        self,
        backend: ScoringBackend,
        schema: FeatureSchema = FEATURE_SCHEMA_V1,
        name: Optional[str] = None,
    ):
        self.backend = backend
        self.schema = schema
        self.name = name or "scoring"
        self.logger = get_logger("poolscan.engines.ranking", engine=self.name, backend=backend.name)

    def execute(self, snapshot: Snapshot) -> RankedReport:
        self.backend.prepare()

        scored: List[ScoredPool] = []
        skipped: List[SkippedPool] = []

        for i, pool in enumerate(snapshot.pools):
            vector = extract_features(pool, self.schema)
            try:
                score = self.backend.score(vector)
            except ScoringError as e:
                skipped.append(SkippedPool(index=i, pool=pool, reason=e.message, code=e.code.value))
                self.logger.warning(
                    "Pool skipped",
                    extra={"context": {
                        "pool_index": i,
                        "dex_name": pool.dex_name,
                        "chain": pool.chain,
                        "error_code": e.code.value,
                        "reason": e.message,
                    }},
                )
                continue
            scored.append(ScoredPool(score=score, pool=pool, index=i))

        # stable: equal scores keep snapshot order
        ranked = sorted(scored, key=lambda entry: entry.score, reverse=True)

        self.logger.info(
            "Pools ranked",
            extra={"context": {"ranked": len(ranked), "skipped": len(skipped)}},
        )
        return RankedReport(
            backend=self.backend.name,
            ranked=tuple(ranked),
            skipped=tuple(skipped),
        )
