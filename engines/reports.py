# PATH: engines/reports.py
"""
Engine report types.

The orchestrator never looks inside a report; it only relays it.
Every report offers:
- summary(): one-line human text
- to_dict(): JSON-ready dict
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from core.models import Pool, ScoredPool, SkippedPool


@dataclass(frozen=True)
class SummaryReport:
    """Token and pool counts of a snapshot."""
    token_count: int
    pool_count: int

    def summary(self) -> str:
        return f"{self.token_count} tokens, {self.pool_count} pools"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "token_count": self.token_count,
            "pool_count": self.pool_count,
        }


@dataclass(frozen=True)
class TopPoolReport:
    """Pool with the largest reserve0 + reserve1. pool is None when there are no pools."""
    pool: Optional[Pool]
    total_reserve: int = 0
    index: Optional[int] = None
    pair: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.pool is None

    def summary(self) -> str:
        if self.pool is None:
            return "no pools"
        return (
            f"top pool is {self.pool.dex_name} {self.pair} on {self.pool.chain} "
            f"with reserve0+reserve1={self.total_reserve}"
        )

    def to_dict(self) -> Dict[str, Any]:
        if self.pool is None:
            return {"pool": None, "message": "no pools"}
        return {
            "pool": self.pool.to_dict(),
            "index": self.index,
            "pair": self.pair,
            "total_reserve": self.total_reserve,
        }


@dataclass(frozen=True)
class RankedReport:
    """
    Pools ranked by score, descending.

    Equal scores keep snapshot order. `skipped` lists pools whose
    score call failed; they do not appear in `ranked`.
    """
    backend: str
    ranked: Tuple[ScoredPool, ...] = ()
    skipped: Tuple[SkippedPool, ...] = ()

    def top(self, n: Optional[int] = None) -> Tuple[ScoredPool, ...]:
        """First n entries of the ranking (all when n is None)."""
        if n is None:
            return self.ranked
        return self.ranked[:max(n, 0)]

    def summary(self) -> str:
        text = f"{len(self.ranked)} pools ranked by {self.backend}"
        if self.skipped:
            text += f", {len(self.skipped)} skipped"
        if self.ranked:
            best = self.ranked[0]
            text += f"; best {best.pool.dex_name} score={best.score:.6g}"
        return text

    def to_dict(self, top_n: Optional[int] = None) -> Dict[str, Any]:
        return {
            "backend": self.backend,
            "ranked_total": len(self.ranked),
            "ranked": [entry.to_dict() for entry in self.top(top_n)],
            "skipped": [entry.to_dict() for entry in self.skipped],
        }
