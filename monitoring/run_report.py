# PATH: monitoring/run_report.py
"""
Run report for POOLSCAN.

Turns the orchestrator's per-engine outcomes into a JSON-ready report
and console lines. This is the only place where ranked lists are
truncated (top-N is a presentation concern).

SCHEMA CONTRACT (core.constants.SCHEMA_VERSION):
- schema_version, timestamp
- snapshot: token_count, pool_count
- engines[]: index, engine, status, duration_ms, report | error{code, message}
  ranked reports: backend, ranked_total, ranked[] (top_n, each with pair), skipped[]
- stats: engines_total, engines_ok, engines_failed

Nothing is written to disk; callers choose the output channel.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from core.constants import SCHEMA_VERSION
from core.models import Snapshot
from engines.reports import RankedReport
from execution.orchestrator import EngineOutcome


@dataclass
class RunReport:
    """Report for one orchestrator run."""
    timestamp: str = ""
    snapshot: Dict[str, Any] = field(default_factory=dict)
    engines: List[Dict[str, Any]] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "schema_version": SCHEMA_VERSION,
            "timestamp": self.timestamp,
            "snapshot": self.snapshot,
            "engines": self.engines,
            "stats": self.stats,
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)


def _engine_entry(snapshot: Snapshot, outcome: EngineOutcome, top_n: Optional[int]) -> Dict[str, Any]:
    entry = outcome.to_dict()
    if outcome.ok and isinstance(outcome.report, RankedReport):
        ranked = outcome.report.to_dict(top_n=top_n)
        for item, scored in zip(ranked["ranked"], outcome.report.top(top_n)):
            item["pair"] = snapshot.pair_label(scored.pool)
        entry["report"] = ranked
    return entry


def build_run_report(
    snapshot: Snapshot,
    outcomes: Sequence[EngineOutcome],
    top_n: Optional[int] = None,
) -> RunReport:
    """
    Build the report for one run.

    Args:
        snapshot: Snapshot the engines ran on
        outcomes: Orchestrator outcomes, in registration order
        top_n: Entries of each ranked list to include (None = all)
    """
    failed = sum(1 for outcome in outcomes if not outcome.ok)
    return RunReport(
        snapshot={
            "token_count": snapshot.token_count,
            "pool_count": snapshot.pool_count,
        },
        engines=[_engine_entry(snapshot, outcome, top_n) for outcome in outcomes],
        stats={
            "engines_total": len(outcomes),
            "engines_ok": len(outcomes) - failed,
            "engines_failed": failed,
        },
    )


def format_run_report(
    outcomes: Sequence[EngineOutcome],
    top_n: Optional[int] = None,
    snapshot: Optional[Snapshot] = None,
) -> List[str]:
    """
    Console lines for a run, one block per engine.

    Example:
        [summary] 1 tokens, 1 pools
        [scoring] FAILED [BACKEND_LOAD_FAILED] cannot load model ...
    """
    lines = []
    for outcome in outcomes:
        prefix = f"[{outcome.engine_name}]"
        if not outcome.ok:
            lines.append(f"{prefix} FAILED [{outcome.error_code}] {outcome.error_message}")
            continue

        report = outcome.report
        summary = getattr(report, "summary", None)
        lines.append(f"{prefix} {summary() if callable(summary) else report}")

        if isinstance(report, RankedReport):
            for rank, scored in enumerate(report.top(top_n), start=1):
                pair = snapshot.pair_label(scored.pool) if snapshot else f"{scored.pool.token0}/{scored.pool.token1}"
                lines.append(
                    f"  {rank:>3}. {scored.score:>14.6f}  {scored.pool.dex_name} {pair} ({scored.pool.chain})"
                )
            for skipped in report.skipped:
                lines.append(f"  skipped pools[{skipped.index}] {skipped.pool.dex_name}: [{skipped.code}] {skipped.reason}")
    return lines


def print_run_report(
    outcomes: Sequence[EngineOutcome],
    top_n: Optional[int] = None,
    snapshot: Optional[Snapshot] = None,
) -> None:
    """Print run report to console in formatted style."""
    print("=" * 60)
    print("POOLSCAN RUN REPORT")
    print("=" * 60)
    for line in format_run_report(outcomes, top_n=top_n, snapshot=snapshot):
        print(line)
    failed = sum(1 for outcome in outcomes if not outcome.ok)
    print("-" * 60)
    print(f"Engines: {len(outcomes)} total, {len(outcomes) - failed} ok, {failed} failed")
