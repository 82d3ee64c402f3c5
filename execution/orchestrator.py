# PATH: execution/orchestrator.py
"""
Engine orchestrator.

ORCHESTRATION CONTRACT:
=======================

Interface:
  add_engine(engine)      appends; no dedup, no reordering
  run(snapshot) → List[EngineOutcome]
    - one outcome per registered engine, in registration order
    - every engine runs exactly once against the same snapshot object
    - an engine failure becomes a FAILED outcome; later engines still run
    - run() itself never raises for an engine failure

Failure capture:
  - PoolscanError: outcome keeps the error's own code
    (BACKEND_LOAD_FAILED, ENGINE_FAILED, ...)
  - any other exception: ENGINE_FAILED, logged with traceback

Execution:
  - max_workers == 1: sequential, in registration order
  - max_workers > 1: ThreadPoolExecutor; outcomes re-assembled by index.
    Safe because the Snapshot is frozen and engines only read it.

=======================
"""

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from core.constants import DEFAULT_MAX_WORKERS, EngineStatus, ErrorCode
from core.exceptions import PoolscanError
from core.logging import get_logger
from core.models import Snapshot
from engines.base import Engine

logger = get_logger("poolscan.execution.orchestrator")


@dataclass(frozen=True)
class EngineOutcome:
    """Result of one engine in one run: a report or the failure that replaced it."""
    index: int
    engine_name: str
    status: EngineStatus
    report: Any = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.status == EngineStatus.OK

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "index": self.index,
            "engine": self.engine_name,
            "status": self.status.value,
            "duration_ms": self.duration_ms,
        }
        if self.ok:
            to_dict = getattr(self.report, "to_dict", None)
            data["report"] = to_dict() if callable(to_dict) else self.report
        else:
            data["error"] = {
                "code": self.error_code,
                "message": self.error_message,
            }
        return data


class Orchestrator:
    """Runs an ordered list of engines over one snapshot."""

    def __init__(
        self,
        engines: Optional[Iterable[Engine]] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self._engines: List[Engine] = list(engines or [])
        self.max_workers = max_workers

    @property
    def engines(self) -> Tuple[Engine, ...]:
        return tuple(self._engines)

    def add_engine(self, engine: Engine) -> "Orchestrator":
        """Append an engine. Returns self for chaining."""
        self._engines.append(engine)
        return self

    def __len__(self) -> int:
        return len(self._engines)

    def _run_one(self, index: int, engine: Engine, snapshot: Snapshot) -> EngineOutcome:
        name = getattr(engine, "name", type(engine).__name__)
        started = time.monotonic()
        try:
            report = engine.execute(snapshot)
        except PoolscanError as e:
            duration_ms = int((time.monotonic() - started) * 1000)
            logger.error(
                f"Engine failed: {name}",
                extra={"context": {
                    "engine": name,
                    "index": index,
                    "error_code": e.code.value,
                    "error": e.message,
                }},
            )
            return EngineOutcome(
                index=index,
                engine_name=name,
                status=EngineStatus.FAILED,
                error_code=e.code.value,
                error_message=e.message,
                duration_ms=duration_ms,
            )
        except Exception as e:
            duration_ms = int((time.monotonic() - started) * 1000)
            logger.error(
                f"Engine crashed: {name}",
                exc_info=True,
                extra={"context": {
                    "engine": name,
                    "index": index,
                    "error_code": ErrorCode.ENGINE_FAILED.value,
                }},
            )
            return EngineOutcome(
                index=index,
                engine_name=name,
                status=EngineStatus.FAILED,
                error_code=ErrorCode.ENGINE_FAILED.value,
                error_message=f"{type(e).__name__}: {e}",
                duration_ms=duration_ms,
            )

        duration_ms = int((time.monotonic() - started) * 1000)
        logger.info(
            f"Engine finished: {name}",
            extra={"context": {"engine": name, "index": index, "duration_ms": duration_ms}},
        )
        return EngineOutcome(
            index=index,
            engine_name=name,
            status=EngineStatus.OK,
            report=report,
            duration_ms=duration_ms,
        )

    def run(self, snapshot: Snapshot) -> List[EngineOutcome]:
        """
        Run every registered engine once against `snapshot`.

        Returns:
            Outcomes in registration order, one per engine
        """
        engines = list(self._engines)
        logger.info(
            "Run started",
            extra={"context": {
                "engines": len(engines),
                "tokens": snapshot.token_count,
                "pools": snapshot.pool_count,
                "max_workers": self.max_workers,
            }},
        )

        if self.max_workers == 1 or len(engines) <= 1:
            outcomes = [self._run_one(i, engine, snapshot) for i, engine in enumerate(engines)]
        else:
            slots: List[Optional[EngineOutcome]] = [None] * len(engines)
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(engines))) as executor:
                futures = {
                    executor.submit(self._run_one, i, engine, snapshot): i
                    for i, engine in enumerate(engines)
                }
                for future in as_completed(futures):
                    slots[futures[future]] = future.result()
            outcomes = [outcome for outcome in slots if outcome is not None]

        failed = sum(1 for outcome in outcomes if not outcome.ok)
        logger.info(
            "Run finished",
            extra={"context": {"engines_ok": len(outcomes) - failed, "engines_failed": failed}},
        )
        return outcomes
