# PATH: engines/factory.py
"""
Explicit engine construction from configuration.

There is no self-registration: callers name the engines they want and
receive fresh instances in that order.
"""

from types import MappingProxyType
from typing import Callable, List, Mapping, Optional, Sequence

from config.run_config import ScoringConfig
from core.constants import BackendKind
from core.exceptions import ConfigError
from engines.base import Engine
from engines.ranking import ScoringEngine
from engines.summary import SummaryEngine, TopPoolEngine
from scoring.backends import HeuristicBackend, LazyModelBackend, ScoringBackend


def build_backend(scoring: ScoringConfig) -> ScoringBackend:
    """
    Build the scoring backend described by `scoring`.

    The model variant is lazy: the artifact is read when the scoring
    engine first runs, so a load failure fails that engine only.
    """
    scoring.validate()
    if scoring.backend == BackendKind.MODEL:
        return LazyModelBackend(scoring.model_path)
    return HeuristicBackend(
        fee_denominator=scoring.fee_denominator,
        score_scale=scoring.score_scale,
    )


ENGINE_BUILDERS: Mapping[str, Callable[[Optional[ScoringBackend]], Engine]] = MappingProxyType({
    "summary": lambda backend: SummaryEngine(),
    "top_pool": lambda backend: TopPoolEngine(),
    "scoring": lambda backend: ScoringEngine(backend or HeuristicBackend()),
})


def build_engines(
    names: Sequence[str],
    backend: Optional[ScoringBackend] = None,
) -> List[Engine]:
    """
    Instantiate engines by name, preserving order.

    Args:
        names: Engine names (summary, top_pool, scoring); repeats allowed
        backend: Backend for scoring engines (default: HeuristicBackend())

    Raises:
        ConfigError: unknown engine name
    """
    engines = []
    for name in names:
        builder = ENGINE_BUILDERS.get(name)
        if builder is None:
            known = ", ".join(sorted(ENGINE_BUILDERS))
            raise ConfigError(f"unknown engine {name!r} (known: {known})")
        engines.append(builder(backend))
    return engines
