"""
engines/ - Analysis passes over a snapshot.

Modules:
- base: Engine protocol
- reports: SummaryReport, TopPoolReport, RankedReport
- summary: SummaryEngine, TopPoolEngine
- ranking: ScoringEngine
- factory: build_engines, build_backend
"""

from engines.base import Engine
from engines.factory import ENGINE_BUILDERS, build_backend, build_engines
from engines.ranking import ScoringEngine
from engines.reports import RankedReport, SummaryReport, TopPoolReport
from engines.summary import SummaryEngine, TopPoolEngine

__all__ = [
    "Engine",
    "ENGINE_BUILDERS",
    "build_backend",
    "build_engines",
    "RankedReport",
    "ScoringEngine",
    "SummaryEngine",
    "SummaryReport",
    "TopPoolEngine",
    "TopPoolReport",
]
