# PATH: execution/__init__.py
"""
POOLSCAN execution layer.

- orchestrator: runs registered engines over one snapshot and collects
  per-engine outcomes
"""

from execution.orchestrator import EngineOutcome, Orchestrator

__all__ = [
    "EngineOutcome",
    "Orchestrator",
]
