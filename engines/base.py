# PATH: engines/base.py
"""Base engine protocol."""

from typing import Any, Protocol

from core.models import Snapshot


class Engine(Protocol):
    """Protocol for all analysis engines."""

    name: str

    def execute(self, snapshot: Snapshot) -> Any:
        """
        Analyse a snapshot.

        Args:
            snapshot: Shared read-only snapshot; must not be mutated

        Returns:
            Engine-specific report

        Raises:
            PoolscanError: captured by the orchestrator as this engine's failure
        """
        ...
