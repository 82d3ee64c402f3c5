# PATH: engines/summary.py
"""Summary statistics engines: counts and top pool by reserves."""

from core.logging import get_logger
from core.models import Snapshot
from engines.reports import SummaryReport, TopPoolReport

logger = get_logger("poolscan.engines.summary")


class SummaryEngine:
    """Reports token and pool counts. Cannot fail."""

    name = "summary"

    def execute(self, snapshot: Snapshot) -> SummaryReport:
        return SummaryReport(
            token_count=snapshot.token_count,
            pool_count=snapshot.pool_count,
        )


class TopPoolEngine:
    """
    Reports the pool maximizing reserve0 + reserve1.

    Ties go to the first pool in snapshot order. An empty pool set
    yields a "no pools" report, not an error.
    """

    name = "top_pool"

    def execute(self, snapshot: Snapshot) -> TopPoolReport:
        best_index = None
        best_total = -1

        # strict > keeps the first of equal maxima
        for i, pool in enumerate(snapshot.pools):
            total = pool.total_reserve
            if total > best_total:
                best_index, best_total = i, total

        if best_index is None:
            logger.info("No pools in snapshot")
            return TopPoolReport(pool=None)

        pool = snapshot.pools[best_index]
        return TopPoolReport(
            pool=pool,
            total_reserve=best_total,
            index=best_index,
            pair=snapshot.pair_label(pool),
        )
