# PATH: tests/unit/test_engines.py
"""
Unit tests for engines and the engine factory.

Covers:
- SummaryEngine counts
- TopPoolEngine max selection, first-occurrence tie-break, empty snapshot
- ScoringEngine ranking, stability, per-pool skips, backend prepare failure
- build_engines / build_backend
"""

import pytest

from config.run_config import ScoringConfig
from core.constants import BackendKind, ErrorCode
from core.exceptions import ConfigError, ScoringBackendLoadError, ScoringError
from core.models import Pool, Snapshot, Token
from engines import (
    RankedReport,
    ScoringEngine,
    SummaryEngine,
    SummaryReport,
    TopPoolEngine,
    TopPoolReport,
    build_backend,
    build_engines,
)
from scoring.backends import HeuristicBackend, LazyModelBackend, ModelBackend


def pool(name, reserve0, reserve1, fee=3000, chain="eth"):
    return Pool(
        dex_name=name,
        chain=chain,
        token0="0x1",
        token1="0x2",
        reserve0=reserve0,
        reserve1=reserve1,
        fee=fee,
    )


def snapshot_of(*pools, tokens=()):
    return Snapshot(tokens=tuple(tokens), pools=tuple(pools))


class ConstantBackend:
    """Scores every pool the same."""

    name = "constant"

    def prepare(self):
        return None

    def score(self, vector):
        return 1.0


class PickyBackend:
    """Fails for pools whose fee is 999, heuristic otherwise."""

    name = "picky"

    def __init__(self):
        self.inner = HeuristicBackend()

    def prepare(self):
        return None

    def score(self, vector):
        if vector.values[2] == 999:
            raise ScoringError("rejected shape", ErrorCode.FEATURE_SCHEMA_MISMATCH)
        return self.inner.score(vector)


class FeeGuardModel:
    """Estimator stub that rejects rows whose fee is 999, sums reserves otherwise."""

    n_features_in_ = 3

    def predict(self, X):
        if float(X[0][2]) == 999:
            raise ValueError("X contains a fee outside the training range")
        return [float(X[0][0]) + float(X[0][1])]


class BrokenBackend:
    name = "broken"

    def prepare(self):
        raise ScoringBackendLoadError("model.joblib", "file not found")

    def score(self, vector):
        raise AssertionError("score() must not run after a failed prepare()")


# =============================================================================
# SUMMARY
# =============================================================================

class TestSummaryEngine:

    def test_counts(self, multi_snapshot):
        report = SummaryEngine().execute(multi_snapshot)

        assert report == SummaryReport(token_count=3, pool_count=3)
        assert report.summary() == "3 tokens, 3 pools"

    def test_reference_scenario(self, eth_snapshot):
        report = SummaryEngine().execute(eth_snapshot)

        assert report.token_count == 1
        assert report.pool_count == 1

    def test_empty(self, empty_snapshot):
        assert SummaryEngine().execute(empty_snapshot).to_dict() == {"token_count": 0, "pool_count": 0}


# =============================================================================
# TOP POOL
# =============================================================================

class TestTopPoolEngine:

    def test_reference_scenario(self, eth_snapshot):
        report = TopPoolEngine().execute(eth_snapshot)

        assert report.pool is eth_snapshot.pools[0]
        assert report.total_reserve == 3000000

    def test_selects_max_sum(self):
        snapshot = snapshot_of(pool("a", 10, 10), pool("b", 5, 100), pool("c", 50, 0))

        report = TopPoolEngine().execute(snapshot)

        assert report.pool.dex_name == "b"
        assert report.index == 1
        assert report.total_reserve == 105

    def test_tie_goes_to_first(self):
        snapshot = snapshot_of(pool("a", 1, 1), pool("b", 60, 40), pool("c", 40, 60), pool("d", 100, 0))

        report = TopPoolEngine().execute(snapshot)

        assert report.pool.dex_name == "b"
        assert report.index == 1

    def test_all_zero_reserves(self):
        snapshot = snapshot_of(pool("a", 0, 0), pool("b", 0, 0))

        report = TopPoolEngine().execute(snapshot)

        assert report.pool.dex_name == "a"
        assert report.total_reserve == 0

    def test_exact_integer_sum(self):
        big = 2**64 - 1
        snapshot = snapshot_of(pool("a", big, big), pool("b", big, big - 1))

        report = TopPoolEngine().execute(snapshot)

        assert report.pool.dex_name == "a"
        assert report.total_reserve == 2 * big

    def test_empty_is_not_an_error(self, empty_snapshot):
        report = TopPoolEngine().execute(empty_snapshot)

        assert report == TopPoolReport(pool=None)
        assert report.is_empty
        assert report.summary() == "no pools"
        assert report.to_dict() == {"pool": None, "message": "no pools"}

    def test_pair_label(self, multi_snapshot):
        report = TopPoolEngine().execute(multi_snapshot)

        assert report.pool.dex_name == "QuickSwap"
        assert report.pair == "WMATIC/USDC"


# =============================================================================
# SCORING
# =============================================================================

class TestScoringEngine:

    def test_reference_scenario(self, eth_snapshot):
        report = ScoringEngine(HeuristicBackend()).execute(eth_snapshot)

        assert isinstance(report, RankedReport)
        assert len(report.ranked) == 1
        assert report.ranked[0].score == pytest.approx(2.1)
        assert report.ranked[0].pool is eth_snapshot.pools[0]

    def test_sorted_descending(self):
        snapshot = snapshot_of(pool("low", 1_000_000, 0), pool("high", 9_000_000, 0), pool("mid", 5_000_000, 0))

        report = ScoringEngine(HeuristicBackend()).execute(snapshot)

        assert [s.pool.dex_name for s in report.ranked] == ["high", "mid", "low"]
        scores = [s.score for s in report.ranked]
        assert scores == sorted(scores, reverse=True)

    def test_equal_scores_keep_snapshot_order(self):
        snapshot = snapshot_of(*(pool(f"p{i}", i, 0) for i in range(6)))

        report = ScoringEngine(ConstantBackend()).execute(snapshot)

        assert [s.index for s in report.ranked] == [0, 1, 2, 3, 4, 5]

    def test_ties_among_distinct_scores(self):
        snapshot = snapshot_of(
            pool("a", 1_000_000, 0),
            pool("b", 2_000_000, 0),
            pool("c", 1_000_000, 0),
            pool("d", 2_000_000, 0),
        )

        report = ScoringEngine(HeuristicBackend()).execute(snapshot)

        assert [s.pool.dex_name for s in report.ranked] == ["b", "d", "a", "c"]

    def test_failed_pool_is_skipped(self):
        snapshot = snapshot_of(pool("good1", 1_000_000, 0), pool("bad", 5_000_000, 0, fee=999), pool("good2", 3_000_000, 0))

        report = ScoringEngine(PickyBackend()).execute(snapshot)

        assert [s.pool.dex_name for s in report.ranked] == ["good2", "good1"]
        assert len(report.skipped) == 1
        assert report.skipped[0].index == 1
        assert report.skipped[0].code == ErrorCode.FEATURE_SCHEMA_MISMATCH.value
        assert "1 skipped" in report.summary()

    def test_model_backend_rejected_pool_is_skipped(self):
        snapshot = snapshot_of(
            pool("good1", 1_000_000, 0),
            pool("bad", 9_000_000, 0, fee=999),
            pool("good2", 3_000_000, 0),
        )

        report = ScoringEngine(ModelBackend(FeeGuardModel())).execute(snapshot)

        assert report.backend == "model"
        assert [s.pool.dex_name for s in report.ranked] == ["good2", "good1"]
        assert [s.score for s in report.ranked] == [3_000_000.0, 1_000_000.0]
        assert [s.index for s in report.skipped] == [1]
        assert report.skipped[0].code == ErrorCode.SCORING_FAILED.value
        assert "fee outside the training range" in report.skipped[0].reason

    def test_skip_is_logged(self, caplog):
        snapshot = snapshot_of(pool("bad", 1, 1, fee=999))

        with caplog.at_level("WARNING"):
            ScoringEngine(PickyBackend()).execute(snapshot)

        assert any(r.getMessage() == "Pool skipped" and r.context["pool_index"] == 0 for r in caplog.records)

    def test_empty_snapshot_gives_empty_ranking(self, empty_snapshot):
        report = ScoringEngine(HeuristicBackend()).execute(empty_snapshot)

        assert report.ranked == ()
        assert report.skipped == ()

    def test_prepare_failure_fails_engine(self, eth_snapshot):
        with pytest.raises(ScoringBackendLoadError):
            ScoringEngine(BrokenBackend()).execute(eth_snapshot)

    def test_full_ranking_reported_top_is_view(self):
        snapshot = snapshot_of(*(pool(f"p{i}", i * 1_000_000, 0) for i in range(20)))

        report = ScoringEngine(HeuristicBackend()).execute(snapshot)

        assert len(report.ranked) == 20
        assert [s.pool.dex_name for s in report.top(3)] == ["p19", "p18", "p17"]
        assert report.top(None) == report.ranked
        assert report.to_dict(top_n=3)["ranked_total"] == 20
        assert len(report.to_dict(top_n=3)["ranked"]) == 3

    def test_does_not_mutate_snapshot(self, multi_snapshot):
        pools_before = multi_snapshot.pools

        ScoringEngine(HeuristicBackend()).execute(multi_snapshot)

        assert multi_snapshot.pools is pools_before

    def test_backend_name_in_report(self, eth_snapshot):
        assert ScoringEngine(HeuristicBackend()).execute(eth_snapshot).backend == "heuristic"

    def test_custom_name(self):
        assert ScoringEngine(HeuristicBackend(), name="ai").name == "ai"


# =============================================================================
# FACTORY
# =============================================================================

class TestFactory:

    def test_build_engines_in_order(self):
        engines = build_engines(["scoring", "summary", "top_pool", "summary"])

        assert [e.name for e in engines] == ["scoring", "summary", "top_pool", "summary"]
        assert engines[1] is not engines[3]

    def test_unknown_engine(self):
        with pytest.raises(ConfigError) as exc_info:
            build_engines(["summary", "volume"])

        assert "volume" in exc_info.value.message

    def test_scoring_engine_uses_given_backend(self):
        backend = ConstantBackend()

        (engine,) = build_engines(["scoring"], backend)

        assert engine.backend is backend

    def test_build_backend_heuristic(self):
        backend = build_backend(ScoringConfig(fee_denominator=1000, score_scale=10))

        assert isinstance(backend, HeuristicBackend)
        assert backend.fee_denominator == 1000
        assert backend.score_scale == 10

    def test_build_backend_model_is_lazy(self, tmp_path):
        backend = build_backend(ScoringConfig(backend=BackendKind.MODEL, model_path=str(tmp_path / "missing.joblib")))

        assert isinstance(backend, LazyModelBackend)

    def test_build_backend_model_requires_path(self):
        with pytest.raises(ConfigError):
            build_backend(ScoringConfig(backend=BackendKind.MODEL))

    def test_summary_of_token_set(self):
        snapshot = snapshot_of(tokens=[Token("A", 18, "0xa"), Token("B", 6, "0xb")])

        (engine,) = build_engines(["summary"])

        assert engine.execute(snapshot).token_count == 2
