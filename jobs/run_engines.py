#!/usr/bin/env python3
"""
jobs/run_engines.py - CLI entrypoint for one analysis run.

Loads one snapshot document (fetcher output), builds an orchestrator
with the configured engines, runs it once, and prints per-engine reports.

Exit codes:
    0  every engine succeeded
    1  at least one engine failed (its failure is in the report)
    2  the run could not start (unreadable/malformed snapshot, bad config)

Usage:
    python -m jobs.run_engines --snapshot dex_data.json
    python -m jobs.run_engines --snapshot dex_data.json --model model.joblib --top-n 5
    python -m jobs.run_engines --snapshot dex_data.json --json-report --workers 3
"""

import os
import sys
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

import click
from dotenv import load_dotenv

from config.run_config import RunConfig, load_run_config
from core.constants import BackendKind
from core.exceptions import ConfigError, MalformedSnapshot
from core.logging import get_logger, log_error, set_global_context, setup_logging
from core.models import Snapshot
from core.snapshot import parse_snapshot_json
from engines.factory import build_backend, build_engines
from execution.orchestrator import Orchestrator
from monitoring.run_report import build_run_report, print_run_report

logger = get_logger("poolscan.jobs.run_engines")

MODEL_PATH_ENV = "POOLSCAN_MODEL_PATH"


def load_snapshot_file(path: Path) -> Snapshot:
    """
    Read and parse a snapshot file.

    Raises:
        MalformedSnapshot: unreadable file or invalid document
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise MalformedSnapshot("$", f"cannot read {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise MalformedSnapshot("$", f"not valid UTF-8: {e.reason} at byte {e.start}", {"byte": e.start}) from e
    return parse_snapshot_json(text)


def build_orchestrator(config: RunConfig) -> Orchestrator:
    """Explicitly construct the orchestrator and its engines from config."""
    backend = build_backend(config.scoring) if "scoring" in config.engines else None
    engines = build_engines(config.engines, backend)
    return Orchestrator(engines, max_workers=config.orchestrator.max_workers)


def apply_overrides(
    config: RunConfig,
    backend: Optional[str],
    model: Optional[str],
    top_n: Optional[int],
    workers: Optional[int],
) -> RunConfig:
    """
    Apply CLI/env overrides on top of the file config.

    Model path precedence: --model, then POOLSCAN_MODEL_PATH, then config.
    Passing --model without --backend selects the model backend.
    """
    scoring = config.scoring
    model_path = model or os.environ.get(MODEL_PATH_ENV) or scoring.model_path

    if backend is not None:
        kind = BackendKind(backend)
    elif model is not None:
        kind = BackendKind.MODEL
    else:
        kind = scoring.backend

    updated = replace(
        config,
        scoring=replace(scoring, backend=kind, model_path=model_path),
        orchestrator=replace(config.orchestrator, max_workers=workers or config.orchestrator.max_workers),
        report=replace(config.report, top_n=top_n if top_n is not None else config.report.top_n),
    )
    updated.validate()
    return updated


def _prepare(
    snapshot_path: Path,
    config_path: Optional[Path],
    chain: Optional[str],
) -> Tuple[Snapshot, RunConfig]:
    config = load_run_config(config_path)
    snapshot = load_snapshot_file(snapshot_path)
    if chain:
        snapshot = snapshot.pools_on_chain(chain)
    return snapshot, config


@click.command()
@click.option("--snapshot", "-s", "snapshot_path", required=True, type=click.Path(dir_okay=False), help="Fetcher output (JSON)")
@click.option("--config", "-c", "config_path", default=None, type=click.Path(dir_okay=False), help="Run config YAML (default: config/engines.yaml)")
@click.option("--backend", "-b", default=None, type=click.Choice([k.value for k in BackendKind]), help="Scoring backend")
@click.option("--model", "-m", default=None, help=f"Model artifact path (env: {MODEL_PATH_ENV})")
@click.option("--top-n", "-n", default=None, type=click.IntRange(min=0), help="Ranked entries to show")
@click.option("--workers", "-w", default=None, type=click.IntRange(min=1), help="Engine worker threads")
@click.option("--chain", default=None, help="Only analyse pools on this chain")
@click.option("--log-level", "-l", default="INFO", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]))
@click.option("--json-logs/--no-json-logs", default=False)
@click.option("--json-report", is_flag=True, help="Print the run report as JSON")
def main(
    snapshot_path: str,
    config_path: Optional[str],
    backend: Optional[str],
    model: Optional[str],
    top_n: Optional[int],
    workers: Optional[int],
    chain: Optional[str],
    log_level: str,
    json_logs: bool,
    json_report: bool,
) -> None:
    """POOLSCAN - run analysis engines over one DEX snapshot."""
    load_dotenv()
    setup_logging(level=log_level, json_output=json_logs)
    run_id = f"run_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}"
    set_global_context(service="poolscan", run_id=run_id)

    try:
        snapshot, config = _prepare(
            Path(snapshot_path),
            Path(config_path) if config_path else None,
            chain,
        )
        config = apply_overrides(config, backend, model, top_n, workers)
        orchestrator = build_orchestrator(config)
    except (MalformedSnapshot, ConfigError) as e:
        log_error(logger, e.code.value, e.message, **e.details)
        sys.exit(2)

    logger.info(
        "Snapshot loaded",
        extra={"context": {
            "snapshot": snapshot_path,
            "tokens": snapshot.token_count,
            "pools": snapshot.pool_count,
            "engines": config.engines,
            "backend": config.scoring.backend.value,
        }},
    )

    outcomes = orchestrator.run(snapshot)

    if json_report:
        report = build_run_report(snapshot, outcomes, top_n=config.report.top_n)
        click.echo(report.to_json())
    else:
        print_run_report(outcomes, top_n=config.report.top_n, snapshot=snapshot)

    if any(not outcome.ok for outcome in outcomes):
        sys.exit(1)


if __name__ == "__main__":
    main()
