# PATH: monitoring/__init__.py
"""
Monitoring package for POOLSCAN.

Run reporting: JSON-ready report and console rendering of engine outcomes.
"""

from monitoring.run_report import (
    RunReport,
    build_run_report,
    format_run_report,
    print_run_report,
)

__all__ = [
    "RunReport",
    "build_run_report",
    "format_run_report",
    "print_run_report",
]
