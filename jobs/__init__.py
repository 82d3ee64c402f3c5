# PATH: jobs/__init__.py
"""
POOLSCAN jobs package.

Available entry points:
    python -m jobs.run_engines    # Run engines over one snapshot file

NOTE: This __init__.py does NOT import run_engines, so importing the
package has no side effects. Import it directly when needed:

    from jobs.run_engines import load_snapshot_file, build_orchestrator
"""

__all__: list[str] = []
