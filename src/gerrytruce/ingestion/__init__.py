"""Ingestion layer.

This package contains adapters that turn static source tables (district
leans, state summaries, district vote totals) into normalized snapshots.
"""

__all__: list[str] = []
