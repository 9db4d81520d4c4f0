"""Seat-count store.

This package is the single owner of per-state, per-variant seat counts.
"""

from gerrytruce.store.store import AggregateStore

__all__ = ["AggregateStore"]
