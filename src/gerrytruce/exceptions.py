"""Custom exception hierarchy for gerrytruce.

Data-quality problems (missing variants, malformed lean strings, seat-count
mismatches) are not exceptions: they are recorded as
:class:`gerrytruce.models.Diagnostic` entries. The classes below cover
situations where a snapshot cannot be built at all.
"""

from __future__ import annotations


class TruceError(Exception):
    """Base exception for all gerrytruce errors."""


class TruceConfigError(TruceError):
    """Invalid or missing configuration."""

    def __init__(self, message: str, *, field: str = "") -> None:
        self.field = field
        super().__init__(message)


class TruceDataError(TruceError):
    """Input rows are structurally unusable (e.g. a state row without an id)."""

    def __init__(self, message: str, *, row: int | None = None) -> None:
        self.row = row
        super().__init__(message)
