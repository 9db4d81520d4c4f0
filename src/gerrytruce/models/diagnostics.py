"""Data-quality diagnostics recorded during ingestion and store construction."""

from __future__ import annotations

import enum

from gerrytruce.models._base import TruceBaseModel


class DiagnosticKind(enum.StrEnum):
    MISSING_DATA = "missing_data"
    """A (state, variant) pair has no entry."""
    MALFORMED_INPUT = "malformed_input"
    """A lean encoding did not parse and was treated as even."""
    INVARIANT_VIOLATION = "invariant_violation"
    """A bucket sum differs from the state's official district count."""


class Diagnostic(TruceBaseModel):
    """A recovered data-quality problem, kept for review."""

    kind: DiagnosticKind
    message: str
    state_id: str | None = None
    variant: str | None = None
    source: str | None = None
    """Offending raw value or row key, when there is one."""
