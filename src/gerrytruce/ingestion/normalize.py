"""Normalization helpers.

Centralizes parsing of source-table cells. Every helper returns
``None`` (or the supplied default) for blank or unparseable input instead of
raising; callers decide whether the gap is worth a diagnostic.
"""

from __future__ import annotations

import math
import re
from typing import Any

_PLACEHOLDERS = frozenset({"", "--", "n/a", "na", "nan"})
_TRUE = frozenset({"1", "true", "yes", "y", "on", "t"})
_FALSE = frozenset({"0", "false", "no", "n", "off", "f"})

_LEAN_RE = re.compile(r"^([RD])\s*\+\s*(\d+)$")
_DISTRICT_KEY_RE = re.compile(r"^([A-Za-z]{2})\s*-\s*(\w+)$")


def _is_placeholder(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip().lower() in _PLACEHOLDERS)


def safe_float(value: Any) -> float | None:
    if _is_placeholder(value):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def safe_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if _is_placeholder(value):
        return default
    if isinstance(value, (int, float)):
        return bool(value)
    normalized = str(value).strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    return default


def parse_lean(value: Any) -> int | None:
    """Parse a lean cell into a signed integer (positive = Republican).

    Accepted encodings:

    - ``"R+<n>"`` → ``n``; ``"D+<n>"`` → ``-n`` (case-insensitive)
    - ``"EVEN"`` → ``0``
    - a plain signed number (alternate-map tables) → rounded ``int``

    Returns ``None`` when the value does not parse, so the caller can record
    the problem before falling back to an even lean.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return None
        return int(round(value))

    text = str(value).strip().upper()
    if not text:
        return None
    if text == "EVEN":
        return 0
    match = _LEAN_RE.match(text)
    if match:
        magnitude = int(match.group(2))
        return magnitude if match.group(1) == "R" else -magnitude
    number = safe_float(text)
    if number is None:
        return None
    return int(round(number))


def format_lean(lean: int | float) -> str:
    """Inverse of :func:`parse_lean` for display: ``7`` → ``"R+7"``."""
    if lean == 0:
        return "EVEN"
    party = "R" if lean > 0 else "D"
    return f"{party}+{abs(lean):.0f}"


def split_district_key(value: Any) -> tuple[str, str] | None:
    """Split ``"STATE-NN"`` into ``("STATE", "NN")``.

    At-large keys such as ``"AK-AL"`` keep their suffix verbatim. Returns
    ``None`` when the key has no two-letter state prefix.
    """
    if value is None:
        return None
    match = _DISTRICT_KEY_RE.match(str(value).strip())
    if not match:
        return None
    return match.group(1).upper(), match.group(2).upper()
