"""Internal constants shared across the library."""

SAFE_SEAT_THRESHOLD = 8
TOTAL_SEATS = 435
MAJORITY = 218

# Comparison slack for ratio tolerances expressed as floats.
FLOAT_EPSILON = 1e-9

# ------------------------------------------------------------------
# State grouping by district count
# ------------------------------------------------------------------

BIG_STATE_MIN_DISTRICTS = 24
SINGLE_DISTRICT = 1

# ------------------------------------------------------------------
# Zero-lean column assignment
# ------------------------------------------------------------------

# States that round to an exactly even partisan lean are pinned to a column
# so they do not hop sides whenever the summary table is refreshed.
ZERO_LEAN_SIDES: dict[str, str] = {
    "MI": "right",
    "WI": "right",
}
