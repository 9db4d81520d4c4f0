"""Engine configuration for gerrytruce."""

from __future__ import annotations

import dataclasses
import enum
import os
from typing import Any, TypeVar

from gerrytruce._constants import SAFE_SEAT_THRESHOLD
from gerrytruce.exceptions import TruceConfigError
from gerrytruce.matching.policy import POLICIES
from gerrytruce.models.state import DistrictEra, LeanSign, MapVariant
from gerrytruce.truce.selection import SelectionMode

TEnum = TypeVar("TEnum", bound=enum.Enum)


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _coerce_enum(enum_cls: type[TEnum], value: Any, field_name: str) -> TEnum:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError as exc:
        choices = ", ".join(str(member.value) for member in enum_cls)
        raise TruceConfigError(f"invalid {field_name} {value!r}; expected one of: {choices}", field=field_name) from exc


@dataclasses.dataclass(frozen=True)
class TruceConfig:
    """Engine configuration.

    Parameters
    ----------
    alternate_variant : MapVariant
        The hypothetical map matched states switch to (``proportional``,
        ``competitive`` or ``compact``). Defaults to proportional.
    district_era : DistrictEra
        Apportionment era for district counts used by matching and layout.
    match_policy : str
        Registered match policy name (``balance_delta`` or
        ``efficiency_gap``).
    pair_selection : SelectionMode
        Whether a state may belong to one (``exclusive``) or several
        (``multi``) selected pairs.
    safe_seat_threshold : int
        Lean magnitude at or above which a district is safe.
    require_shared_veto : bool
        Only match states where the governor can veto in both.
    require_shared_ballot : bool
        Only match states that both allow ballot initiatives.
    state_lean_sign : LeanSign
        Sign convention of the state table's partisan-lean column.
        Defaults to ``d_positive`` (Cook-PVI tables, positive = Democratic).
    """

    alternate_variant: MapVariant = MapVariant.PROPORTIONAL
    district_era: DistrictEra = DistrictEra.CURRENT
    match_policy: str = "balance_delta"
    pair_selection: SelectionMode = SelectionMode.EXCLUSIVE
    safe_seat_threshold: int = SAFE_SEAT_THRESHOLD
    require_shared_veto: bool = False
    require_shared_ballot: bool = False
    state_lean_sign: LeanSign = LeanSign.DEMOCRATIC_POSITIVE

    def __post_init__(self) -> None:
        # Accept plain strings (e.g. from env or JSON) for enum fields.
        object.__setattr__(
            self, "alternate_variant", _coerce_enum(MapVariant, self.alternate_variant, "alternate_variant")
        )
        object.__setattr__(self, "district_era", _coerce_enum(DistrictEra, self.district_era, "district_era"))
        object.__setattr__(
            self, "pair_selection", _coerce_enum(SelectionMode, self.pair_selection, "pair_selection")
        )
        object.__setattr__(
            self, "state_lean_sign", _coerce_enum(LeanSign, self.state_lean_sign, "state_lean_sign")
        )
        if not self.alternate_variant.is_alternate:
            raise TruceConfigError("alternate_variant must not be the enacted map", field="alternate_variant")
        if self.match_policy not in POLICIES:
            raise TruceConfigError(
                f"unknown match policy {self.match_policy!r}; expected one of {sorted(POLICIES)}",
                field="match_policy",
            )
        if self.safe_seat_threshold <= 0:
            raise TruceConfigError("safe_seat_threshold must be positive", field="safe_seat_threshold")

    @classmethod
    def from_env(cls, **overrides: Any) -> TruceConfig:
        """Create configuration from environment variables.

        Reads optional ``TRUCE_*`` variables. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        TruceConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "TRUCE_ALTERNATE_VARIANT": "alternate_variant",
            "TRUCE_DISTRICT_ERA": "district_era",
            "TRUCE_MATCH_POLICY": "match_policy",
            "TRUCE_PAIR_SELECTION": "pair_selection",
            "TRUCE_STATE_LEAN_SIGN": "state_lean_sign",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val.strip().lower()

        # threshold is numeric, handle separately
        threshold_env = env.get("TRUCE_SAFE_SEAT_THRESHOLD")
        if threshold_env is not None and "safe_seat_threshold" not in overrides:
            try:
                config_kwargs["safe_seat_threshold"] = int(threshold_env)
            except ValueError as exc:
                raise TruceConfigError(
                    f"TRUCE_SAFE_SEAT_THRESHOLD must be an integer, got {threshold_env!r}",
                    field="safe_seat_threshold",
                ) from exc

        if "require_shared_veto" not in overrides:
            config_kwargs["require_shared_veto"] = _env_bool(env.get("TRUCE_REQUIRE_SHARED_VETO"), False)
        if "require_shared_ballot" not in overrides:
            config_kwargs["require_shared_ballot"] = _env_bool(env.get("TRUCE_REQUIRE_SHARED_BALLOT"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
