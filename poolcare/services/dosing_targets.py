from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger("poolcare.dosing")


@dataclass(frozen=True)
class ChemistryTargetRange:
    min: float
    max: float

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def as_pair(self) -> list[float]:
        return [self.min, self.max]


@dataclass(frozen=True)
class TargetProfile:
    ph: ChemistryTargetRange
    chlorine_free: ChemistryTargetRange
    alkalinity: ChemistryTargetRange
    calcium_hardness: ChemistryTargetRange
    cyanuric_acid: ChemistryTargetRange

    def as_dict(self) -> dict[str, list[float]]:
        return {key: getattr(self, attr).as_pair() for key, attr in TARGET_KEYS.items()}


# Stored profile key -> TargetProfile attribute.
TARGET_KEYS: dict[str, str] = {
    "ph": "ph",
    "chlorineFree": "chlorine_free",
    "alkalinity": "alkalinity",
    "calciumHardness": "calcium_hardness",
    "cyanuricAcid": "cyanuric_acid",
}

DEFAULT_TARGET_PROFILE = TargetProfile(
    ph=ChemistryTargetRange(7.2, 7.8),
    chlorine_free=ChemistryTargetRange(1.0, 3.0),
    alkalinity=ChemistryTargetRange(80, 120),
    calcium_hardness=ChemistryTargetRange(200, 400),
    cyanuric_acid=ChemistryTargetRange(30, 80),
)


class InvalidTargetProfile(ValueError):
    pass


def resolve_targets(raw: Any) -> TargetProfile:
    """Return the pool's custom profile, or the defaults if there is none.

    Custom profiles are all-or-nothing: a profile with any missing or malformed
    range is discarded in favour of the default table.
    """
    if raw is None:
        return DEFAULT_TARGET_PROFILE

    try:
        return parse_target_profile(raw)
    except InvalidTargetProfile as exc:
        logger.warning("Ignoring malformed pool targets, using defaults: %s", exc)
        return DEFAULT_TARGET_PROFILE


def parse_target_profile(raw: Any) -> TargetProfile:
    if not isinstance(raw, dict):
        raise InvalidTargetProfile(f"expected an object, got {type(raw).__name__}")

    ranges: dict[str, ChemistryTargetRange] = {}
    for key, attr in TARGET_KEYS.items():
        if key not in raw:
            raise InvalidTargetProfile(f"missing range for {key}")
        ranges[attr] = _parse_range(key, raw[key])

    return TargetProfile(**ranges)


def _parse_range(key: str, value: Any) -> ChemistryTargetRange:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise InvalidTargetProfile(f"{key} must be a [min, max] pair")

    low, high = value
    for bound in (low, high):
        # bool is an int subclass; true/false in stored JSON is not a bound.
        if isinstance(bound, bool) or not isinstance(bound, (int, float)) or not math.isfinite(bound):
            raise InvalidTargetProfile(f"{key} bounds must be finite numbers")

    if low > high:
        raise InvalidTargetProfile(f"{key} min {low} exceeds max {high}")

    return ChemistryTargetRange(float(low), float(high))
