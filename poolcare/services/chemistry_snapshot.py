from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass

from poolcare.models.reading import Reading

CHEMISTRY_FIELDS: tuple[str, ...] = (
    "ph",
    "chlorine_free",
    "chlorine_total",
    "alkalinity",
    "calcium_hardness",
    "cyanuric_acid",
)


@dataclass(frozen=True)
class ChemistrySnapshot:
    ph: float | None = None
    chlorine_free: float | None = None
    chlorine_total: float | None = None
    alkalinity: float | None = None
    calcium_hardness: float | None = None
    cyanuric_acid: float | None = None

    def measured(self) -> dict[str, float]:
        return {key: value for key, value in asdict(self).items() if value is not None}


def build_snapshot(
    overrides: Mapping[str, float | None],
    latest_reading: Reading | None,
) -> ChemistrySnapshot:
    """Merge request values over the stored reading, one parameter at a time.

    An explicit value always wins, including ``0``; the reading only fills
    parameters the request left out.
    """
    values: dict[str, float | None] = {}
    for field in CHEMISTRY_FIELDS:
        value = overrides.get(field)
        if value is None and latest_reading is not None:
            value = getattr(latest_reading, field, None)
        values[field] = float(value) if value is not None else None

    return ChemistrySnapshot(**values)
