from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from poolcare.services.chemistry_snapshot import ChemistrySnapshot
from poolcare.services.dosing_targets import TargetProfile


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK: dict[Priority, int] = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}


@dataclass(frozen=True)
class DosingRecommendation:
    chemical: str
    qty: int
    unit: str
    purpose: str
    priority: Priority
    warning: str | None = None


Rule = Callable[[ChemistrySnapshot, TargetProfile, float], DosingRecommendation | None]

PH_DEADBAND = 0.2
CHLORINE_DEADBAND = 0.5
ALKALINITY_DEADBAND = 20
CALCIUM_DEADBAND = 50


def soda_ash_grams(ph_diff: float, volume_liters: float) -> int:
    # 100 g per 10 kL raises pH by 0.2
    return _round_dose((ph_diff / 0.2) * (volume_liters / 10000) * 100)


def muriatic_acid_ml_for_ph(ph_diff: float, volume_liters: float) -> int:
    # 150 ml per 10 kL lowers pH by 0.2
    return _round_dose((ph_diff / 0.2) * (volume_liters / 10000) * 150)


def liquid_chlorine_ml(ppm_diff: float, volume_liters: float) -> int:
    # 1 ml of 10% hypochlorite per 1 kL raises FC by ~0.1 ppm
    return _round_dose((ppm_diff / 0.1) * (volume_liters / 1000))


def sodium_bicarbonate_grams(ppm_diff: float, volume_liters: float) -> int:
    # 15 g per 10 kL raises TA by 10 ppm
    return _round_dose((ppm_diff / 10) * (volume_liters / 10000) * 15)


def muriatic_acid_ml_for_alkalinity(ppm_diff: float, volume_liters: float) -> int:
    # 150 ml per 10 kL lowers TA by 10 ppm
    return _round_dose((ppm_diff / 10) * (volume_liters / 10000) * 150)


def calcium_chloride_grams(ppm_diff: float, volume_liters: float) -> int:
    # 10 g per 10 kL raises CH by 10 ppm
    return _round_dose((ppm_diff / 10) * (volume_liters / 10000) * 10)


def cyanuric_acid_grams(ppm_diff: float, volume_liters: float) -> int:
    # 10 g per 10 kL raises CYA by 10 ppm
    return _round_dose((ppm_diff / 10) * (volume_liters / 10000) * 10)


def ph_rule(snapshot: ChemistrySnapshot, targets: TargetProfile, volume_liters: float) -> DosingRecommendation | None:
    ph = snapshot.ph
    if ph is None or targets.ph.contains(ph):
        return None

    target_ph = targets.ph.midpoint
    diff = _gap(target_ph, ph)

    if diff > PH_DEADBAND:
        return DosingRecommendation(
            chemical="Soda Ash (Sodium Carbonate)",
            qty=soda_ash_grams(diff, volume_liters),
            unit="g",
            purpose=f"Raise pH from {ph:.2f} to {target_ph:.2f}",
            priority=Priority.HIGH if ph < 7.0 else Priority.MEDIUM,
        )
    if diff < -PH_DEADBAND:
        return DosingRecommendation(
            chemical="Muriatic Acid (31% HCl)",
            qty=muriatic_acid_ml_for_ph(abs(diff), volume_liters),
            unit="ml",
            purpose=f"Lower pH from {ph:.2f} to {target_ph:.2f}",
            priority=Priority.HIGH if ph > 8.0 else Priority.MEDIUM,
            warning="Add slowly to deep end, never mix with chlorine",
        )
    return None


def free_chlorine_rule(
    snapshot: ChemistrySnapshot,
    targets: TargetProfile,
    volume_liters: float,
) -> DosingRecommendation | None:
    # Checked against the midpoint only, so a low-but-in-range reading is still topped up.
    chlorine_free = snapshot.chlorine_free
    if chlorine_free is None:
        return None

    target_fc = targets.chlorine_free.midpoint
    diff = _gap(target_fc, chlorine_free)
    if diff <= CHLORINE_DEADBAND:
        return None

    return DosingRecommendation(
        chemical="Liquid Chlorine (10-12% Sodium Hypochlorite)",
        qty=liquid_chlorine_ml(diff, volume_liters),
        unit="ml",
        purpose=f"Raise Free Chlorine from {chlorine_free:.2f} ppm to {target_fc:.2f} ppm",
        priority=Priority.HIGH if chlorine_free < 0.5 else Priority.MEDIUM,
    )


def alkalinity_rule(
    snapshot: ChemistrySnapshot,
    targets: TargetProfile,
    volume_liters: float,
) -> DosingRecommendation | None:
    alkalinity = snapshot.alkalinity
    if alkalinity is None or targets.alkalinity.contains(alkalinity):
        return None

    target_ta = targets.alkalinity.midpoint
    diff = _gap(target_ta, alkalinity)
    if abs(diff) <= ALKALINITY_DEADBAND:
        return None

    if diff > 0:
        return DosingRecommendation(
            chemical="Sodium Bicarbonate (Baking Soda)",
            qty=sodium_bicarbonate_grams(diff, volume_liters),
            unit="g",
            purpose=f"Raise Total Alkalinity from {_ppm(alkalinity)} ppm to {_ppm(target_ta)} ppm",
            priority=Priority.MEDIUM,
        )
    return DosingRecommendation(
        chemical="Muriatic Acid",
        qty=muriatic_acid_ml_for_alkalinity(abs(diff), volume_liters),
        unit="ml",
        purpose=f"Lower Total Alkalinity from {_ppm(alkalinity)} ppm to {_ppm(target_ta)} ppm",
        priority=Priority.LOW,
        warning="Lower TA gradually over several days",
    )


def calcium_hardness_rule(
    snapshot: ChemistrySnapshot,
    targets: TargetProfile,
    volume_liters: float,
) -> DosingRecommendation | None:
    # Raise only; there is no additive that lowers calcium.
    calcium = snapshot.calcium_hardness
    if calcium is None or targets.calcium_hardness.contains(calcium):
        return None

    target_ch = targets.calcium_hardness.midpoint
    diff = _gap(target_ch, calcium)
    if diff <= CALCIUM_DEADBAND:
        return None

    return DosingRecommendation(
        chemical="Calcium Chloride",
        qty=calcium_chloride_grams(diff, volume_liters),
        unit="g",
        purpose=f"Raise Calcium Hardness from {_ppm(calcium)} ppm to {_ppm(target_ch)} ppm",
        priority=Priority.HIGH if calcium < 100 else Priority.LOW,
    )


def cyanuric_acid_rule(
    snapshot: ChemistrySnapshot,
    targets: TargetProfile,
    volume_liters: float,
) -> DosingRecommendation | None:
    # Raise only, and only up to the bottom of the range.
    cyanuric_acid = snapshot.cyanuric_acid
    if cyanuric_acid is None or cyanuric_acid >= targets.cyanuric_acid.min:
        return None

    target_cya = targets.cyanuric_acid.min
    diff = target_cya - cyanuric_acid

    return DosingRecommendation(
        chemical="Cyanuric Acid (Stabilizer)",
        qty=cyanuric_acid_grams(diff, volume_liters),
        unit="g",
        purpose=f"Raise Cyanuric Acid from {_ppm(cyanuric_acid)} ppm to {_ppm(target_cya)} ppm",
        priority=Priority.MEDIUM if cyanuric_acid < 20 else Priority.LOW,
        warning="Dissolve in bucket first, add to skimmer",
    )


# Evaluation order is the tie-break order within a priority tier.
RULES: tuple[Rule, ...] = (
    ph_rule,
    free_chlorine_rule,
    alkalinity_rule,
    calcium_hardness_rule,
    cyanuric_acid_rule,
)


def evaluate(snapshot: ChemistrySnapshot, targets: TargetProfile, volume_liters: float) -> list[DosingRecommendation]:
    recommendations: list[DosingRecommendation] = []
    for rule in RULES:
        recommendation = rule(snapshot, targets, volume_liters)
        if recommendation is not None:
            recommendations.append(recommendation)
    return recommendations


def sort_by_priority(recommendations: list[DosingRecommendation]) -> list[DosingRecommendation]:
    # sorted() is stable, so equal priorities keep rule order.
    return sorted(recommendations, key=lambda item: item.priority.rank)


def _round_dose(value: float) -> int:
    # Half-up; round() would send 2.5 to 2.
    return math.floor(value + 0.5)


def _ppm(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _gap(target: float, value: float) -> float:
    # 7.5 - 7.7 is -0.20000000000000018; thresholds compare against the decimal gap.
    return round(target - value, 10)
