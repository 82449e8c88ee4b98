import pytest

from poolcare.services.chemistry_snapshot import ChemistrySnapshot
from poolcare.services.dosing_rules import (
    DosingRecommendation,
    Priority,
    alkalinity_rule,
    calcium_hardness_rule,
    cyanuric_acid_grams,
    cyanuric_acid_rule,
    evaluate,
    free_chlorine_rule,
    ph_rule,
    sort_by_priority,
)
from poolcare.services.dosing_targets import DEFAULT_TARGET_PROFILE, resolve_targets

VOLUME = 50000.0


def _recommend(**values: float) -> list[DosingRecommendation]:
    snapshot = ChemistrySnapshot(**values)
    return sort_by_priority(evaluate(snapshot, DEFAULT_TARGET_PROFILE, VOLUME))


def test_low_ph_and_low_chlorine_scenario() -> None:
    recommendations = _recommend(ph=6.5, chlorine_free=0.2)

    assert recommendations == [
        DosingRecommendation(
            chemical="Soda Ash (Sodium Carbonate)",
            qty=2500,
            unit="g",
            purpose="Raise pH from 6.50 to 7.50",
            priority=Priority.HIGH,
        ),
        DosingRecommendation(
            chemical="Liquid Chlorine (10-12% Sodium Hypochlorite)",
            qty=900,
            unit="ml",
            purpose="Raise Free Chlorine from 0.20 ppm to 2.00 ppm",
            priority=Priority.HIGH,
        ),
    ]


def test_high_ph_uses_acid_with_warning() -> None:
    (recommendation,) = _recommend(ph=8.2)

    assert recommendation.chemical == "Muriatic Acid (31% HCl)"
    assert recommendation.unit == "ml"
    assert recommendation.qty == 2625
    assert recommendation.priority is Priority.HIGH
    assert recommendation.warning == "Add slowly to deep end, never mix with chlorine"


def test_moderately_high_ph_is_medium_priority() -> None:
    (recommendation,) = _recommend(ph=7.9)

    assert recommendation.qty == 1500
    assert recommendation.priority is Priority.MEDIUM


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("ph", 7.2),
        ("ph", 7.8),
        ("chlorine_free", 3.0),
        ("alkalinity", 80),
        ("alkalinity", 120),
        ("calcium_hardness", 200),
        ("calcium_hardness", 400),
        ("cyanuric_acid", 30),
        ("cyanuric_acid", 80),
    ],
)
def test_range_boundaries_never_trigger(field: str, value: float) -> None:
    assert _recommend(**{field: value}) == []


def test_ph_deadband_around_midpoint() -> None:
    targets = resolve_targets(
        {
            "ph": [7.4, 7.6],
            "chlorineFree": [1.0, 3.0],
            "alkalinity": [80, 120],
            "calciumHardness": [200, 400],
            "cyanuricAcid": [30, 80],
        }
    )

    # Out of range but within 0.2 of the 7.5 midpoint.
    assert ph_rule(ChemistrySnapshot(ph=7.35), targets, VOLUME) is None
    assert ph_rule(ChemistrySnapshot(ph=7.65), targets, VOLUME) is None
    # Exactly 0.2 away is still inside the deadband.
    assert ph_rule(ChemistrySnapshot(ph=7.3), targets, VOLUME) is None
    assert ph_rule(ChemistrySnapshot(ph=7.7), targets, VOLUME) is None

    raise_ph = ph_rule(ChemistrySnapshot(ph=7.25), targets, 10000)
    lower_ph = ph_rule(ChemistrySnapshot(ph=7.75), targets, 10000)
    assert raise_ph is not None and raise_ph.chemical.startswith("Soda Ash")
    assert raise_ph.qty == 125
    assert lower_ph is not None and lower_ph.chemical.startswith("Muriatic Acid")


def test_free_chlorine_tops_up_inside_range() -> None:
    recommendation = free_chlorine_rule(ChemistrySnapshot(chlorine_free=1.2), DEFAULT_TARGET_PROFILE, VOLUME)

    assert recommendation is not None
    assert recommendation.priority is Priority.MEDIUM
    assert recommendation.qty == 400


def test_free_chlorine_close_to_midpoint_is_left_alone() -> None:
    assert free_chlorine_rule(ChemistrySnapshot(chlorine_free=1.6), DEFAULT_TARGET_PROFILE, VOLUME) is None
    assert free_chlorine_rule(ChemistrySnapshot(chlorine_free=4.5), DEFAULT_TARGET_PROFILE, VOLUME) is None


def test_low_alkalinity_raised_with_bicarbonate() -> None:
    recommendation = alkalinity_rule(ChemistrySnapshot(alkalinity=60), DEFAULT_TARGET_PROFILE, VOLUME)

    assert recommendation == DosingRecommendation(
        chemical="Sodium Bicarbonate (Baking Soda)",
        qty=300,
        unit="g",
        purpose="Raise Total Alkalinity from 60 ppm to 100 ppm",
        priority=Priority.MEDIUM,
    )


def test_high_alkalinity_lowered_gradually() -> None:
    recommendation = alkalinity_rule(ChemistrySnapshot(alkalinity=200), DEFAULT_TARGET_PROFILE, VOLUME)

    assert recommendation is not None
    assert recommendation.chemical == "Muriatic Acid"
    assert recommendation.qty == 7500
    assert recommendation.priority is Priority.LOW
    assert recommendation.warning == "Lower TA gradually over several days"
    assert recommendation.purpose == "Lower Total Alkalinity from 200 ppm to 100 ppm"


def test_alkalinity_within_twenty_ppm_of_midpoint_is_ignored() -> None:
    targets = resolve_targets(
        {
            "ph": [7.2, 7.8],
            "chlorineFree": [1.0, 3.0],
            "alkalinity": [95, 105],
            "calciumHardness": [200, 400],
            "cyanuricAcid": [30, 80],
        }
    )

    assert alkalinity_rule(ChemistrySnapshot(alkalinity=85), targets, VOLUME) is None
    assert alkalinity_rule(ChemistrySnapshot(alkalinity=115), targets, VOLUME) is None


def test_fractional_bounds_keep_deadband_edges_inclusive() -> None:
    targets = resolve_targets(
        {
            "ph": [7.2, 7.8],
            "chlorineFree": [1.0, 3.0],
            "alkalinity": [100.1, 100.3],
            "calciumHardness": [200.1, 200.3],
            "cyanuricAcid": [30, 80],
        }
    )

    assert alkalinity_rule(ChemistrySnapshot(alkalinity=120.2), targets, VOLUME) is None
    assert alkalinity_rule(ChemistrySnapshot(alkalinity=80.2), targets, VOLUME) is None
    assert calcium_hardness_rule(ChemistrySnapshot(calcium_hardness=150.2), targets, VOLUME) is None
    assert calcium_hardness_rule(ChemistrySnapshot(calcium_hardness=150.1), targets, VOLUME) is not None


def test_calcium_hardness_is_only_ever_raised() -> None:
    assert calcium_hardness_rule(ChemistrySnapshot(calcium_hardness=600), DEFAULT_TARGET_PROFILE, VOLUME) is None

    recommendation = calcium_hardness_rule(ChemistrySnapshot(calcium_hardness=180), DEFAULT_TARGET_PROFILE, VOLUME)
    assert recommendation is not None
    assert recommendation.chemical == "Calcium Chloride"
    assert recommendation.qty == 600
    assert recommendation.priority is Priority.LOW


def test_very_soft_water_is_high_priority() -> None:
    recommendation = calcium_hardness_rule(ChemistrySnapshot(calcium_hardness=50), DEFAULT_TARGET_PROFILE, VOLUME)

    assert recommendation is not None
    assert recommendation.priority is Priority.HIGH


def test_cyanuric_acid_raised_to_range_minimum() -> None:
    recommendation = cyanuric_acid_rule(ChemistrySnapshot(cyanuric_acid=10), DEFAULT_TARGET_PROFILE, VOLUME)

    assert recommendation == DosingRecommendation(
        chemical="Cyanuric Acid (Stabilizer)",
        qty=100,
        unit="g",
        purpose="Raise Cyanuric Acid from 10 ppm to 30 ppm",
        priority=Priority.MEDIUM,
        warning="Dissolve in bucket first, add to skimmer",
    )


def test_cyanuric_acid_excess_and_near_minimum() -> None:
    assert cyanuric_acid_rule(ChemistrySnapshot(cyanuric_acid=150), DEFAULT_TARGET_PROFILE, VOLUME) is None

    recommendation = cyanuric_acid_rule(ChemistrySnapshot(cyanuric_acid=25), DEFAULT_TARGET_PROFILE, VOLUME)
    assert recommendation is not None
    assert recommendation.priority is Priority.LOW


def test_total_chlorine_is_informational() -> None:
    assert _recommend(chlorine_total=0.0) == []


def test_doses_round_half_up() -> None:
    assert cyanuric_acid_grams(5, 5000) == 3


def test_doses_scale_linearly_with_volume() -> None:
    values = {
        "ph": 6.5,
        "chlorine_free": 0.2,
        "alkalinity": 60,
        "calcium_hardness": 150,
        "cyanuric_acid": 10,
    }
    snapshot = ChemistrySnapshot(**values)

    single = evaluate(snapshot, DEFAULT_TARGET_PROFILE, 50000)
    double = evaluate(snapshot, DEFAULT_TARGET_PROFILE, 100000)

    assert [item.qty for item in single] == [2500, 900, 300, 750, 100]
    assert [item.qty for item in double] == [2 * item.qty for item in single]


def test_equal_priorities_keep_rule_order() -> None:
    recommendations = _recommend(
        ph=7.9,
        chlorine_free=1.2,
        alkalinity=60,
        calcium_hardness=150,
        cyanuric_acid=10,
    )

    assert [(item.chemical, item.priority) for item in recommendations] == [
        ("Muriatic Acid (31% HCl)", Priority.MEDIUM),
        ("Liquid Chlorine (10-12% Sodium Hypochlorite)", Priority.MEDIUM),
        ("Sodium Bicarbonate (Baking Soda)", Priority.MEDIUM),
        ("Cyanuric Acid (Stabilizer)", Priority.MEDIUM),
        ("Calcium Chloride", Priority.LOW),
    ]


def test_high_priority_sorted_ahead_of_earlier_rules() -> None:
    recommendations = _recommend(ph=7.9, alkalinity=200, calcium_hardness=50)

    assert [item.chemical for item in recommendations] == [
        "Calcium Chloride",
        "Muriatic Acid (31% HCl)",
        "Muriatic Acid",
    ]


def test_priority_ranks() -> None:
    assert [priority.rank for priority in (Priority.HIGH, Priority.MEDIUM, Priority.LOW)] == [0, 1, 2]
