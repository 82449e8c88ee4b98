import pytest

from poolcare.models.reading import Reading
from poolcare.services.chemistry_snapshot import ChemistrySnapshot, build_snapshot


@pytest.fixture
def reading() -> Reading:
    return Reading(
        id="reading-1",
        org_id="org-1",
        pool_id="pool-1",
        ph=7.9,
        chlorine_free=1.5,
        chlorine_total=1.8,
        alkalinity=60,
        calcium_hardness=None,
        cyanuric_acid=25,
    )


def test_request_values_override_reading(reading: Reading) -> None:
    snapshot = build_snapshot({"ph": 7.4, "alkalinity": 95}, reading)

    assert snapshot == ChemistrySnapshot(
        ph=7.4,
        chlorine_free=1.5,
        chlorine_total=1.8,
        alkalinity=95,
        calcium_hardness=None,
        cyanuric_acid=25,
    )


def test_explicit_zero_beats_stored_value(reading: Reading) -> None:
    snapshot = build_snapshot({"chlorine_free": 0.0, "cyanuric_acid": 0}, reading)

    assert snapshot.chlorine_free == 0.0
    assert snapshot.cyanuric_acid == 0.0


def test_none_override_falls_through_to_reading(reading: Reading) -> None:
    snapshot = build_snapshot({"ph": None}, reading)

    assert snapshot.ph == 7.9


def test_without_reading_only_request_values_are_present() -> None:
    snapshot = build_snapshot({"ph": 7.1}, None)

    assert snapshot.measured() == {"ph": 7.1}


def test_nothing_measured_gives_empty_snapshot() -> None:
    snapshot = build_snapshot({}, None)

    assert snapshot == ChemistrySnapshot()
    assert snapshot.measured() == {}
