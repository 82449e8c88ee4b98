import logging

import pytest

from poolcare.services.dosing_targets import (
    DEFAULT_TARGET_PROFILE,
    ChemistryTargetRange,
    InvalidTargetProfile,
    parse_target_profile,
    resolve_targets,
)


@pytest.fixture
def custom_targets() -> dict[str, list[float]]:
    return {
        "ph": [7.4, 7.6],
        "chlorineFree": [2.0, 4.0],
        "alkalinity": [90, 110],
        "calciumHardness": [250, 350],
        "cyanuricAcid": [40, 60],
    }


def test_range_midpoint_and_membership() -> None:
    target_range = ChemistryTargetRange(80, 120)

    assert target_range.midpoint == 100
    assert target_range.contains(80)
    assert target_range.contains(120)
    assert not target_range.contains(79.9)
    assert not target_range.contains(120.1)


def test_missing_targets_use_default_table() -> None:
    profile = resolve_targets(None)

    assert profile == DEFAULT_TARGET_PROFILE
    assert profile.as_dict() == {
        "ph": [7.2, 7.8],
        "chlorineFree": [1.0, 3.0],
        "alkalinity": [80, 120],
        "calciumHardness": [200, 400],
        "cyanuricAcid": [30, 80],
    }


def test_valid_custom_profile_is_used_verbatim(custom_targets: dict[str, list[float]]) -> None:
    profile = resolve_targets(custom_targets)

    assert profile.as_dict() == custom_targets
    assert profile.chlorine_free.midpoint == 3.0


def test_extra_keys_do_not_invalidate_profile(custom_targets: dict[str, list[float]]) -> None:
    custom_targets["chlorineTotal"] = [1.0, 3.0]

    assert resolve_targets(custom_targets).ph == ChemistryTargetRange(7.4, 7.6)


@pytest.mark.parametrize(
    "mutate",
    [
        lambda targets: targets.pop("cyanuricAcid"),
        lambda targets: targets.update(ph=[7.8, 7.2]),
        lambda targets: targets.update(alkalinity=["80", 120]),
        lambda targets: targets.update(alkalinity=[True, 120]),
        lambda targets: targets.update(calciumHardness=[float("nan"), 400]),
        lambda targets: targets.update(chlorineFree=[1.0]),
        lambda targets: targets.update(chlorineFree=None),
    ],
)
def test_malformed_profile_falls_back_to_defaults(
    custom_targets: dict[str, list[float]],
    mutate,
    caplog: pytest.LogCaptureFixture,
) -> None:
    mutate(custom_targets)

    with caplog.at_level(logging.WARNING, logger="poolcare.dosing"):
        profile = resolve_targets(custom_targets)

    assert profile == DEFAULT_TARGET_PROFILE
    assert "malformed pool targets" in caplog.text


def test_non_object_profile_falls_back_to_defaults() -> None:
    assert resolve_targets([7.2, 7.8]) == DEFAULT_TARGET_PROFILE
    assert resolve_targets("default") == DEFAULT_TARGET_PROFILE


def test_parse_reports_reason() -> None:
    with pytest.raises(InvalidTargetProfile, match="missing range for ph"):
        parse_target_profile({})


def test_equal_bounds_are_allowed(custom_targets: dict[str, list[float]]) -> None:
    custom_targets["ph"] = [7.5, 7.5]

    assert resolve_targets(custom_targets).ph.midpoint == 7.5
