from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from poolcare.models.pool import Pool
from poolcare.models.reading import Reading
from poolcare.services.chemistry_snapshot import ChemistrySnapshot, build_snapshot
from poolcare.services.dosing_rules import DosingRecommendation, evaluate, sort_by_priority
from poolcare.services.dosing_targets import TargetProfile, resolve_targets

logger = logging.getLogger("poolcare.dosing")

DEFAULT_POOL_VOLUME_LITERS = 50000.0


@dataclass(frozen=True)
class DosingSuggestion:
    recommendations: tuple[DosingRecommendation, ...]
    current: ChemistrySnapshot
    targets: TargetProfile
    pool_volume_liters: float


def find_pool(db: Session, pool_id: str, org_id: str) -> Pool | None:
    return (
        db.query(Pool)
        .filter(
            Pool.id == pool_id,
            Pool.org_id == org_id,
        )
        .first()
    )


def find_reading(db: Session, reading_id: str, org_id: str) -> Reading | None:
    return (
        db.query(Reading)
        .filter(
            Reading.id == reading_id,
            Reading.org_id == org_id,
        )
        .first()
    )


def resolve_pool_volume(volume_l: float | None) -> float:
    if volume_l is None or volume_l <= 0:
        return DEFAULT_POOL_VOLUME_LITERS
    return float(volume_l)


def build_dosing_suggestion(
    *,
    pool_volume_l: float | None,
    pool_targets: Any,
    overrides: Mapping[str, float | None],
    reading: Reading | None,
) -> DosingSuggestion:
    targets = resolve_targets(pool_targets)
    volume_liters = resolve_pool_volume(pool_volume_l)
    current = build_snapshot(overrides, reading)

    recommendations = sort_by_priority(evaluate(current, targets, volume_liters))

    logger.debug(
        "Computed %d dosing recommendation(s) for %.0f L from %d measured parameter(s)",
        len(recommendations),
        volume_liters,
        len(current.measured()),
    )

    return DosingSuggestion(
        recommendations=tuple(recommendations),
        current=current,
        targets=targets,
        pool_volume_liters=volume_liters,
    )


def suggest_for_pool(
    db: Session,
    *,
    pool: Pool,
    org_id: str,
    reading_id: str | None,
    overrides: Mapping[str, float | None],
) -> DosingSuggestion:
    reading: Reading | None = None
    if reading_id:
        reading = find_reading(db, reading_id=reading_id, org_id=org_id)
        if reading is None:
            logger.info("Reading %s not found for org %s; using request values only", reading_id, org_id)

    return build_dosing_suggestion(
        pool_volume_l=pool.volume_l,
        pool_targets=pool.targets,
        overrides=overrides,
        reading=reading,
    )
