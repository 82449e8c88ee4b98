from typing import Literal

from pydantic import Field

from poolcare.schemas.base import CamelModel
from poolcare.schemas.pool import ChemistryValues


class DosingSuggestRequest(ChemistryValues):
    pool_id: str = Field(min_length=1)
    reading_id: str | None = Field(default=None, min_length=1)


class DosingRecommendationRead(CamelModel):
    chemical: str
    qty: int
    unit: Literal["g", "ml"]
    purpose: str
    priority: Literal["high", "medium", "low"]
    warning: str | None = None


class ChemistrySnapshotRead(CamelModel):
    ph: float | None = None
    chlorine_free: float | None = None
    chlorine_total: float | None = None
    alkalinity: float | None = None
    calcium_hardness: float | None = None
    cyanuric_acid: float | None = None


class TargetProfileRead(CamelModel):
    ph: tuple[float, float]
    chlorine_free: tuple[float, float]
    alkalinity: tuple[float, float]
    calcium_hardness: tuple[float, float]
    cyanuric_acid: tuple[float, float]


class DosingSuggestionRead(CamelModel):
    recommendations: list[DosingRecommendationRead] = Field(default_factory=list)
    current: ChemistrySnapshotRead
    targets: TargetProfileRead
    pool_volume: float
