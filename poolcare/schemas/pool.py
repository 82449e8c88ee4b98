from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field

from poolcare.schemas.base import CamelModel


class ChemistryValues(CamelModel):
    ph: float | None = Field(default=None, ge=6.2, le=8.6)
    chlorine_free: float | None = Field(default=None, ge=0, le=10)
    chlorine_total: float | None = Field(default=None, ge=0, le=10)
    alkalinity: float | None = Field(default=None, ge=40, le=240)
    calcium_hardness: float | None = Field(default=None, ge=100, le=600)
    cyanuric_acid: float | None = Field(default=None, ge=0, le=120)


class PoolBase(CamelModel):
    name: str | None = Field(default=None, max_length=160)
    address: str | None = Field(default=None, max_length=255)
    volume_l: float | None = Field(default=None, gt=0)
    surface_type: str | None = Field(default=None, max_length=40)
    targets: dict[str, Any] | None = None
    notes: str = ""


class PoolCreate(PoolBase):
    pass


class PoolUpdate(CamelModel):
    name: str | None = Field(default=None, max_length=160)
    address: str | None = Field(default=None, max_length=255)
    volume_l: float | None = Field(default=None, gt=0)
    surface_type: str | None = Field(default=None, max_length=40)
    targets: dict[str, Any] | None = None
    notes: str | None = None


class PoolRead(PoolBase):
    id: str
    org_id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReadingCreate(ChemistryValues):
    temp_c: float | None = Field(default=None, ge=5, le=45)
    measured_at: datetime | None = None


class ReadingRead(ChemistryValues):
    id: str
    pool_id: str
    temp_c: float | None
    measured_at: datetime
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
