from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import DateTime, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from poolcare.core.database import Base

if TYPE_CHECKING:
    from poolcare.models.pool import Pool


class Reading(Base):
    __tablename__ = "readings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    org_id: Mapped[str] = mapped_column(ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    pool_id: Mapped[str] = mapped_column(ForeignKey("pools.id", ondelete="CASCADE"), nullable=False, index=True)

    ph: Mapped[float | None] = mapped_column(Float, nullable=True)
    chlorine_free: Mapped[float | None] = mapped_column(Float, nullable=True)
    chlorine_total: Mapped[float | None] = mapped_column(Float, nullable=True)
    alkalinity: Mapped[float | None] = mapped_column(Float, nullable=True)
    calcium_hardness: Mapped[float | None] = mapped_column(Float, nullable=True)
    cyanuric_acid: Mapped[float | None] = mapped_column(Float, nullable=True)
    temp_c: Mapped[float | None] = mapped_column(Float, nullable=True)

    measured_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    pool: Mapped[Pool] = relationship(back_populates="readings")
