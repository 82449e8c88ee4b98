from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from sqlalchemy import JSON, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from poolcare.core.database import Base

if TYPE_CHECKING:
    from poolcare.models.organization import Organization
    from poolcare.models.reading import Reading


class Pool(Base):
    __tablename__ = "pools"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    org_id: Mapped[str] = mapped_column(ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)

    name: Mapped[str | None] = mapped_column(String(160), nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    volume_l: Mapped[float | None] = mapped_column(Float, nullable=True)
    surface_type: Mapped[str | None] = mapped_column(String(40), nullable=True)
    # Stored as submitted; validated when recommendations are computed.
    targets: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    notes: Mapped[str] = mapped_column(Text, default="", nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    organization: Mapped[Organization] = relationship(back_populates="pools")
    readings: Mapped[list[Reading]] = relationship(
        back_populates="pool",
        cascade="all, delete-orphan",
    )
