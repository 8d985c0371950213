"""SOS event model."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Float
from sqlalchemy.orm import Mapped, mapped_column

from emergency_sos.db.base import Base, UTCDateTime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SosEvent(Base):
    """Location captured when the SOS button was pressed. Never updated or deleted."""

    __tablename__ = "sos_events"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    lat: Mapped[float] = mapped_column(Float, nullable=False)
    lng: Mapped[float] = mapped_column(Float, nullable=False)
    time: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=_utcnow,
        index=True,
        nullable=False,
    )
