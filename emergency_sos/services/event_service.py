"""Append-only SOS event store."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from emergency_sos.core.errors import PersistenceError
from emergency_sos.models.sos_event import SosEvent
from emergency_sos.services.geo_service import coerce_lat_lng

logger = logging.getLogger(__name__)


def append_event(db: Session, lat: Any, lng: Any) -> SosEvent:
    """Validate coordinates, stamp the server time and persist a new event."""
    lat_f, lng_f = coerce_lat_lng(lat, lng)
    event = SosEvent(lat=lat_f, lng=lng_f)
    try:
        db.add(event)
        db.commit()
        db.refresh(event)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to save SOS event")
        raise PersistenceError("Failed to save SOS event") from exc
    logger.info("SOS event %s saved at %s,%s", event.id, lat_f, lng_f)
    return event


def list_recent_events(db: Session, limit: int = 20) -> list[SosEvent]:
    """Most recent SOS events, newest first."""
    try:
        result = db.execute(select(SosEvent).order_by(SosEvent.time.desc(), SosEvent.id.desc()).limit(limit))
        return list(result.scalars().all())
    except SQLAlchemyError as exc:
        logger.exception("Failed to fetch SOS events")
        raise PersistenceError("Failed to fetch SOS events") from exc
