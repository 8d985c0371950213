"""SOS orchestration: persist the event, resolve recipients, fan out."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from emergency_sos.models.sos_event import SosEvent
from emergency_sos.schemas.sos import NotificationOutcome, NotificationStatus
from emergency_sos.services.contact_service import list_contacts
from emergency_sos.services.event_service import append_event
from emergency_sos.services.geo_service import build_map_link, coerce_lat_lng
from emergency_sos.services.notifier import notify_recipients
from emergency_sos.services.sms_transport import SmsTransport

logger = logging.getLogger(__name__)


@dataclass
class SosDispatch:
    """Result of one SOS submission."""

    event: SosEvent
    outcomes: list[NotificationOutcome]
    map_link: str


def resolve_recipients(db: Session, explicit: Sequence[Any] | None) -> list[Any]:
    """Use the explicit list when non-empty, otherwise every stored contact."""
    if explicit:
        return list(explicit)
    return list(list_contacts(db))


def handle_sos(
    db: Session,
    lat: Any,
    lng: Any,
    recipients: Sequence[Any] | None = None,
    transport: SmsTransport | None = None,
) -> SosDispatch:
    """Record an SOS and notify its recipients.

    Invalid coordinates raise ValidationError before anything is written.
    Individual SMS failures are reported in the outcomes, never raised.
    """
    lat_f, lng_f = coerce_lat_lng(lat, lng)
    logger.info("SOS received at %s,%s", lat_f, lng_f)

    event = append_event(db, lat_f, lng_f)
    resolved = resolve_recipients(db, recipients)
    outcomes = notify_recipients(event.lat, event.lng, resolved, transport)

    failed = sum(1 for o in outcomes if o.status == NotificationStatus.FAILED)
    if failed:
        logger.warning("SOS %s: %s of %s notifications failed", event.id, failed, len(outcomes))

    return SosDispatch(event=event, outcomes=outcomes, map_link=build_map_link(event.lat, event.lng))
