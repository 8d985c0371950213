"""SOS notification fan-out."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from emergency_sos.core.errors import TransportError
from emergency_sos.core.sos_policies import DEFAULT_CONTACT_NAME, SOS_MESSAGE_PREFIX
from emergency_sos.schemas.sos import NotificationOutcome, NotificationStatus
from emergency_sos.services.geo_service import build_map_link
from emergency_sos.services.sms_transport import SmsTransport

logger = logging.getLogger(__name__)


def compose_sos_message(lat: float, lng: float) -> str:
    """Alert text: fixed preamble followed by the map link."""
    return SOS_MESSAGE_PREFIX + build_map_link(lat, lng)


def _recipient_fields(recipient: Any) -> tuple[str, str]:
    if isinstance(recipient, Mapping):
        phone, name = recipient.get("phone"), recipient.get("name")
    else:
        phone, name = getattr(recipient, "phone", None), getattr(recipient, "name", None)
    return str(phone or ""), name or DEFAULT_CONTACT_NAME


def _notify_one(phone: str, name: str, body: str, transport: SmsTransport | None) -> NotificationOutcome:
    if transport is None:
        logger.info("[SIMULATED] SMS to %s (%s): %s", name, phone, body)
        return NotificationOutcome(phone=phone, name=name, status=NotificationStatus.SIMULATED, message=body)

    try:
        receipt = transport.send(body, transport.sender, phone)
    except TransportError as exc:
        logger.warning("Failed to send SMS to %s (%s): %s", name, phone, exc.message)
        return NotificationOutcome(phone=phone, name=name, status=NotificationStatus.FAILED, error=exc.message)
    except Exception as exc:  # noqa: BLE001 - one recipient must not sink the others
        logger.exception("Unexpected error sending SMS to %s (%s)", name, phone)
        return NotificationOutcome(phone=phone, name=name, status=NotificationStatus.FAILED, error=str(exc))

    logger.info("SMS sent to %s (%s): %s", name, phone, receipt.message_id)
    return NotificationOutcome(phone=phone, name=name, status=NotificationStatus.SENT, sid=receipt.message_id)


def notify_recipients(
    lat: float,
    lng: float,
    recipients: Sequence[Any],
    transport: SmsTransport | None,
) -> list[NotificationOutcome]:
    """Text every recipient the SOS location, one independent attempt each.

    Outcomes come back in recipient order. Without a transport nothing leaves
    the process and every outcome is ``simulated``.
    """
    body = compose_sos_message(lat, lng)
    logger.info("Sending SOS SMS to %s contacts", len(recipients))

    outcomes: list[NotificationOutcome] = []
    for recipient in recipients:
        phone, name = _recipient_fields(recipient)
        outcomes.append(_notify_one(phone, name, body, transport))
    return outcomes
