"""SMS transport backed by the Twilio REST API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from twilio.base.exceptions import TwilioException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

from emergency_sos.core.config import Settings
from emergency_sos.core.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SmsReceipt:
    """Provider acknowledgement for one accepted message."""

    message_id: str


class SmsTransport(Protocol):
    sender: str

    def send(self, body: str, from_: str, to: str) -> SmsReceipt: ...


class TwilioSmsTransport:
    """Sends one SMS per call through Twilio's Messages resource."""

    def __init__(self, account_sid: str, auth_token: str, sender: str, timeout: float | None = None) -> None:
        self.sender = sender
        self._client = Client(account_sid, auth_token, http_client=TwilioHttpClient(timeout=timeout))

    def send(self, body: str, from_: str, to: str) -> SmsReceipt:
        try:
            message = self._client.messages.create(body=body, from_=from_, to=to)
        except TwilioException as exc:
            detail = getattr(exc, "msg", None) or str(exc)
            raise TransportError(detail, code=getattr(exc, "code", None)) from exc
        return SmsReceipt(message_id=message.sid)


def build_sms_transport(config: Settings) -> TwilioSmsTransport | None:
    """Return a Twilio transport, or None when credentials are incomplete (simulated mode)."""
    if not config.twilio_configured:
        logger.warning("Twilio credentials not configured. SMS will be simulated.")
        return None
    logger.info("Twilio initialized, sending from %s", config.twilio_phone_number)
    return TwilioSmsTransport(
        config.twilio_account_sid,
        config.twilio_auth_token,
        config.twilio_phone_number,
        timeout=config.twilio_timeout_seconds,
    )
