"""FastAPI dependencies."""

from fastapi import Request

from emergency_sos.services.sms_transport import SmsTransport


def get_sms_transport(request: Request) -> SmsTransport | None:
    """SMS transport built at startup, or None when SMS is simulated."""
    return getattr(request.app.state, "sms_transport", None)
