"""Twilio transport tests."""

import pytest
from twilio.base.exceptions import TwilioRestException

from emergency_sos.core.config import Settings
from emergency_sos.core.errors import TransportError
from emergency_sos.services.sms_transport import TwilioSmsTransport, build_sms_transport


def _settings(**overrides):
    values = {
        "twilio_account_sid": "AC" + "0" * 32,
        "twilio_auth_token": "token",
        "twilio_phone_number": "+15550000000",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.mark.parametrize(
    "overrides",
    [
        {"twilio_account_sid": ""},
        {"twilio_auth_token": ""},
        {"twilio_phone_number": ""},
        {"twilio_account_sid": "your_account_sid"},
    ],
)
def test_incomplete_credentials_mean_simulated_mode(overrides):
    assert build_sms_transport(_settings(**overrides)) is None


def test_complete_credentials_build_twilio_transport():
    transport = build_sms_transport(_settings())
    assert isinstance(transport, TwilioSmsTransport)
    assert transport.sender == "+15550000000"


class _FakeMessages:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def create(self, body, from_, to):
        self.calls.append((body, from_, to))
        if self.error:
            raise self.error

        class _Message:
            sid = "SM" + "a" * 32

        return _Message()


class _FakeClient:
    def __init__(self, messages):
        self.messages = messages


def test_send_returns_message_sid():
    transport = TwilioSmsTransport("AC" + "0" * 32, "token", "+15550000000")
    messages = _FakeMessages()
    transport._client = _FakeClient(messages)

    receipt = transport.send("help", "+15550000000", "+15551234567")

    assert receipt.message_id == "SM" + "a" * 32
    assert messages.calls == [("help", "+15550000000", "+15551234567")]


def test_send_wraps_twilio_errors():
    transport = TwilioSmsTransport("AC" + "0" * 32, "token", "+15550000000")
    error = TwilioRestException(400, "/Messages.json", msg="The 'To' number is not a valid phone number.", code=21211)
    transport._client = _FakeClient(_FakeMessages(error))

    with pytest.raises(TransportError) as excinfo:
        transport.send("help", "+15550000000", "not-a-number")

    assert excinfo.value.message == "The 'To' number is not a valid phone number."
    assert excinfo.value.code == 21211
