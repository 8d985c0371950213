"""Notification fan-out tests."""

from emergency_sos.core.errors import TransportError
from emergency_sos.schemas.sos import NotificationStatus, Recipient
from emergency_sos.services.notifier import compose_sos_message, notify_recipients
from emergency_sos.services.sms_transport import SmsReceipt


def test_compose_sos_message():
    assert compose_sos_message(40.0, -74.0) == "🚨 EMERGENCY SOS! Location: https://maps.google.com/?q=40,-74"


def test_simulated_outcomes_follow_input_order():
    recipients = [
        Recipient(name="A", phone="+15550000001"),
        {"name": "B", "phone": "+15550000002"},
        Recipient(phone="+15550000003"),
    ]
    outcomes = notify_recipients(12.5, 7.25, recipients, transport=None)

    assert [o.phone for o in outcomes] == ["+15550000001", "+15550000002", "+15550000003"]
    assert [o.name for o in outcomes] == ["A", "B", "Emergency Contact"]
    assert all(o.status == NotificationStatus.SIMULATED for o in outcomes)
    assert all(o.sid is None for o in outcomes)
    assert outcomes[0].message == "🚨 EMERGENCY SOS! Location: https://maps.google.com/?q=12.5,7.25"


def test_no_recipients_gives_no_outcomes():
    assert notify_recipients(1.0, 2.0, [], transport=None) == []


def test_one_failure_does_not_affect_the_others(make_transport):
    transport = make_transport(fail_for={"+15550000001"})
    recipients = [{"name": "A", "phone": "+15550000001"}, {"name": "B", "phone": "+15550000002"}]

    outcomes = notify_recipients(1.0, 2.0, recipients, transport)

    assert outcomes[0].status == NotificationStatus.FAILED
    assert outcomes[0].error.startswith("Invalid 'To' Phone Number")
    assert outcomes[1].status == NotificationStatus.SENT
    assert outcomes[1].sid == "SM" + "1".zfill(32)
    assert transport.sent[0]["body"] == compose_sos_message(1.0, 2.0)


def test_unexpected_transport_exception_is_recorded_as_failed():
    class _Exploding:
        sender = "+15550000000"

        def __init__(self):
            self.calls = 0

        def send(self, body, from_, to):
            self.calls += 1
            if self.calls == 1:
                raise ConnectionResetError("connection reset by peer")
            return SmsReceipt(message_id="SM123")

    outcomes = notify_recipients(
        1.0,
        2.0,
        [{"phone": "+15550000001"}, {"phone": "+15550000002"}],
        _Exploding(),
    )
    assert [o.status for o in outcomes] == [NotificationStatus.FAILED, NotificationStatus.SENT]
    assert outcomes[0].error == "connection reset by peer"


def test_transport_error_keeps_provider_code():
    err = TransportError("Queue overflow", code=30001)
    assert err.message == "Queue overflow"
    assert err.code == 30001
