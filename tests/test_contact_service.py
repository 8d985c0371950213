"""Contact and event store tests (service level)."""

import pytest

from emergency_sos.core.errors import ValidationError
from emergency_sos.models.sos_event import SosEvent
from emergency_sos.schemas.contact import ContactIn
from emergency_sos.services.contact_service import delete_contact, list_contacts, upsert_contacts
from emergency_sos.services.event_service import append_event, list_recent_events
from emergency_sos.services.sos_service import handle_sos, resolve_recipients


def test_upsert_returns_rows_in_input_order(db):
    saved = upsert_contacts(
        db,
        [ContactIn(name="B", phone="+15550000002"), {"name": "A", "phone": "+15550000001"}],
    )
    assert [c.phone for c in saved] == ["+15550000002", "+15550000001"]
    assert all(c.id is not None and c.created_at is not None for c in saved)


def test_upsert_rejects_non_sequence(db):
    with pytest.raises(ValidationError):
        upsert_contacts(db, {"name": "A", "phone": "+15550000001"})
    with pytest.raises(ValidationError):
        upsert_contacts(db, "+15550000001")


def test_upsert_rejects_item_without_phone(db):
    with pytest.raises(ValidationError, match="phone"):
        upsert_contacts(db, [{"name": "A", "phone": "+15550000001"}, {"name": "B"}])
    assert list_contacts(db) == []


def test_upsert_keeps_created_at_on_rename(db):
    first = upsert_contacts(db, [{"name": "A", "phone": "+15550000001"}])[0]
    created = first.created_at
    again = upsert_contacts(db, [{"name": "Renamed", "phone": "+15550000001"}])[0]
    assert again.id == first.id
    assert again.name == "Renamed"
    assert again.created_at == created


def test_delete_contact(db):
    upsert_contacts(db, [{"name": "A", "phone": "+15550000001"}])
    assert delete_contact(db, "+15550000001") is True
    assert delete_contact(db, "+15550000001") is False


def test_append_event_validates_before_writing(db):
    with pytest.raises(ValidationError):
        append_event(db, None, 1)
    assert db.query(SosEvent).count() == 0

    event = append_event(db, "10", 20)
    assert (event.lat, event.lng) == (10.0, 20.0)
    assert event.time is not None
    assert list_recent_events(db) == [event]


def test_resolve_recipients_uses_store_when_explicit_empty(db):
    upsert_contacts(db, [{"name": "A", "phone": "+15550000001"}, {"name": "B", "phone": "+15550000002"}])
    resolved = resolve_recipients(db, [])
    assert {c.phone for c in resolved} == {"+15550000001", "+15550000002"}

    explicit = [{"phone": "+15550000009"}]
    assert resolve_recipients(db, explicit) == explicit


def test_handle_sos_with_fake_transport(db, make_transport):
    upsert_contacts(db, [{"name": "A", "phone": "+15550000001"}])
    transport = make_transport()

    dispatch = handle_sos(db, 40.0, -74.0, None, transport)

    assert dispatch.map_link == "https://maps.google.com/?q=40,-74"
    assert (dispatch.event.lat, dispatch.event.lng) == (40.0, -74.0)
    assert [o.status.value for o in dispatch.outcomes] == ["sent"]
    assert transport.sent[0]["to"] == "+15550000001"
