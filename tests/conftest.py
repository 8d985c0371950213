"""Pytest fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from emergency_sos.core.deps import get_sms_transport
from emergency_sos.core.errors import TransportError
from emergency_sos.db.base import Base
from emergency_sos.db.session import get_db
from emergency_sos.main import app
from emergency_sos.models import Contact, SosEvent  # noqa: F401 - register for create_all
from emergency_sos.services.sms_transport import SmsReceipt

TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


class FakeSmsTransport:
    """Records sends; phones listed in ``fail_for`` raise TransportError."""

    def __init__(self, sender="+15550000000", fail_for=()):
        self.sender = sender
        self.fail_for = set(fail_for)
        self.sent = []

    def send(self, body, from_, to):
        if to in self.fail_for:
            raise TransportError(f"Invalid 'To' Phone Number: {to}", code=21211)
        self.sent.append({"body": body, "from": from_, "to": to})
        return SmsReceipt(message_id=f"SM{len(self.sent):032d}")


@pytest.fixture
def setup_db():
    """Fresh tables for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(setup_db):
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sms_transport():
    """Transport handed to the SOS endpoint. None means simulated mode."""
    return None


@pytest.fixture
def client(setup_db, sms_transport):
    """Test client with overridden DB and SMS transport."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_sms_transport] = lambda: sms_transport
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_transport():
    """Factory for fake SMS transports."""
    return FakeSmsTransport
