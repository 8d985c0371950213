"""SQLAlchemy models."""

from __future__ import annotations

from emergency_sos.models.contact import Contact
from emergency_sos.models.sos_event import SosEvent

__all__ = [
    "Contact",
    "SosEvent",
]
