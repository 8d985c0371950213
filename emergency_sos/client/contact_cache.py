"""Local contact list kept on disk by the client."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict, dataclass
from pathlib import Path

from emergency_sos.core.errors import ValidationError

logger = logging.getLogger(__name__)

PHONE_PATTERN = re.compile(r"^\+?[\d\s-]{10,}$")


@dataclass(frozen=True)
class CachedContact:
    name: str
    phone: str


class ContactCache:
    """JSON file holding the contact list, rewritten after every change.

    This is a cache of the server's contacts; the two can diverge until the
    next successful sync.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()
        self._contacts: list[CachedContact] = []

    @property
    def contacts(self) -> list[CachedContact]:
        return list(self._contacts)

    def load(self) -> list[CachedContact]:
        """Read the cache file. A missing or unreadable file yields an empty list."""
        if not self.path.exists():
            self._contacts = []
            return self.contacts
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            self._contacts = [CachedContact(name=str(c["name"]), phone=str(c["phone"])) for c in raw]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.error("Error loading contacts from %s: %s", self.path, exc)
            self._contacts = []
        logger.info("Contacts loaded from cache: %s", len(self._contacts))
        return self.contacts

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [asdict(c) for c in self._contacts]
        self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")

    def add(self, name: str, phone: str) -> CachedContact:
        """Validate and append a contact, then persist the cache."""
        name, phone = name.strip(), phone.strip()
        if not name:
            raise ValidationError("Please enter a contact name")
        if not phone:
            raise ValidationError("Please enter a phone number")
        if not PHONE_PATTERN.match(phone):
            raise ValidationError("Please enter a valid phone number (at least 10 digits)")
        if any(c.phone == phone for c in self._contacts):
            raise ValidationError("This phone number is already in your contacts")

        contact = CachedContact(name=name, phone=phone)
        self._contacts.append(contact)
        self.save()
        return contact

    def remove(self, phone: str) -> bool:
        """Drop the contact with this phone and persist. False if it was not cached."""
        phone = phone.strip()
        remaining = [c for c in self._contacts if c.phone != phone]
        if len(remaining) == len(self._contacts):
            return False
        self._contacts = remaining
        self.save()
        return True
