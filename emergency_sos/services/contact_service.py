"""Emergency contact store."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from emergency_sos.core.errors import PersistenceError, ValidationError
from emergency_sos.models.contact import Contact
from emergency_sos.schemas.contact import ContactIn

logger = logging.getLogger(__name__)


def _to_contact_in(item: ContactIn | Mapping[str, Any], index: int) -> ContactIn:
    if isinstance(item, ContactIn):
        return item
    if not isinstance(item, Mapping):
        raise ValidationError(f"Contact #{index} must be an object with name and phone")
    try:
        return ContactIn.model_validate(item)
    except PydanticValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
        raise ValidationError(f"Contact #{index} has invalid or missing fields: {', '.join(fields)}") from exc


def get_contact_by_phone(db: Session, phone: str) -> Contact | None:
    """Look up a contact by its phone number."""
    return db.execute(select(Contact).where(Contact.phone == phone)).scalar_one_or_none()


def upsert_contacts(db: Session, contacts: Sequence[ContactIn | Mapping[str, Any]]) -> list[Contact]:
    """Create or rename contacts keyed by phone number.

    Returns the stored rows in input order. A phone repeated within one batch
    resolves to a single row carrying the last name given for it.
    """
    if isinstance(contacts, (str, bytes)) or not isinstance(contacts, Sequence):
        raise ValidationError("Invalid contacts data")
    items = [_to_contact_in(item, index) for index, item in enumerate(contacts)]

    saved: list[Contact] = []
    try:
        for item in items:
            existing = get_contact_by_phone(db, item.phone)
            if existing:
                existing.name = item.name
                saved.append(existing)
                logger.info("Updated contact %s (%s)", item.name, item.phone)
            else:
                contact = Contact(name=item.name, phone=item.phone)
                db.add(contact)
                # Flush so a repeated phone later in the batch finds this row
                db.flush()
                saved.append(contact)
                logger.info("Created contact %s (%s)", item.name, item.phone)
        db.commit()
        for contact in saved:
            db.refresh(contact)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to save contacts")
        raise PersistenceError("Failed to save contacts") from exc
    return saved


def list_contacts(db: Session) -> list[Contact]:
    """All contacts, most recently created first."""
    try:
        result = db.execute(select(Contact).order_by(Contact.created_at.desc(), Contact.id.desc()))
        return list(result.scalars().all())
    except SQLAlchemyError as exc:
        logger.exception("Failed to fetch contacts")
        raise PersistenceError("Failed to fetch contacts") from exc


def delete_contact(db: Session, phone: str) -> bool:
    """Remove the contact with this phone. Returns False when none exists."""
    try:
        contact = get_contact_by_phone(db, phone)
        if not contact:
            return False
        db.delete(contact)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to delete contact %s", phone)
        raise PersistenceError("Failed to delete contact") from exc
    logger.info("Deleted contact %s", phone)
    return True
