"""Emergency contacts API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from emergency_sos.core.errors import PersistenceError, ValidationError
from emergency_sos.db.session import get_db
from emergency_sos.schemas.contact import (
    ContactDeleteResponse,
    ContactResponse,
    ContactsSyncRequest,
    ContactsSyncResponse,
)
from emergency_sos.services.contact_service import delete_contact, list_contacts, upsert_contacts

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.post("", response_model=ContactsSyncResponse)
def sync_contacts(
    data: ContactsSyncRequest,
    db: Session = Depends(get_db),
):
    """Add or rename contacts. Existing phone numbers are updated in place."""
    try:
        saved = upsert_contacts(db, data.contacts)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return ContactsSyncResponse(
        message="Contacts saved successfully",
        contacts=[ContactResponse.model_validate(c) for c in saved],
    )


@router.get("", response_model=list[ContactResponse])
def get_contacts(db: Session = Depends(get_db)):
    """List all contacts, newest first."""
    try:
        return list_contacts(db)
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/{phone}", response_model=ContactDeleteResponse)
def remove_contact(phone: str, db: Session = Depends(get_db)):
    """Delete a contact by phone number."""
    try:
        deleted = delete_contact(db, phone)
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contact not found")
    return ContactDeleteResponse(message="Contact deleted", deleted=True)
