"""SOS API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from emergency_sos.core.deps import get_sms_transport
from emergency_sos.core.errors import PersistenceError, ValidationError
from emergency_sos.core.sos_policies import DEFAULT_EVENTS_LIMIT, MAX_EVENTS_LIMIT
from emergency_sos.db.session import get_db
from emergency_sos.schemas.sos import SosCreate, SosEventDetail, SosEventResponse, SosResponse
from emergency_sos.services.event_service import list_recent_events
from emergency_sos.services.sms_transport import SmsTransport
from emergency_sos.services.sos_service import handle_sos

router = APIRouter(prefix="/sos", tags=["sos"])


@router.post("", response_model=SosResponse, response_model_exclude_none=True)
def send_sos(
    data: SosCreate,
    db: Session = Depends(get_db),
    transport: SmsTransport | None = Depends(get_sms_transport),
):
    """Record the SOS location and text every recipient.

    Uses the contacts in the request when given, otherwise all stored contacts.
    Failed deliveries show up in smsResults; they do not fail the request.
    """
    try:
        dispatch = handle_sos(db, data.lat, data.lng, data.contacts, transport)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PersistenceError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to process SOS")

    return SosResponse(
        message="SOS processed successfully",
        sos=SosEventResponse.model_validate(dispatch.event),
        sms_results=dispatch.outcomes,
        google_maps_link=dispatch.map_link,
    )


@router.get("", response_model=list[SosEventDetail])
def recent_sos(
    limit: int = Query(default=DEFAULT_EVENTS_LIMIT, ge=1, le=MAX_EVENTS_LIMIT),
    db: Session = Depends(get_db),
):
    """Most recent SOS events, newest first."""
    try:
        return list_recent_events(db, limit)
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
