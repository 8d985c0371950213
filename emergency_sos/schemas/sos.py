"""SOS request and response schemas."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from emergency_sos.core.sos_policies import LAT_RANGE, LNG_RANGE
from emergency_sos.services.geo_service import coerce_coordinate


class NotificationStatus(str, enum.Enum):
    SENT = "sent"
    SIMULATED = "simulated"
    FAILED = "failed"


class Recipient(BaseModel):
    """Contact as used within one SOS dispatch. Name is optional."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = None
    phone: str = Field(min_length=1, max_length=40)


class SosCreate(BaseModel):
    lat: float
    lng: float
    contacts: list[Recipient] | None = None

    @field_validator("lat", mode="before")
    @classmethod
    def _check_lat(cls, value: Any) -> float:
        return coerce_coordinate(value, "lat", LAT_RANGE)

    @field_validator("lng", mode="before")
    @classmethod
    def _check_lng(cls, value: Any) -> float:
        return coerce_coordinate(value, "lng", LNG_RANGE)


class NotificationOutcome(BaseModel):
    """Per-recipient result of one SOS fan-out. Built per request, never stored.

    ``sid`` is set when sent, ``error`` when failed, ``message`` (the body that
    would have been sent) when simulated.
    """

    phone: str
    name: str
    status: NotificationStatus
    sid: str | None = None
    message: str | None = None
    error: str | None = None


class SosEventResponse(BaseModel):
    lat: float
    lng: float
    time: datetime

    model_config = ConfigDict(from_attributes=True)


class SosEventDetail(SosEventResponse):
    id: int


class SosResponse(BaseModel):
    message: str
    sos: SosEventResponse
    sms_results: list[NotificationOutcome] = Field(alias="smsResults")
    google_maps_link: str = Field(alias="googleMapsLink")

    model_config = ConfigDict(populate_by_name=True)
