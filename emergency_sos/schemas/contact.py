"""Emergency contact schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ContactIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=200)
    # used as a path segment by DELETE /contacts/{phone}
    phone: str = Field(min_length=1, max_length=40, pattern=r"^[^/]+$")


class ContactsSyncRequest(BaseModel):
    contacts: list[ContactIn]


class ContactResponse(BaseModel):
    id: int
    name: str
    phone: str
    created_at: datetime = Field(alias="createdAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ContactsSyncResponse(BaseModel):
    message: str
    contacts: list[ContactResponse]


class ContactDeleteResponse(BaseModel):
    message: str
    deleted: bool
