"""Pydantic schemas for RSVPs.

The wire format uses camelCase keys (``eventId``, ``createdAt``,
``totalRSVP``); fields are declared snake_case with aliases.
"""
from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RSVPCreate(BaseModel):
    # Everything optional here so missing fields reach the handler's own
    # validation and come back as a 400 with field-level details.
    event_id: Optional[str] = Field(None, alias="eventId")
    name: Optional[str] = None
    message: Optional[str] = None
    confirmation: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class RSVPOut(BaseModel):
    id: str
    event_id: str = Field(alias="eventId")
    name: str
    message: str
    confirmation: str
    created_at: datetime = Field(alias="createdAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @field_validator("confirmation", mode="before")
    @classmethod
    def _enum_value(cls, value):
        return getattr(value, "value", value)

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes; everything is stored in UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class StatusCounts(BaseModel):
    attending: int = 0
    not_attending: int = 0
    undecided: int = 0


class RSVPSubmitted(BaseModel):
    payload: RSVPOut
    message: str = "RSVP submitted successfully"


class RSVPCountOut(BaseModel):
    total_rsvp: int = Field(alias="totalRSVP")
    counts: StatusCounts

    model_config = ConfigDict(populate_by_name=True)


class RSVPListOut(RSVPCountOut):
    data: list[RSVPOut] = []
