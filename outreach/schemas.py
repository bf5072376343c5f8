"""Request bodies accepted by the API."""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlmodel import Field, SQLModel

# Matches the DECIMAL(4,2) column the events were first kept in.
MAX_HOURS_LENGTH = 99.99


class EventCreate(SQLModel):
    event_name: str = Field(min_length=1, max_length=200)
    event_date: date
    event_description: Optional[str] = None
    hours_length: Optional[float] = Field(default=None, ge=0, le=MAX_HOURS_LENGTH)
    created_by: Optional[str] = None


class EventUpdate(SQLModel):
    """Partial edit; only the fields sent are changed."""

    event_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    event_date: Optional[date] = None
    event_description: Optional[str] = None
    hours_length: Optional[float] = Field(default=None, ge=0, le=MAX_HOURS_LENGTH)


class ParticipantCreate(SQLModel):
    student_id: int
    # Checked by the ledger so a bad value surfaces as InvalidRole.
    participation_type: str
    notes: Optional[str] = None
    created_by: Optional[str] = None


class StudentCreate(SQLModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: Optional[str] = None
    graduation_year: Optional[int] = None
    years_on_team: Optional[int] = Field(default=None, ge=0)
    is_active: bool = True


class YearsOnTeamUpdate(SQLModel):
    years_on_team: int = Field(ge=0)


__all__ = [
    "MAX_HOURS_LENGTH",
    "EventCreate",
    "EventUpdate",
    "ParticipantCreate",
    "StudentCreate",
    "YearsOnTeamUpdate",
]
