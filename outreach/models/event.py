"""Database model for outreach events."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class OutreachEvent(SQLModel, table=True):
    """Community outreach event; its length scales the points it awards."""

    __tablename__ = "outreach_event"

    id: Optional[int] = ORMField(default=None, primary_key=True)
    event_name: str = ORMField(max_length=200)
    event_date: date = ORMField(index=True)
    event_description: Optional[str] = None
    hours_length: Optional[float] = None
    created_by: Optional[str] = None
    created_at: datetime = ORMField(default_factory=utcnow)
    updated_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["OutreachEvent"]
