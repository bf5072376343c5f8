"""Database model for a student's participation in an outreach event."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Participation(SQLModel, table=True):
    """Points awarded to one student for one event."""

    __tablename__ = "student_outreach_participation"
    __table_args__ = (
        UniqueConstraint("student_id", "event_id", name="uq_participation_student_event"),
    )

    id: Optional[int] = ORMField(default=None, primary_key=True)
    student_id: int = ORMField(foreign_key="student.id", index=True)
    event_id: int = ORMField(foreign_key="outreach_event.id", index=True)
    participation_type: str = ORMField(max_length=20)
    points_awarded: int
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Participation"]
