"""Database models for the student roster."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow

YEARS_ON_TEAM_KEY = "yearsOnTeam"


class Student(SQLModel, table=True):
    """Team member who can be credited for outreach work."""

    id: Optional[int] = ORMField(default=None, primary_key=True)
    first_name: str
    last_name: str
    email: Optional[str] = ORMField(default=None, index=True)
    graduation_year: Optional[int] = None
    is_active: bool = True
    created_at: datetime = ORMField(default_factory=utcnow)


class StudentAttribute(SQLModel, table=True):
    """Free-form key/value attribute attached to a student."""

    __tablename__ = "student_attribute"

    id: Optional[int] = ORMField(default=None, primary_key=True)
    student_id: int = ORMField(foreign_key="student.id", index=True)
    attribute_key: str = ORMField(index=True)
    attribute_value: str


__all__ = ["Student", "StudentAttribute", "YEARS_ON_TEAM_KEY"]
