"""Roster lookups: active students and their years on the team."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy import and_
from sqlmodel import Session, select

from ..errors import StudentNotFound
from ..models import YEARS_ON_TEAM_KEY, Student, StudentAttribute
from ..schemas import StudentCreate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RosterStudent:
    id: int
    first_name: str
    last_name: str
    graduation_year: Optional[int]
    years_on_team: int = 0
    is_active: bool = True


def parse_years_on_team(raw: Optional[str], student_id: Optional[int] = None) -> int:
    """Interpret a stored ``yearsOnTeam`` attribute; unusable values count as 0."""

    if raw is None:
        return 0
    try:
        years = int(str(raw).strip())
    except ValueError:
        logger.warning("Ignoring non-numeric yearsOnTeam %r for student %s", raw, student_id)
        return 0
    if years < 0:
        logger.warning("Ignoring negative yearsOnTeam %r for student %s", raw, student_id)
        return 0
    return years


def _roster_query():
    return select(Student, StudentAttribute.attribute_value).join(
        StudentAttribute,
        and_(
            StudentAttribute.student_id == Student.id,
            StudentAttribute.attribute_key == YEARS_ON_TEAM_KEY,
        ),
        isouter=True,
    )


def _to_roster(student: Student, raw_years: Optional[str]) -> RosterStudent:
    return RosterStudent(
        id=student.id,
        first_name=student.first_name,
        last_name=student.last_name,
        graduation_year=student.graduation_year,
        years_on_team=parse_years_on_team(raw_years, student.id),
        is_active=student.is_active,
    )


def list_active_students(session: Session) -> List[RosterStudent]:
    """Active students ordered by first then last name."""

    rows = session.exec(
        _roster_query()
        .where(Student.is_active == True)  # noqa: E712
        .order_by(Student.first_name, Student.last_name, Student.id)
    ).all()

    roster: List[RosterStudent] = []
    seen = set()
    for student, raw_years in rows:
        if student.id in seen:
            continue
        seen.add(student.id)
        roster.append(_to_roster(student, raw_years))
    return roster


def get_roster_student(session: Session, student_id: int) -> RosterStudent:
    row = session.exec(_roster_query().where(Student.id == student_id)).first()
    if row is None:
        raise StudentNotFound(student_id)
    student, raw_years = row
    return _to_roster(student, raw_years)


def create_student(session: Session, data: StudentCreate) -> RosterStudent:
    student = Student(
        first_name=data.first_name.strip(),
        last_name=data.last_name.strip(),
        email=data.email,
        graduation_year=data.graduation_year,
        is_active=data.is_active,
    )
    session.add(student)
    session.flush()
    if data.years_on_team is not None:
        session.add(
            StudentAttribute(
                student_id=student.id,
                attribute_key=YEARS_ON_TEAM_KEY,
                attribute_value=str(data.years_on_team),
            )
        )
    session.commit()
    logger.info("Added student %s (%s %s)", student.id, student.first_name, student.last_name)
    return get_roster_student(session, student.id)


def set_years_on_team(session: Session, student_id: int, years: int) -> RosterStudent:
    """Insert or overwrite the student's ``yearsOnTeam`` attribute."""

    if session.get(Student, student_id) is None:
        raise StudentNotFound(student_id)

    attribute = session.exec(
        select(StudentAttribute).where(
            StudentAttribute.student_id == student_id,
            StudentAttribute.attribute_key == YEARS_ON_TEAM_KEY,
        )
    ).first()
    if attribute is None:
        attribute = StudentAttribute(
            student_id=student_id, attribute_key=YEARS_ON_TEAM_KEY, attribute_value=str(years)
        )
    else:
        attribute.attribute_value = str(years)
    session.add(attribute)
    session.commit()
    return get_roster_student(session, student_id)


def roster_student_to_dict(student: RosterStudent) -> Dict[str, Any]:
    return {
        "id": student.id,
        "first_name": student.first_name,
        "last_name": student.last_name,
        "graduation_year": student.graduation_year,
        "years_on_team": student.years_on_team,
        "is_active": student.is_active,
    }


__all__ = [
    "RosterStudent",
    "create_student",
    "get_roster_student",
    "list_active_students",
    "parse_years_on_team",
    "roster_student_to_dict",
    "set_years_on_team",
]
