"""Tests for roster lookups."""

from __future__ import annotations

import pytest
from sqlmodel import select

from outreach.errors import StudentNotFound
from outreach.models import StudentAttribute, YEARS_ON_TEAM_KEY
from outreach.schemas import StudentCreate
from outreach.services import roster


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 0), ("3", 3), (" 2 ", 2), ("0", 0), ("three", 0), ("-1", 0)],
)
def test_parse_years_on_team(raw, expected):
    assert roster.parse_years_on_team(raw) == expected


def test_active_students_sorted_with_tenure(session, make_student):
    make_student("Zoe", "Adams", years_on_team=2)
    make_student("Ava", "Lee")
    make_student("Old", "Timer", years_on_team=4, is_active=False)

    students = roster.list_active_students(session)

    assert [(s.first_name, s.years_on_team) for s in students] == [("Ava", 0), ("Zoe", 2)]


def test_set_years_on_team_upserts_attribute(session, make_student):
    student = make_student("Ava", "Lee")

    roster.set_years_on_team(session, student.id, 1)
    updated = roster.set_years_on_team(session, student.id, 2)

    assert updated.years_on_team == 2
    attributes = session.exec(
        select(StudentAttribute).where(
            StudentAttribute.student_id == student.id,
            StudentAttribute.attribute_key == YEARS_ON_TEAM_KEY,
        )
    ).all()
    assert [a.attribute_value for a in attributes] == ["2"]


def test_set_years_on_team_unknown_student(session):
    with pytest.raises(StudentNotFound):
        roster.set_years_on_team(session, 12, 1)


def test_create_student_records_tenure(session):
    created = roster.create_student(
        session, StudentCreate(first_name="Ava", last_name="Lee", graduation_year=2027, years_on_team=1)
    )

    assert created.id is not None
    assert created.years_on_team == 1
    assert roster.get_roster_student(session, created.id) == created
