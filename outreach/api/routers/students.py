"""Roster endpoints used when logging participation."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlmodel import Session

from ...core import get_session
from ...schemas import StudentCreate, YearsOnTeamUpdate
from ...services import ledger, roster

router = APIRouter(tags=["students"])


@router.get("/outreach/students")
def list_students(session: Session = Depends(get_session)):
    """Active students for the participant picker."""

    return {
        "students": [
            roster.roster_student_to_dict(student)
            for student in roster.list_active_students(session)
        ]
    }


@router.get("/outreach/students/{student_id}/participation")
def student_participation(student_id: int, session: Session = Depends(get_session)):
    """One student's outreach history, most recent first."""

    history = ledger.list_for_student(session, student_id)
    return {
        "student": roster.roster_student_to_dict(roster.get_roster_student(session, student_id)),
        "participation": [ledger.history_item_to_dict(record, event) for record, event in history],
    }


@router.post("/students", status_code=201)
def create_student(body: StudentCreate, session: Session = Depends(get_session)):
    return {"student": roster.roster_student_to_dict(roster.create_student(session, body))}


@router.put("/students/{student_id}/years-on-team")
def update_years_on_team(
    student_id: int, body: YearsOnTeamUpdate, session: Session = Depends(get_session)
):
    student = roster.set_years_on_team(session, student_id, body.years_on_team)
    return {"student": roster.roster_student_to_dict(student)}


__all__ = ["router"]
