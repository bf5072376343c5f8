"""Outreach leaderboard, rebuilt from the roster and ledger on every read."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional

from sqlmodel import Session, SQLModel, select

from ..models import Participation
from .roster import RosterStudent, list_active_students
from .scoring import Cohort, ParticipationRole, cohort_for_tenure, evaluate_eligibility


class LeaderboardEntry(SQLModel):
    """Standing of one active student. Derived, never stored."""

    student_id: int
    first_name: str
    last_name: str
    graduation_year: Optional[int] = None
    years_on_team: int = 0
    cohort: Cohort
    is_new_student: bool
    total_points: int = 0
    events_organized: int = 0
    events_assisted: int = 0
    requirements_met: bool
    points_needed: int
    events_needed: int


def compute_leaderboard(
    students: Iterable[RosterStudent], records: Iterable[Participation]
) -> List[LeaderboardEntry]:
    """Fold participation records into ranked per-student entries.

    Highest total first; ties go by first name, then last name. Students
    without any record still get an entry.
    """

    totals: Dict[int, int] = defaultdict(int)
    organized: Dict[int, int] = defaultdict(int)
    assisted: Dict[int, int] = defaultdict(int)
    for record in records:
        totals[record.student_id] += record.points_awarded
        if record.participation_type == ParticipationRole.ORGANIZER.value:
            organized[record.student_id] += 1
        elif record.participation_type == ParticipationRole.ASSISTANT.value:
            assisted[record.student_id] += 1

    entries: List[LeaderboardEntry] = []
    for student in students:
        if not student.is_active:
            continue
        cohort = cohort_for_tenure(student.years_on_team)
        total = totals.get(student.id, 0)
        events_organized = organized.get(student.id, 0)
        verdict = evaluate_eligibility(cohort, total, events_organized)
        entries.append(
            LeaderboardEntry(
                student_id=student.id,
                first_name=student.first_name,
                last_name=student.last_name,
                graduation_year=student.graduation_year,
                years_on_team=student.years_on_team,
                cohort=cohort,
                is_new_student=cohort is Cohort.NEW,
                total_points=total,
                events_organized=events_organized,
                events_assisted=assisted.get(student.id, 0),
                requirements_met=verdict.requirements_met,
                points_needed=verdict.points_needed,
                events_needed=verdict.events_needed,
            )
        )

    entries.sort(key=lambda entry: (-entry.total_points, entry.first_name, entry.last_name))
    return entries


def get_leaderboard(session: Session) -> List[LeaderboardEntry]:
    students = list_active_students(session)
    # One SELECT, so a committed recalculation is seen whole or not at all.
    records = session.exec(select(Participation)).all()
    return compute_leaderboard(students, records)


def entry_to_dict(entry: LeaderboardEntry) -> Dict[str, Any]:
    return entry.model_dump(mode="json")


__all__ = ["LeaderboardEntry", "compute_leaderboard", "entry_to_dict", "get_leaderboard"]
