"""Participation ledger: who took part in which event, and for how many points.

Writes that touch one event's records are serialized through a per-event
lock so a record added while the event is being recalculated cannot keep a
point value computed from the old duration. Uniqueness of (student, event)
is enforced by the table constraint; the ledger only translates the
resulting ``IntegrityError``.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional, Tuple, Union

from sqlalchemy import case, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, func, select

from ..errors import (
    DuplicateParticipation,
    EventNotFound,
    ParticipationNotFound,
    RecalculationFailure,
    StudentNotFound,
)
from ..models import OutreachEvent, Participation, Student
from .scoring import (
    ParticipationRole,
    duration_multiplier,
    points_for,
)

logger = logging.getLogger(__name__)

_event_locks: Dict[int, threading.RLock] = {}
_event_locks_guard = threading.Lock()


def event_lock(event_id: int) -> threading.RLock:
    """Lock guarding writes to the participation records of one event."""

    with _event_locks_guard:
        lock = _event_locks.get(event_id)
        if lock is None:
            lock = _event_locks[event_id] = threading.RLock()
        return lock


def discard_event_lock(event_id: Optional[int] = None) -> None:
    """Forget the lock of a deleted event, or every lock when no id is given."""

    with _event_locks_guard:
        if event_id is None:
            _event_locks.clear()
        else:
            _event_locks.pop(event_id, None)


def _require_event(session: Session, event_id: int) -> OutreachEvent:
    event = session.get(OutreachEvent, event_id, populate_existing=True)
    if event is None:
        raise EventNotFound(event_id)
    return event


def add_participation(
    session: Session,
    student_id: int,
    event_id: int,
    role: Union[str, ParticipationRole],
    notes: Optional[str] = None,
    created_by: Optional[str] = None,
) -> Participation:
    """Record a student's participation, scored from the event's current length."""

    parsed_role = ParticipationRole.parse(role)

    with event_lock(event_id):
        event = _require_event(session, event_id)
        if session.get(Student, student_id) is None:
            raise StudentNotFound(student_id)

        record = Participation(
            student_id=student_id,
            event_id=event_id,
            participation_type=parsed_role.value,
            points_awarded=points_for(parsed_role, duration_multiplier(event.hours_length)),
            notes=notes,
            created_by=created_by,
        )
        session.add(record)
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            logger.warning(
                "Duplicate participation for student %s at event %s", student_id, event_id
            )
            raise DuplicateParticipation(student_id, event_id) from exc

    session.refresh(record)
    logger.info(
        "Recorded %s participation %s: student %s, event %s, %s points",
        record.participation_type,
        record.id,
        student_id,
        event_id,
        record.points_awarded,
    )
    return record


def remove_participation(
    session: Session,
    participation_id: int,
    *,
    event_id: Optional[int] = None,
    missing_ok: bool = True,
) -> bool:
    """Delete a record; returns False when it was already gone.

    With ``event_id`` a record belonging to another event counts as absent.
    Pass ``missing_ok=False`` to get :class:`ParticipationNotFound` instead.
    """

    record = session.get(Participation, participation_id)
    if record is not None and event_id is not None and record.event_id != event_id:
        record = None
    if record is None:
        if missing_ok:
            return False
        raise ParticipationNotFound(participation_id)

    with event_lock(record.event_id):
        session.delete(record)
        session.commit()

    logger.info("Removed participation %s", participation_id)
    return True


def _points_by_role(multiplier: int):
    return case(
        *[
            (Participation.participation_type == role.value, points_for(role, multiplier))
            for role in ParticipationRole
        ]
    )


def recalculate_for_event(
    session: Session,
    event_id: int,
    hours_length: Optional[float],
    *,
    commit: bool = True,
) -> int:
    """Rewrite the points of every record of ``event_id`` for a new length.

    The multiplier is computed once and applied to all records in a single
    UPDATE. If the statement does not touch exactly the records counted
    beforehand the session is rolled back and :class:`RecalculationFailure`
    is raised. With ``commit=False`` the caller owns the transaction.

    Returns the number of records rewritten.
    """

    multiplier = duration_multiplier(hours_length)

    with event_lock(event_id):
        expected = 0
        try:
            expected = session.exec(
                select(func.count(Participation.id)).where(
                    Participation.event_id == event_id
                )
            ).one()
            statement = (
                update(Participation)
                .where(Participation.event_id == event_id)
                .values(points_awarded=_points_by_role(multiplier))
                .execution_options(synchronize_session=False)
            )
            updated = session.exec(statement).rowcount
            if updated != expected:
                raise RecalculationFailure(event_id, expected, updated)
            if commit:
                session.commit()
        except RecalculationFailure:
            session.rollback()
            logger.error("Recalculation for event %s touched a partial record set", event_id)
            raise
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Recalculation for event %s failed", event_id)
            raise RecalculationFailure(event_id, expected, 0) from exc

        # The UPDATE bypassed the identity map; reload records on next access.
        for obj in list(session.identity_map.values()):
            if isinstance(obj, Participation):
                session.expire(obj)

    logger.info(
        "Recalculated %s participation records for event %s at %sx",
        expected,
        event_id,
        multiplier,
    )
    return expected


def list_for_event(session: Session, event_id: int) -> List[Tuple[Participation, Student]]:
    """Records of one event with their students, ordered by student name."""

    _require_event(session, event_id)
    return list(
        session.exec(
            select(Participation, Student)
            .join(Student, Student.id == Participation.student_id)
            .where(Participation.event_id == event_id)
            .order_by(Student.first_name, Student.last_name, Participation.id)
        ).all()
    )


def list_for_student(
    session: Session, student_id: int
) -> List[Tuple[Participation, OutreachEvent]]:
    """A student's participation history, most recent event first."""

    if session.get(Student, student_id) is None:
        raise StudentNotFound(student_id)
    return list(
        session.exec(
            select(Participation, OutreachEvent)
            .join(OutreachEvent, OutreachEvent.id == Participation.event_id)
            .where(Participation.student_id == student_id)
            .order_by(OutreachEvent.event_date.desc(), OutreachEvent.id.desc())
        ).all()
    )


def participant_to_dict(record: Participation, student: Student) -> Dict[str, Any]:
    return {
        "id": record.id,
        "student_id": record.student_id,
        "first_name": student.first_name,
        "last_name": student.last_name,
        "participation_type": record.participation_type,
        "points_awarded": record.points_awarded,
        "notes": record.notes,
    }


def history_item_to_dict(record: Participation, event: OutreachEvent) -> Dict[str, Any]:
    return {
        "id": record.id,
        "event_id": event.id,
        "event_name": event.event_name,
        "event_date": event.event_date.isoformat(),
        "hours_length": event.hours_length,
        "participation_type": record.participation_type,
        "points_awarded": record.points_awarded,
        "notes": record.notes,
    }


__all__ = [
    "add_participation",
    "discard_event_lock",
    "event_lock",
    "history_item_to_dict",
    "list_for_event",
    "list_for_student",
    "participant_to_dict",
    "recalculate_for_event",
    "remove_participation",
]
