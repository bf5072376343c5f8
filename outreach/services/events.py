"""Outreach event store and the duration-change handler."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import delete
from sqlmodel import Session, func, select

from ..core.time import utcnow
from ..errors import EventNotFound, InvalidEventData
from ..models import OutreachEvent, Participation
from ..schemas import MAX_HOURS_LENGTH, EventCreate
from .ledger import discard_event_lock, event_lock, recalculate_for_event

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = {"event_name", "event_date", "event_description", "hours_length"}


@dataclass
class EventUpdateResult:
    event: OutreachEvent
    points_recalculated: bool
    records_recalculated: int = 0


def _check_hours(hours_length: Optional[float]) -> None:
    if hours_length is None:
        return
    if not math.isfinite(hours_length) or not 0 <= hours_length <= MAX_HOURS_LENGTH:
        raise InvalidEventData(
            f"Event length must be between 0 and {MAX_HOURS_LENGTH} hours",
            {"hours_length": hours_length},
        )


def get_event(session: Session, event_id: int) -> OutreachEvent:
    event = session.get(OutreachEvent, event_id)
    if event is None:
        raise EventNotFound(event_id)
    return event


def create_event(session: Session, data: EventCreate) -> OutreachEvent:
    _check_hours(data.hours_length)
    event = OutreachEvent(
        event_name=data.event_name.strip(),
        event_date=data.event_date,
        event_description=data.event_description,
        hours_length=data.hours_length,
        created_by=data.created_by,
    )
    session.add(event)
    session.commit()
    session.refresh(event)
    logger.info("Created outreach event %s (%s)", event.id, event.event_name)
    return event


def list_events(session: Session) -> List[Tuple[OutreachEvent, int]]:
    """All events, newest first, each paired with its participant count."""

    rows = session.exec(
        select(OutreachEvent, func.count(Participation.id))
        .join(Participation, Participation.event_id == OutreachEvent.id, isouter=True)
        .group_by(OutreachEvent.id)
        .order_by(OutreachEvent.event_date.desc(), OutreachEvent.id.desc())
    ).all()
    return [(event, int(count)) for event, count in rows]


def update_event(
    session: Session, event_id: int, changes: Mapping[str, Any]
) -> EventUpdateResult:
    """Apply a (partial) edit and re-score participants if the length changed.

    The new length is compared with the value read from the database inside
    the event lock, never with a value supplied by the client. The field
    update and the recalculation commit together; if the recalculation fails
    neither is kept.
    """

    unknown = set(changes) - _EDITABLE_FIELDS
    if unknown:
        raise InvalidEventData("Unknown event fields", {"fields": sorted(unknown)})
    if "hours_length" in changes:
        _check_hours(changes["hours_length"])
    if "event_name" in changes and not (changes["event_name"] or "").strip():
        raise InvalidEventData("Event name is required")
    if "event_date" in changes and changes["event_date"] is None:
        raise InvalidEventData("Event date is required")

    with event_lock(event_id):
        event = session.get(OutreachEvent, event_id, populate_existing=True)
        if event is None:
            raise EventNotFound(event_id)

        stored_hours = event.hours_length
        duration_changed = "hours_length" in changes and changes["hours_length"] != stored_hours

        for field, value in changes.items():
            setattr(event, field, value)
        event.updated_at = utcnow()
        session.add(event)

        recalculated = 0
        try:
            session.flush()
            if duration_changed:
                recalculated = recalculate_for_event(
                    session, event_id, event.hours_length, commit=False
                )
            session.commit()
        except Exception:
            session.rollback()
            raise

    session.refresh(event)
    logger.info(
        "Updated outreach event %s%s",
        event_id,
        f"; length {stored_hours} -> {event.hours_length}h" if duration_changed else "",
    )
    return EventUpdateResult(
        event=event,
        points_recalculated=duration_changed,
        records_recalculated=recalculated,
    )


def delete_event(session: Session, event_id: int) -> int:
    """Delete an event and its participation records; returns records removed."""

    with event_lock(event_id):
        event = get_event(session, event_id)
        result = session.exec(delete(Participation).where(Participation.event_id == event_id))
        session.delete(event)
        session.commit()
    discard_event_lock(event_id)

    removed = result.rowcount or 0
    logger.info("Deleted outreach event %s with %s participation records", event_id, removed)
    return removed


def reset_all(session: Session) -> Dict[str, int]:
    """Remove every participation record and every event. Irreversible."""

    participations = session.exec(delete(Participation)).rowcount or 0
    events = session.exec(delete(OutreachEvent)).rowcount or 0
    session.commit()
    session.expunge_all()
    discard_event_lock()
    logger.warning(
        "Outreach leaderboard reset: %s events and %s participation records deleted",
        events,
        participations,
    )
    return {"events_deleted": events, "participations_deleted": participations}


def event_to_dict(event: OutreachEvent, participant_count: Optional[int] = None) -> Dict[str, Any]:
    data = {
        "id": event.id,
        "event_name": event.event_name,
        "event_date": event.event_date.isoformat(),
        "event_description": event.event_description,
        "hours_length": event.hours_length,
        "created_by": event.created_by,
        "created_at": event.created_at.isoformat() if event.created_at else None,
        "updated_at": event.updated_at.isoformat() if event.updated_at else None,
    }
    if participant_count is not None:
        data["participant_count"] = participant_count
    return data


__all__ = [
    "EventUpdateResult",
    "create_event",
    "delete_event",
    "event_to_dict",
    "get_event",
    "list_events",
    "reset_all",
    "update_event",
]
