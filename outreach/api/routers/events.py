"""Outreach event management endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlmodel import Session

from ...core import get_session
from ...schemas import EventCreate, EventUpdate
from ...services import events as event_service

router = APIRouter(prefix="/outreach", tags=["events"])


@router.get("/events")
def list_events(session: Session = Depends(get_session)):
    """List all events, newest first, with participant counts."""

    return {
        "events": [
            event_service.event_to_dict(event, count)
            for event, count in event_service.list_events(session)
        ]
    }


@router.post("/events", status_code=201)
def create_event(body: EventCreate, session: Session = Depends(get_session)):
    """Create a new outreach event."""

    event = event_service.create_event(session, body)
    return {"message": "Event created successfully", "event": event_service.event_to_dict(event)}


@router.get("/events/{event_id}")
def get_event(event_id: int, session: Session = Depends(get_session)):
    return {"event": event_service.event_to_dict(event_service.get_event(session, event_id))}


@router.api_route("/events/{event_id}", methods=["PUT", "PATCH"])
def update_event(event_id: int, body: EventUpdate, session: Session = Depends(get_session)):
    """Edit an event; changing its length re-scores every participant."""

    result = event_service.update_event(session, event_id, body.model_dump(exclude_unset=True))
    return {
        "message": "Event updated successfully",
        "event": event_service.event_to_dict(result.event),
        "points_recalculated": result.points_recalculated,
        "records_recalculated": result.records_recalculated,
    }


@router.delete("/events/{event_id}")
def delete_event(event_id: int, session: Session = Depends(get_session)):
    """Delete an event together with its participation records."""

    removed = event_service.delete_event(session, event_id)
    return {"message": "Event deleted successfully", "participations_deleted": removed}


__all__ = ["router"]
