"""Event participation endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlmodel import Session

from ...core import get_session
from ...schemas import ParticipantCreate
from ...services import ledger

router = APIRouter(prefix="/outreach", tags=["participants"])


@router.get("/events/{event_id}/participants")
def list_participants(event_id: int, session: Session = Depends(get_session)):
    """Participants of one event ordered by name."""

    return {
        "participants": [
            ledger.participant_to_dict(record, student)
            for record, student in ledger.list_for_event(session, event_id)
        ]
    }


@router.post("/events/{event_id}/participants", status_code=201)
def add_participant(
    event_id: int, body: ParticipantCreate, session: Session = Depends(get_session)
):
    """Credit a student for an event."""

    record = ledger.add_participation(
        session,
        student_id=body.student_id,
        event_id=event_id,
        role=body.participation_type,
        notes=body.notes,
        created_by=body.created_by,
    )
    return {
        "message": "Participation recorded successfully",
        "participation": record.model_dump(mode="json"),
    }


@router.delete("/events/{event_id}/participants/{participation_id}")
def remove_participant(
    event_id: int, participation_id: int, session: Session = Depends(get_session)
):
    removed = ledger.remove_participation(session, participation_id, event_id=event_id)
    return {"message": "Participation removed successfully", "removed": removed}


__all__ = ["router"]
