"""Privileged maintenance endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlmodel import Session

from ...core import get_session
from ...services.events import reset_all
from ..deps import require_admin

router = APIRouter(prefix="/outreach", tags=["maintenance"])


@router.post("/reset-leaderboard", dependencies=[Depends(require_admin)])
def reset_leaderboard(session: Session = Depends(get_session)):
    """Delete every outreach event and participation record."""

    counts = reset_all(session)
    return {
        "message": (
            "Outreach leaderboard has been completely reset. "
            "All events and participation records have been deleted."
        ),
        **counts,
    }


__all__ = ["router"]
