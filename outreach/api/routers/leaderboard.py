"""Leaderboard endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlmodel import Session

from ...core import get_session
from ...services.leaderboard import entry_to_dict, get_leaderboard

router = APIRouter(prefix="/outreach", tags=["leaderboard"])


@router.get("/leaderboard")
def read_leaderboard(session: Session = Depends(get_session)):
    """Ranked standings for every active student."""

    return {"leaderboard": [entry_to_dict(entry) for entry in get_leaderboard(session)]}


__all__ = ["router"]
