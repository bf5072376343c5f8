"""Aggregate API routers."""

from fastapi import APIRouter

from .events import router as events_router
from .leaderboard import router as leaderboard_router
from .maintenance import router as maintenance_router
from .participants import router as participants_router
from .students import router as students_router
from .system import router as system_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    leaderboard_router,
    events_router,
    participants_router,
    students_router,
    maintenance_router,
)

__all__ = ["ALL_ROUTERS"]
