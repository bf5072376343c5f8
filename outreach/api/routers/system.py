"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ...core import BACKEND_URL
from ...services.scoring import BASE_POINTS, HOURS_PER_MULTIPLIER_STEP, REQUIREMENTS

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness probe."""

    return {"ok": True}


@router.get("/healthz")
def healthz() -> JSONResponse:
    """Kubernetes-style readiness endpoint."""

    return JSONResponse({"ok": True})


@router.get("/config")
def get_config() -> Dict[str, Any]:
    """Expose frontend configuration values and the scoring policy."""

    return {
        "backend_url": BACKEND_URL,
        "scoring": {
            "base_points": {role.value: points for role, points in BASE_POINTS.items()},
            "hours_per_multiplier_step": HOURS_PER_MULTIPLIER_STEP,
            "requirements": {
                cohort.value: {
                    "points": requirement.points,
                    "organizer_events": requirement.organizer_events,
                }
                for cohort, requirement in REQUIREMENTS.items()
            },
        },
    }


__all__ = ["router"]
