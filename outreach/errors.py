"""Domain errors and their HTTP rendering.

Every error raised by the scoring engine derives from :class:`OutreachError`
so callers can tell the kinds apart by class or by ``code``. The API layer
renders them as::

    {"success": false, "error": "DuplicateParticipation",
     "code": "DUPLICATE_PARTICIPATION", "detail": "..."}
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class OutreachError(Exception):
    """Base class for errors surfaced to callers of the engine."""

    status_code = 400
    code = "OUTREACH_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "success": False,
            "error": type(self).__name__,
            "code": self.code,
            "detail": self.message,
        }
        if self.details:
            body["details"] = self.details
        return body


class InvalidRole(OutreachError):
    code = "INVALID_ROLE"

    def __init__(self, role: Any):
        super().__init__(
            "Invalid participation type",
            {"participation_type": role, "allowed": ["organizer", "assistant"]},
        )


class InvalidEventData(OutreachError):
    code = "INVALID_EVENT"


class DuplicateParticipation(OutreachError):
    """Raised when a (student, event) pair already has a record."""

    status_code = 409
    code = "DUPLICATE_PARTICIPATION"

    def __init__(self, student_id: int, event_id: int):
        super().__init__(
            "Student already has a participation record for this event",
            {"student_id": student_id, "event_id": event_id},
        )


class EventNotFound(OutreachError):
    status_code = 404
    code = "EVENT_NOT_FOUND"

    def __init__(self, event_id: int):
        super().__init__("Event not found", {"event_id": event_id})


class ParticipationNotFound(OutreachError):
    status_code = 404
    code = "PARTICIPATION_NOT_FOUND"

    def __init__(self, participation_id: int):
        super().__init__(
            "Participation record not found", {"participation_id": participation_id}
        )


class StudentNotFound(OutreachError):
    status_code = 404
    code = "STUDENT_NOT_FOUND"

    def __init__(self, student_id: int):
        super().__init__("Student not found", {"student_id": student_id})


class RecalculationFailure(OutreachError):
    """Bulk point rewrite did not touch every record of the event.

    The surrounding edit has been rolled back; retrying is up to the caller.
    """

    status_code = 500
    code = "RECALCULATION_FAILED"

    def __init__(self, event_id: int, expected: int, updated: int):
        super().__init__(
            "Point recalculation failed; the event edit was rolled back",
            {"event_id": event_id, "expected": expected, "updated": updated},
        )


async def _handle_outreach_error(request: Request, exc: OutreachError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    """Render domain errors with their own status codes."""

    app.add_exception_handler(OutreachError, _handle_outreach_error)


__all__ = [
    "DuplicateParticipation",
    "EventNotFound",
    "InvalidEventData",
    "InvalidRole",
    "OutreachError",
    "ParticipationNotFound",
    "RecalculationFailure",
    "StudentNotFound",
    "register_error_handlers",
]
