"""Database model exports."""

from .event import OutreachEvent
from .participation import Participation
from .student import YEARS_ON_TEAM_KEY, Student, StudentAttribute

__all__ = [
    "OutreachEvent",
    "Participation",
    "Student",
    "StudentAttribute",
    "YEARS_ON_TEAM_KEY",
]
