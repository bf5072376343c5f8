"""Point and eligibility rules for outreach participation.

Everything here is a pure function of its arguments:

* an event's length maps to a multiplier, ``floor(hours / 4) + 1``
  (0-3.99h is 1x, 4-7.99h is 2x, 8-11.99h is 3x and so on);
* a participation role maps to base points (organizer 8, assistant 5),
  scaled by that multiplier;
* a student's cohort maps to the season requirements they have to meet.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from ..errors import InvalidRole

HOURS_PER_MULTIPLIER_STEP = 4


class ParticipationRole(str, Enum):
    ORGANIZER = "organizer"
    ASSISTANT = "assistant"

    @classmethod
    def parse(cls, value: Union[str, "ParticipationRole", None]) -> "ParticipationRole":
        """Return the role named by ``value`` or raise :class:`InvalidRole`."""

        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidRole(value) from None


BASE_POINTS: Dict[ParticipationRole, int] = {
    ParticipationRole.ORGANIZER: 8,
    ParticipationRole.ASSISTANT: 5,
}


class Cohort(str, Enum):
    NEW = "new"
    RETURNING = "returning"


@dataclass(frozen=True)
class Requirement:
    points: int
    organizer_events: int


REQUIREMENTS: Dict[Cohort, Requirement] = {
    Cohort.NEW: Requirement(points=10, organizer_events=0),
    Cohort.RETURNING: Requirement(points=18, organizer_events=1),
}


@dataclass(frozen=True)
class EligibilityVerdict:
    requirements_met: bool
    points_needed: int
    events_needed: int


def duration_multiplier(hours_length: Optional[float]) -> int:
    """Multiplier for an event lasting ``hours_length`` hours.

    A missing length counts as zero. Callers reject negative lengths before
    getting here.
    """

    hours = hours_length or 0
    return math.floor(hours / HOURS_PER_MULTIPLIER_STEP) + 1


def points_for(role: Union[str, ParticipationRole], multiplier: int) -> int:
    return BASE_POINTS[ParticipationRole.parse(role)] * multiplier


def points_for_duration(
    role: Union[str, ParticipationRole], hours_length: Optional[float]
) -> int:
    return points_for(role, duration_multiplier(hours_length))


def cohort_for_tenure(years_on_team: int) -> Cohort:
    # Students in their first or second season are still "new".
    return Cohort.NEW if years_on_team <= 1 else Cohort.RETURNING


def evaluate_eligibility(
    cohort: Cohort, total_points: int, events_organized: int
) -> EligibilityVerdict:
    required = REQUIREMENTS[cohort]
    return EligibilityVerdict(
        requirements_met=(
            total_points >= required.points
            and events_organized >= required.organizer_events
        ),
        points_needed=max(0, required.points - total_points),
        events_needed=max(0, required.organizer_events - events_organized),
    )


__all__ = [
    "BASE_POINTS",
    "Cohort",
    "EligibilityVerdict",
    "HOURS_PER_MULTIPLIER_STEP",
    "ParticipationRole",
    "REQUIREMENTS",
    "Requirement",
    "cohort_for_tenure",
    "duration_multiplier",
    "evaluate_eligibility",
    "points_for",
    "points_for_duration",
]
