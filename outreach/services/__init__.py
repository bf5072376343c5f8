"""Service layer: scoring rules, roster, ledger, events and leaderboard."""

from .events import EventUpdateResult, create_event, delete_event, list_events, reset_all, update_event
from .leaderboard import LeaderboardEntry, compute_leaderboard, get_leaderboard
from .ledger import add_participation, list_for_event, recalculate_for_event, remove_participation
from .roster import RosterStudent, list_active_students
from .scoring import (
    Cohort,
    EligibilityVerdict,
    ParticipationRole,
    duration_multiplier,
    evaluate_eligibility,
    points_for,
)

__all__ = [
    "Cohort",
    "EligibilityVerdict",
    "EventUpdateResult",
    "LeaderboardEntry",
    "ParticipationRole",
    "RosterStudent",
    "add_participation",
    "compute_leaderboard",
    "create_event",
    "delete_event",
    "duration_multiplier",
    "evaluate_eligibility",
    "get_leaderboard",
    "list_active_students",
    "list_events",
    "list_for_event",
    "points_for",
    "recalculate_for_event",
    "remove_participation",
    "reset_all",
    "update_event",
]
