"""
Domain value objects package.
"""

from .assignment_status import AssignmentDecision, AssignmentStatus
from .decline_reason import DeclineReason, DeclineReasonCode
from .org_calendar import ORG_TIMEZONE, day_equals, org_day_bounds, org_today, to_org_date
from .phase_bucket import PhaseBucket, classify_phase, is_archived_phase, matches_phase
from .working_days import WorkingDays, is_available_on_date, next_available_date

__all__ = [
    "AssignmentDecision",
    "AssignmentStatus",
    "DeclineReason",
    "DeclineReasonCode",
    "ORG_TIMEZONE",
    "day_equals",
    "org_day_bounds",
    "org_today",
    "to_org_date",
    "PhaseBucket",
    "classify_phase",
    "is_archived_phase",
    "matches_phase",
    "WorkingDays",
    "is_available_on_date",
    "next_available_date",
]
