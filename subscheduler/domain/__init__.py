"""
Domain package.
"""

from .entities import *
from .events import *
from .exceptions import *
from .value_objects import *

__all__ = [
    # Entities
    "AssignmentBoard",
    "Job",
    "JobAssignmentRow",
    "Subcontractor",

    # Events
    "AssignmentDecided",
    "JobChanged",

    # Exceptions
    "AssignmentError",
    "ValidationError",

    # Value Objects
    "AssignmentDecision",
    "AssignmentStatus",
    "DeclineReason",
    "DeclineReasonCode",
    "PhaseBucket",
    "WorkingDays",
]
