"""
Domain events package.
"""

from .assignment_decided import AssignmentDecided
from .job_changed import JobChanged

__all__ = [
    "AssignmentDecided",
    "JobChanged",
]
