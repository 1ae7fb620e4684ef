"""
Assignment status value objects.
"""

from enum import Enum
from typing import Optional, Union


class AssignmentStatus(str, Enum):
    """Sub-status of a job's current assignment."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @classmethod
    def is_awaiting_decision(
        cls, status: Optional[Union["AssignmentStatus", str]]
    ) -> bool:
        """Pending, or never set, both wait on the subcontractor."""
        return status is None or status == cls.PENDING

    @classmethod
    def is_accepted_or_active(
        cls, status: Optional[Union["AssignmentStatus", str]]
    ) -> bool:
        """Accepted and anything downstream of it, excluding declined."""
        return status is not None and status not in (cls.PENDING, cls.DECLINED)


class AssignmentDecision(str, Enum):
    """A subcontractor's response to a pending assignment."""

    ACCEPTED = "accepted"
    DECLINED = "declined"

    def to_status(self) -> AssignmentStatus:
        return AssignmentStatus(self.value)
