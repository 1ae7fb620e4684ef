"""
Assignment decided domain event.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from subscheduler.domain.value_objects.assignment_status import AssignmentDecision


@dataclass
class AssignmentDecided:
    """Event raised when a subcontractor accepts or declines an assignment."""

    job_id: UUID
    subcontractor_id: UUID
    decision: AssignmentDecision
    decided_at: datetime
    reason_code: Optional[str] = None
    reason_text: Optional[str] = None
