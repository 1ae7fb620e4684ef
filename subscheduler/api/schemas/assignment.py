"""
Assignment decision API schemas.
"""

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from .scheduler import JobSchema


class DecisionRequest(BaseModel):
    """Accept or decline request body."""

    decision: str = Field(..., description="accepted or declined")
    reason_code: Optional[str] = Field(
        None,
        description="schedule_conflict, too_far, scope_mismatch, rate_issue or other",
    )
    reason_text: Optional[str] = Field(None, max_length=2000)


class DecisionResponse(BaseModel):
    job_id: UUID
    decision: str
    decided_at: datetime
    reason_code: Optional[str] = None
    reason_text: Optional[str] = None
    # None when the admin notification fan-out failed
    notifications_sent: Optional[int] = None


class SubcontractorAssignmentsResponse(BaseModel):
    subcontractor_id: UUID
    day: date
    pending: List[JobSchema]
    accepted: List[JobSchema]
