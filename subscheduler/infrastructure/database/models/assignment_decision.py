"""
Assignment decision audit SQLAlchemy model.
"""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, Uuid

from .base import BaseModel, utc_now


class AssignmentDecisionModel(BaseModel):
    """One row per committed accept/decline."""

    __tablename__ = "assignment_decisions"

    job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id"), nullable=False, index=True)
    subcontractor_id = Column(
        Uuid(as_uuid=True), ForeignKey("profiles.id"), nullable=False, index=True
    )
    decision = Column(String(20), nullable=False)
    previous_status = Column(String(20))
    reason_code = Column(String(50))
    reason_text = Column(Text)
    decided_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
