"""
Job SQLAlchemy model.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel


class JobModel(BaseModel):
    """Job database model."""

    __tablename__ = "jobs"

    work_order_num = Column(Integer, nullable=False, unique=True)
    property_id = Column(
        Uuid(as_uuid=True), ForeignKey("properties.id"), nullable=False, index=True
    )
    unit_number = Column(String(50), nullable=False)
    unit_size_id = Column(Uuid(as_uuid=True), ForeignKey("unit_sizes.id"), nullable=False)
    job_type_id = Column(Uuid(as_uuid=True), ForeignKey("job_types.id"), nullable=False)
    current_phase_id = Column(
        Uuid(as_uuid=True), ForeignKey("job_phases.id"), nullable=False, index=True
    )
    scheduled_date = Column(DateTime(timezone=True), nullable=False, index=True)
    description = Column(Text)

    # Assignment
    assigned_to = Column(
        Uuid(as_uuid=True), ForeignKey("profiles.id"), nullable=True, index=True
    )
    assignment_status = Column(String(20), nullable=True, index=True)
    assignment_decision_at = Column(DateTime(timezone=True))
    declined_reason_code = Column(String(50))
    declined_reason_text = Column(Text)

    created_by = Column(Uuid(as_uuid=True), ForeignKey("profiles.id"), nullable=True)

    # Relationships
    property = relationship("PropertyModel")
    unit_size = relationship("UnitSizeModel")
    job_type = relationship("JobTypeModel")
    phase = relationship("JobPhaseModel")
    assignee = relationship("ProfileModel", foreign_keys=[assigned_to])

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, work_order_num={self.work_order_num})>"
