"""
Job phase SQLAlchemy model.
"""

from sqlalchemy import Column, Integer, String

from .base import BaseModel


class JobPhaseModel(BaseModel):
    """Lifecycle phase a job can be in."""

    __tablename__ = "job_phases"

    job_phase_label = Column(String(100), nullable=False, unique=True)
    color_dark_mode = Column(String(20))
    color_light_mode = Column(String(20))
    sort_order = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<JobPhase(id={self.id}, label={self.job_phase_label})>"
