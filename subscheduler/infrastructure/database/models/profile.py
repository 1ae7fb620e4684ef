"""
Profile SQLAlchemy model.
"""

from sqlalchemy import JSON, Column, String

from .base import BaseModel


class ProfileModel(BaseModel):
    """User profile; subcontractors are profiles with the subcontractor role."""

    __tablename__ = "profiles"

    full_name = Column(String(255))
    email = Column(String(255), index=True)
    avatar_url = Column(String(500))
    role = Column(String(50), nullable=False, default="user", index=True)

    # {"sunday": false, "monday": true, ...}
    working_days = Column(JSON, nullable=True)
    # Legacy list of day names, read when working_days is not set
    work_schedule = Column(JSON, nullable=True)

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, full_name={self.full_name}, role={self.role})>"
