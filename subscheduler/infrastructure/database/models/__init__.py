"""
Database models package.
"""

from .assignment_decision import AssignmentDecisionModel
from .base import Base, BaseModel
from .job import JobModel
from .job_phase import JobPhaseModel
from .notification import NotificationModel, NotificationRecipientModel
from .profile import ProfileModel
from .property import JobTypeModel, PropertyModel, UnitSizeModel

__all__ = [
    "Base",
    "BaseModel",
    "AssignmentDecisionModel",
    "JobModel",
    "JobPhaseModel",
    "JobTypeModel",
    "NotificationModel",
    "NotificationRecipientModel",
    "ProfileModel",
    "PropertyModel",
    "UnitSizeModel",
]
