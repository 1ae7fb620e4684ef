"""
Notification SQLAlchemy models.
"""

from sqlalchemy import Boolean, Column, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel


class NotificationModel(BaseModel):
    """In-app notification."""

    __tablename__ = "notifications"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("profiles.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(50), nullable=False, default="system")
    reference_id = Column(Uuid(as_uuid=True), nullable=True)
    reference_type = Column(String(50), nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)


class NotificationRecipientModel(BaseModel):
    """Administrator subscribed to assignment decision notifications."""

    __tablename__ = "sub_assignment_notification_recipients"

    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("profiles.id"), nullable=False, unique=True
    )

    profile = relationship("ProfileModel")
