"""
Notification repository implementation.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from subscheduler.application.interfaces.repositories import (
    AdminRecipient,
    NotificationRepositoryInterface,
)
from subscheduler.infrastructure.database.models.notification import (
    NotificationModel,
    NotificationRecipientModel,
)
from subscheduler.infrastructure.database.models.profile import ProfileModel


class NotificationRepository(NotificationRepositoryInterface):
    """Notification repository implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_admin_recipients(self) -> List[AdminRecipient]:
        result = await self.session.execute(
            select(
                NotificationRecipientModel.user_id,
                ProfileModel.email,
                ProfileModel.full_name,
            )
            .join(ProfileModel, ProfileModel.id == NotificationRecipientModel.user_id)
            .order_by(ProfileModel.full_name)
        )
        return [
            AdminRecipient(user_id=user_id, email=email, full_name=full_name)
            for user_id, email, full_name in result.all()
        ]

    async def create_notification(
        self,
        user_id: UUID,
        title: str,
        message: str,
        notification_type: str = "system",
        reference_id: Optional[UUID] = None,
        reference_type: Optional[str] = None,
    ) -> UUID:
        notification = NotificationModel(
            user_id=user_id,
            title=title,
            message=message,
            type=notification_type,
            reference_id=reference_id,
            reference_type=reference_type,
            is_read=False,
        )
        self.session.add(notification)
        await self.session.flush()
        return notification.id
