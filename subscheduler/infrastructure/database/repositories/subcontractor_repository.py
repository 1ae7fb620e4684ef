"""
Subcontractor repository implementation.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from subscheduler.application.interfaces.repositories import (
    SubcontractorRepositoryInterface,
)
from subscheduler.domain.entities.subcontractor import Subcontractor
from subscheduler.domain.value_objects.working_days import parse_working_days
from subscheduler.infrastructure.database.models.profile import ProfileModel

SUBCONTRACTOR_ROLE = "subcontractor"


class SubcontractorRepository(SubcontractorRepositoryInterface):
    """Subcontractors are profiles with the subcontractor role."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_subcontractors(self) -> List[Subcontractor]:
        result = await self.session.execute(
            select(ProfileModel)
            .where(ProfileModel.role == SUBCONTRACTOR_ROLE)
            .order_by(ProfileModel.full_name)
        )
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def get_by_id(self, subcontractor_id: UUID) -> Optional[Subcontractor]:
        result = await self.session.execute(
            select(ProfileModel).where(ProfileModel.id == subcontractor_id)
        )
        model = result.scalar_one_or_none()
        return self._model_to_entity(model) if model else None

    def _model_to_entity(self, model: ProfileModel) -> Subcontractor:
        raw_schedule = (
            model.working_days if model.working_days is not None else model.work_schedule
        )
        return Subcontractor(
            id=model.id,
            full_name=model.full_name,
            email=model.email,
            avatar_url=model.avatar_url,
            working_days=parse_working_days(raw_schedule),
        )
