"""
Job phase repository implementation.
"""

from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from subscheduler.application.interfaces.repositories import PhaseRepositoryInterface
from subscheduler.domain.entities.job import JobPhase
from subscheduler.infrastructure.database.models.job_phase import JobPhaseModel
from subscheduler.infrastructure.database.repositories.job_repository import (
    job_phase_from_model,
)


class PhaseRepository(PhaseRepositoryInterface):
    """Job phase repository implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_labels(self, labels: Sequence[str]) -> List[JobPhase]:
        if not labels:
            return []

        result = await self.session.execute(
            select(JobPhaseModel)
            .where(JobPhaseModel.job_phase_label.in_(list(labels)))
            .order_by(JobPhaseModel.sort_order, JobPhaseModel.job_phase_label)
        )
        return [job_phase_from_model(model) for model in result.scalars().all()]

    async def list_all(self) -> List[JobPhase]:
        result = await self.session.execute(
            select(JobPhaseModel).order_by(
                JobPhaseModel.sort_order, JobPhaseModel.job_phase_label
            )
        )
        return [job_phase_from_model(model) for model in result.scalars().all()]
