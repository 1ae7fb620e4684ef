"""
Atomic accept/decline transition at the data layer.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from subscheduler.application.interfaces.repositories import (
    AssignmentGatewayInterface,
    DecisionResult,
)
from subscheduler.config.logging import get_logger
from subscheduler.domain.value_objects.assignment_status import (
    AssignmentDecision,
    AssignmentStatus,
)
from subscheduler.infrastructure.database.models.assignment_decision import (
    AssignmentDecisionModel,
)
from subscheduler.infrastructure.database.models.base import utc_now
from subscheduler.infrastructure.database.models.job import JobModel

logger = get_logger(__name__)


class AssignmentGateway(AssignmentGatewayInterface):
    """Decides assignments with a single compare-and-set UPDATE.

    The UPDATE only matches while the caller is the assignee and the job is
    still pending, so of two concurrent decisions exactly one changes a row.
    The audit row is written in the same transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def decide_assignment(
        self,
        job_id: UUID,
        subcontractor_id: UUID,
        decision: AssignmentDecision,
        reason_code: Optional[str] = None,
        reason_text: Optional[str] = None,
    ) -> DecisionResult:
        decision = AssignmentDecision(decision)
        declined = decision == AssignmentDecision.DECLINED
        now = utc_now()

        stmt = (
            update(JobModel)
            .where(
                JobModel.id == job_id,
                JobModel.assigned_to == subcontractor_id,
                or_(
                    JobModel.assignment_status == AssignmentStatus.PENDING.value,
                    JobModel.assignment_status.is_(None),
                ),
            )
            .values(
                assignment_status=decision.to_status().value,
                assignment_decision_at=now,
                declined_reason_code=reason_code if declined else None,
                declined_reason_text=reason_text if declined else None,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )

        try:
            result = await self.session.execute(stmt)

            if result.rowcount != 1:
                await self.session.rollback()
                error = await self._explain_rejection(job_id, subcontractor_id)
                logger.info(
                    "Assignment decision not applied",
                    job_id=str(job_id),
                    subcontractor_id=str(subcontractor_id),
                    reason=error,
                )
                return DecisionResult(success=False, error=error)

            self.session.add(
                AssignmentDecisionModel(
                    job_id=job_id,
                    subcontractor_id=subcontractor_id,
                    decision=decision.value,
                    previous_status=AssignmentStatus.PENDING.value,
                    reason_code=reason_code if declined else None,
                    reason_text=reason_text if declined else None,
                    decided_at=now,
                )
            )
            await self.session.commit()

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Assignment decision transaction failed",
                job_id=str(job_id),
                error=str(e),
            )
            return DecisionResult(success=False, error="Failed to process assignment decision")

        return DecisionResult(success=True)

    async def _explain_rejection(self, job_id: UUID, subcontractor_id: UUID) -> str:
        result = await self.session.execute(
            select(JobModel.assigned_to, JobModel.assignment_status).where(
                JobModel.id == job_id
            )
        )
        row = result.one_or_none()

        if row is None:
            return "Job not found"

        assigned_to, status = row
        if assigned_to != subcontractor_id:
            return "Job is not assigned to you"
        return f"Job is no longer pending (current status: {status})"
