"""Job repository implementation."""

from datetime import datetime
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import case, func, null, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from subscheduler.application.interfaces.repositories import JobRepositoryInterface
from subscheduler.config.logging import get_logger
from subscheduler.domain.entities.job import (
    Job,
    JobAssignmentRow,
    JobPhase,
    JobTypeRef,
    PropertyRef,
    UnitSizeRef,
)
from subscheduler.domain.value_objects.assignment_status import AssignmentStatus
from subscheduler.domain.value_objects.org_calendar import ensure_utc
from subscheduler.infrastructure.database.models.base import utc_now
from subscheduler.infrastructure.database.models.job import JobModel

logger = get_logger(__name__)

_UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def job_phase_from_model(model) -> JobPhase:
    return JobPhase(
        id=model.id,
        job_phase_label=model.job_phase_label,
        color_dark_mode=model.color_dark_mode,
        color_light_mode=model.color_light_mode,
    )


class JobRepository(JobRepositoryInterface):
    """Job repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _select_jobs(self):
        return (
            select(JobModel)
            .options(
                selectinload(JobModel.property),
                selectinload(JobModel.unit_size),
                selectinload(JobModel.job_type),
                selectinload(JobModel.phase),
            )
            .execution_options(populate_existing=True)
        )

    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID."""
        stmt = self._select_jobs().where(JobModel.id == job_id)
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def fetch_active_phase_jobs(self, phase_ids: Sequence[UUID]) -> List[Job]:
        """Jobs currently in one of the given phases, earliest first."""
        if not phase_ids:
            return []

        stmt = (
            self._select_jobs()
            .where(JobModel.current_phase_id.in_(list(phase_ids)))
            .order_by(JobModel.scheduled_date, JobModel.work_order_num)
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def fetch_assigned_jobs(
        self,
        subcontractor_id: UUID,
        phase_id: UUID,
        starts_at: datetime,
        ends_before: datetime,
    ) -> List[Job]:
        stmt = (
            self._select_jobs()
            .where(
                JobModel.assigned_to == subcontractor_id,
                JobModel.current_phase_id == phase_id,
                JobModel.scheduled_date >= ensure_utc(starts_at),
                JobModel.scheduled_date < ensure_utc(ends_before),
            )
            .order_by(JobModel.scheduled_date)
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def count_by_phase(self, property_id: UUID) -> Dict[UUID, int]:
        stmt = (
            select(JobModel.current_phase_id, func.count(JobModel.id))
            .where(JobModel.property_id == property_id)
            .group_by(JobModel.current_phase_id)
        )
        result = await self.db.execute(stmt)
        return {phase_id: count for phase_id, count in result.all()}

    async def batch_upsert_jobs(self, rows: Sequence[JobAssignmentRow]) -> int:
        """Insert or update jobs keyed by id.

        A row that changes ``assigned_to`` resets the assignment to pending
        (or clears it when unassigned) and drops any earlier decision. A row
        that keeps the same assignee leaves the decision state untouched, so
        writing the same rows twice gives the same result as writing them once.
        """
        if not rows:
            return 0

        dialect = self.db.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"Upsert is not supported for dialect {dialect}")

        now = utc_now()
        values = []
        for row in rows:
            data = row.to_dict()
            data["scheduled_date"] = ensure_utc(row.scheduled_date)
            data["assignment_status"] = (
                AssignmentStatus.PENDING.value if row.assigned_to else None
            )
            data["created_at"] = now
            data["updated_at"] = now
            values.append(data)

        table = JobModel.__table__
        stmt = insert(table).values(values)
        excluded = stmt.excluded
        reassigned = table.c.assigned_to.is_distinct_from(excluded.assigned_to)

        # An existing row keeps its phase and work-order number
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.id],
            set_={
                "property_id": excluded.property_id,
                "unit_number": excluded.unit_number,
                "unit_size_id": excluded.unit_size_id,
                "job_type_id": excluded.job_type_id,
                "scheduled_date": excluded.scheduled_date,
                "created_by": excluded.created_by,
                "assigned_to": excluded.assigned_to,
                "assignment_status": case(
                    (reassigned, excluded.assignment_status),
                    else_=table.c.assignment_status,
                ),
                "assignment_decision_at": case(
                    (reassigned, null()), else_=table.c.assignment_decision_at
                ),
                "declined_reason_code": case(
                    (reassigned, null()), else_=table.c.declined_reason_code
                ),
                "declined_reason_text": case(
                    (reassigned, null()), else_=table.c.declined_reason_text
                ),
                "updated_at": excluded.updated_at,
            },
        )

        await self.db.execute(stmt)
        # Use flush instead of commit to maintain transaction atomicity
        await self.db.flush()

        logger.debug("Upserted job rows", rows=len(values))
        return len(values)

    def _model_to_entity(self, model: JobModel) -> Job:
        """Convert SQLAlchemy model to domain entity."""
        return Job(
            id=model.id,
            work_order_num=model.work_order_num,
            property_id=model.property_id,
            unit_number=model.unit_number,
            unit_size_id=model.unit_size_id,
            job_type_id=model.job_type_id,
            current_phase_id=model.current_phase_id,
            scheduled_date=ensure_utc(model.scheduled_date),
            property_ref=(
                PropertyRef(
                    id=model.property.id,
                    property_name=model.property.property_name,
                    address=model.property.address,
                    city=model.property.city,
                    state=model.property.state,
                )
                if model.property
                else None
            ),
            unit_size=(
                UnitSizeRef(
                    id=model.unit_size.id,
                    unit_size_label=model.unit_size.unit_size_label,
                )
                if model.unit_size
                else None
            ),
            job_type=(
                JobTypeRef(
                    id=model.job_type.id, job_type_label=model.job_type.job_type_label
                )
                if model.job_type
                else None
            ),
            phase=job_phase_from_model(model.phase) if model.phase else None,
            description=model.description,
            assigned_to=model.assigned_to,
            assignment_status=(
                AssignmentStatus(model.assignment_status)
                if model.assignment_status
                else None
            ),
            assignment_decision_at=(
                ensure_utc(model.assignment_decision_at)
                if model.assignment_decision_at
                else None
            ),
            declined_reason_code=model.declined_reason_code,
            declined_reason_text=model.declined_reason_text,
            created_by=model.created_by,
            created_at=ensure_utc(model.created_at) if model.created_at else None,
            updated_at=ensure_utc(model.updated_at) if model.updated_at else None,
        )
