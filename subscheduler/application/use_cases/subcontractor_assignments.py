"""List a subcontractor's assignments for a day."""

from dataclasses import dataclass, field
from datetime import date
from typing import List
from uuid import UUID

from subscheduler.application.interfaces.repositories import (
    JobRepositoryInterface,
    PhaseRepositoryInterface,
)
from subscheduler.config.logging import get_logger
from subscheduler.domain.entities.job import Job
from subscheduler.domain.value_objects.assignment_status import AssignmentStatus
from subscheduler.domain.value_objects.org_calendar import (
    ORG_TIMEZONE,
    org_day_bounds,
)

logger = get_logger(__name__)


@dataclass
class SubcontractorAssignments:
    """Jobs awaiting a decision and jobs already accepted."""

    day: date
    pending: List[Job] = field(default_factory=list)
    accepted: List[Job] = field(default_factory=list)


class ListSubcontractorAssignmentsUseCase:
    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        phase_repo: PhaseRepositoryInterface,
        phase_label: str = "Job Request",
        tz_name: str = ORG_TIMEZONE,
    ):
        self.job_repo = job_repo
        self.phase_repo = phase_repo
        self.phase_label = phase_label
        self.tz_name = tz_name

    async def execute(self, subcontractor_id: UUID, day: date) -> SubcontractorAssignments:
        result = SubcontractorAssignments(day=day)

        phases = await self.phase_repo.find_by_labels([self.phase_label])
        if not phases:
            logger.warning("Job phase not found", label=self.phase_label)
            return result

        starts_at, ends_before = org_day_bounds(day, self.tz_name)
        jobs = await self.job_repo.fetch_assigned_jobs(
            subcontractor_id, phases[0].id, starts_at, ends_before
        )

        for job in jobs:
            if not job.is_scheduled_on(day, self.tz_name):
                continue
            if job.is_awaiting_decision():
                result.pending.append(job)
            elif AssignmentStatus.is_accepted_or_active(job.assignment_status):
                result.accepted.append(job)

        return result
