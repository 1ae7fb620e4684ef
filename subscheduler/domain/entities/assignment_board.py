"""
Assignment board aggregate.

Holds the administrator's working copy of job assignments for a selected
day. All mutations are local until the rows returned by
``build_update_rows`` are persisted; a reload always discards local edits.
"""

from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Set
from uuid import UUID

from subscheduler.domain.entities.job import Job, JobAssignmentRow
from subscheduler.domain.entities.subcontractor import Subcontractor
from subscheduler.domain.exceptions.assignment_error import (
    JobNotOnBoardError,
    SubcontractorUnavailableError,
    UnknownSubcontractorError,
)
from subscheduler.domain.value_objects.org_calendar import ORG_TIMEZONE, org_today


class AssignmentBoard:
    """Drag-and-drop assignment state for one administrator session."""

    def __init__(
        self,
        selected_date: Optional[date] = None,
        tz_name: str = ORG_TIMEZONE,
        enforce_availability: bool = False,
    ):
        self.tz_name = tz_name
        self.enforce_availability = enforce_availability
        self.selected_date = selected_date or org_today(tz_name)

        self.jobs: List[Job] = []
        self.subcontractors: List[Subcontractor] = []
        self.assignments: Dict[UUID, UUID] = {}
        self.jobs_to_unassign: Set[UUID] = set()
        self.has_changes = False
        self.dragged_job_id: Optional[UUID] = None

        self._touched: Set[UUID] = set()

    # Loading

    def replace_jobs(self, jobs: Iterable[Job]) -> None:
        """Hard reset from a fresh fetch. Unsaved edits are dropped."""
        self.jobs = list(jobs)
        self.assignments = {
            job.id: job.assigned_to for job in self.jobs if job.assigned_to
        }
        self.jobs_to_unassign = set()
        self._touched = set()
        self.has_changes = False
        self.dragged_job_id = None

    def replace_subcontractors(self, subcontractors: Iterable[Subcontractor]) -> None:
        self.subcontractors = list(subcontractors)

    # Lookups

    def get_job(self, job_id: UUID) -> Job:
        for job in self.jobs:
            if job.id == job_id:
                return job
        raise JobNotOnBoardError(job_id)

    def get_subcontractor(self, subcontractor_id: UUID) -> Subcontractor:
        for subcontractor in self.subcontractors:
            if subcontractor.id == subcontractor_id:
                return subcontractor
        raise UnknownSubcontractorError(subcontractor_id)

    # Mutations

    def begin_drag(self, job_id: UUID) -> None:
        self.get_job(job_id)
        self.dragged_job_id = job_id

    def drop(self, subcontractor_id: UUID) -> bool:
        """Assign the dragged job to ``subcontractor_id``.

        Returns False when nothing is being dragged.
        """
        if self.dragged_job_id is None:
            return False

        job_id = self.dragged_job_id
        self.dragged_job_id = None
        self.assign(job_id, subcontractor_id)
        return True

    def assign(self, job_id: UUID, subcontractor_id: UUID) -> None:
        self.get_job(job_id)
        subcontractor = self.get_subcontractor(subcontractor_id)

        if self.enforce_availability and not subcontractor.is_available_on(
            self.selected_date
        ):
            raise SubcontractorUnavailableError(subcontractor_id, self.selected_date)

        self.assignments[job_id] = subcontractor_id
        self.jobs_to_unassign.discard(job_id)
        self._touched.add(job_id)
        self.has_changes = True

    def remove_assignment(self, job_id: UUID) -> None:
        job = self.get_job(job_id)

        self.assignments.pop(job_id, None)
        if job.assigned_to:
            self.jobs_to_unassign.add(job_id)
        self._touched.add(job_id)
        self.has_changes = True

    # Date navigation, re-filters only

    def select_date(self, day: date) -> None:
        self.selected_date = day

    def next_day(self) -> None:
        self.selected_date = self.selected_date + timedelta(days=1)

    def previous_day(self) -> None:
        self.selected_date = self.selected_date - timedelta(days=1)

    def go_to_today(self) -> None:
        self.selected_date = org_today(self.tz_name)

    # Derived views

    @property
    def filtered_jobs(self) -> List[Job]:
        return [
            job
            for job in self.jobs
            if job.is_scheduled_on(self.selected_date, self.tz_name)
        ]

    def unassigned_jobs(self) -> List[Job]:
        return [
            job
            for job in self.filtered_jobs
            if job.id not in self.assignments or job.id in self.jobs_to_unassign
        ]

    def assigned_jobs_for(self, subcontractor_id: UUID) -> List[Job]:
        return [
            job
            for job in self.filtered_jobs
            if self.assignments.get(job.id) == subcontractor_id
            and job.id not in self.jobs_to_unassign
        ]

    def available_subcontractors(self) -> List[Subcontractor]:
        return [s for s in self.subcontractors if s.is_available_on(self.selected_date)]

    def unavailable_subcontractors(self) -> List[Subcontractor]:
        return [
            s for s in self.subcontractors if not s.is_available_on(self.selected_date)
        ]

    # Persistence

    def build_update_rows(self) -> List[JobAssignmentRow]:
        """One upsert row per touched job.

        Removing a job that was never persisted as assigned leaves nothing to
        write, so such jobs produce no row.
        """
        rows: Dict[UUID, JobAssignmentRow] = {}
        for job in self.jobs:
            if job.id not in self._touched:
                continue

            if job.id in self.jobs_to_unassign:
                rows[job.id] = job.to_assignment_row(None)
            elif job.id in self.assignments:
                rows[job.id] = job.to_assignment_row(self.assignments[job.id])

        return list(rows.values())

    def mark_saved(self) -> None:
        self.jobs_to_unassign = set()
        self._touched = set()
        self.has_changes = False
