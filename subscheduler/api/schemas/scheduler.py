"""
Scheduler board API schemas.
"""

from datetime import date, datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from subscheduler.domain.entities.assignment_board import AssignmentBoard
from subscheduler.domain.entities.job import Job
from subscheduler.domain.entities.subcontractor import Subcontractor
from subscheduler.domain.value_objects.working_days import availability_summary


class JobSchema(BaseModel):
    """Job as shown on the board and in assignment lists."""

    id: UUID
    work_order_number: str
    property_id: UUID
    property_name: Optional[str] = None
    unit_number: str
    unit_size: Optional[str] = None
    job_type: Optional[str] = None
    phase: Optional[str] = None
    phase_color: Optional[str] = None
    scheduled_date: datetime
    assigned_to: Optional[UUID] = None
    assignment_status: Optional[str] = None
    declined_reason_code: Optional[str] = None
    declined_reason_text: Optional[str] = None

    @classmethod
    def from_entity(cls, job: Job, assigned_to: Optional[UUID] = None) -> "JobSchema":
        return cls(
            id=job.id,
            work_order_number=job.work_order_number,
            property_id=job.property_id,
            property_name=job.property_name,
            unit_number=job.unit_number,
            unit_size=job.unit_size.unit_size_label if job.unit_size else None,
            job_type=job.job_type.job_type_label if job.job_type else None,
            phase=job.phase_label,
            phase_color=job.phase.color_dark_mode if job.phase else None,
            scheduled_date=job.scheduled_date,
            assigned_to=assigned_to if assigned_to is not None else job.assigned_to,
            assignment_status=(
                job.assignment_status.value if job.assignment_status else None
            ),
            declined_reason_code=job.declined_reason_code,
            declined_reason_text=job.declined_reason_text,
        )


class SubcontractorColumn(BaseModel):
    """A subcontractor's drop zone and the jobs in it."""

    id: UUID
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    working_days: Optional[Dict[str, bool]] = None
    availability: str
    jobs: List[JobSchema] = Field(default_factory=list)

    @classmethod
    def from_board(
        cls, board: AssignmentBoard, subcontractor: Subcontractor
    ) -> "SubcontractorColumn":
        return cls(
            id=subcontractor.id,
            full_name=subcontractor.full_name,
            avatar_url=subcontractor.avatar_url,
            working_days=(
                subcontractor.working_days.to_dict()
                if subcontractor.working_days
                else None
            ),
            availability=availability_summary(subcontractor.working_days),
            jobs=[
                JobSchema.from_entity(job, assigned_to=subcontractor.id)
                for job in board.assigned_jobs_for(subcontractor.id)
            ],
        )


class BoardResponse(BaseModel):
    """Assignment board for one day."""

    day: date
    total_jobs: int
    unassigned_jobs: List[JobSchema]
    available_subcontractors: List[SubcontractorColumn]
    unavailable_subcontractors: List[SubcontractorColumn]
    has_changes: bool = False

    @classmethod
    def from_board(cls, board: AssignmentBoard) -> "BoardResponse":
        return cls(
            day=board.selected_date,
            total_jobs=len(board.filtered_jobs),
            unassigned_jobs=[JobSchema.from_entity(j) for j in board.unassigned_jobs()],
            available_subcontractors=[
                SubcontractorColumn.from_board(board, s)
                for s in board.available_subcontractors()
            ],
            unavailable_subcontractors=[
                SubcontractorColumn.from_board(board, s)
                for s in board.unavailable_subcontractors()
            ],
            has_changes=board.has_changes,
        )


class AssignmentChange(BaseModel):
    """Move a job onto a subcontractor, or off the board when ``subcontractor_id`` is null."""

    job_id: UUID
    subcontractor_id: Optional[UUID] = None


class BoardChangesRequest(BaseModel):
    day: Optional[date] = None
    changes: List[AssignmentChange] = Field(..., min_length=1)


class BoardSaveResponse(BaseModel):
    rows_saved: int
    batches: int
    board: BoardResponse
