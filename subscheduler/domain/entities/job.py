"""Job domain entity."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from subscheduler.domain.value_objects.assignment_status import AssignmentStatus
from subscheduler.domain.value_objects.org_calendar import ORG_TIMEZONE, day_equals
from subscheduler.domain.value_objects.phase_bucket import PhaseBucket, matches_phase


def format_work_order_number(work_order_num: Optional[int]) -> str:
    """Human work-order number, e.g. ``WO-000042``."""
    if work_order_num is None:
        return ""
    return f"WO-{work_order_num:06d}"


@dataclass(frozen=True)
class PropertyRef:
    id: UUID
    property_name: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None


@dataclass(frozen=True)
class UnitSizeRef:
    id: UUID
    unit_size_label: str


@dataclass(frozen=True)
class JobTypeRef:
    id: UUID
    job_type_label: str


@dataclass(frozen=True)
class JobPhase:
    id: UUID
    job_phase_label: str
    color_dark_mode: Optional[str] = None
    color_light_mode: Optional[str] = None

    def belongs_to(self, bucket: PhaseBucket) -> bool:
        return matches_phase(bucket, self.job_phase_label)


@dataclass(frozen=True)
class JobAssignmentRow:
    """Upsert-shaped write for one job.

    Carries every column the job table requires so that an
    ``INSERT ... ON CONFLICT (id) DO UPDATE`` never nulls unrelated fields.
    """

    id: UUID
    property_id: UUID
    unit_number: str
    unit_size_id: UUID
    job_type_id: UUID
    current_phase_id: UUID
    work_order_num: int
    scheduled_date: datetime
    created_by: Optional[UUID]
    assigned_to: Optional[UUID]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "property_id": self.property_id,
            "unit_number": self.unit_number,
            "unit_size_id": self.unit_size_id,
            "job_type_id": self.job_type_id,
            "current_phase_id": self.current_phase_id,
            "work_order_num": self.work_order_num,
            "scheduled_date": self.scheduled_date,
            "created_by": self.created_by,
            "assigned_to": self.assigned_to,
        }


@dataclass
class Job:
    """Job domain entity."""

    id: UUID
    work_order_num: int
    property_id: UUID
    unit_number: str
    unit_size_id: UUID
    job_type_id: UUID
    current_phase_id: UUID
    scheduled_date: datetime
    property_ref: Optional[PropertyRef] = None
    unit_size: Optional[UnitSizeRef] = None
    job_type: Optional[JobTypeRef] = None
    phase: Optional[JobPhase] = None
    description: Optional[str] = None
    assigned_to: Optional[UUID] = None
    assignment_status: Optional[AssignmentStatus] = None
    assignment_decision_at: Optional[datetime] = None
    declined_reason_code: Optional[str] = None
    declined_reason_text: Optional[str] = None
    created_by: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = datetime.now(timezone.utc)

    @property
    def work_order_number(self) -> str:
        return format_work_order_number(self.work_order_num)

    @property
    def property_name(self) -> Optional[str]:
        return self.property_ref.property_name if self.property_ref else None

    @property
    def phase_label(self) -> Optional[str]:
        return self.phase.job_phase_label if self.phase else None

    def is_scheduled_on(self, day, tz_name: str = ORG_TIMEZONE) -> bool:
        """Check whether the job falls on ``day`` in the organisation's zone."""
        return day_equals(self.scheduled_date, day, tz_name)

    def is_awaiting_decision(self) -> bool:
        return self.assigned_to is not None and AssignmentStatus.is_awaiting_decision(
            self.assignment_status
        )

    def to_assignment_row(self, assigned_to: Optional[UUID]) -> JobAssignmentRow:
        return JobAssignmentRow(
            id=self.id,
            property_id=self.property_id,
            unit_number=self.unit_number,
            unit_size_id=self.unit_size_id,
            job_type_id=self.job_type_id,
            current_phase_id=self.current_phase_id,
            work_order_num=self.work_order_num,
            scheduled_date=self.scheduled_date,
            created_by=self.created_by,
            assigned_to=assigned_to,
        )

    def to_dict(self) -> dict:
        """Convert job to dictionary."""
        return {
            "id": str(self.id),
            "work_order_num": self.work_order_num,
            "work_order_number": self.work_order_number,
            "property_id": str(self.property_id),
            "property_name": self.property_name,
            "unit_number": self.unit_number,
            "unit_size": self.unit_size.unit_size_label if self.unit_size else None,
            "job_type": self.job_type.job_type_label if self.job_type else None,
            "phase": self.phase_label,
            "phase_color": self.phase.color_dark_mode if self.phase else None,
            "scheduled_date": self.scheduled_date.isoformat(),
            "description": self.description,
            "assigned_to": str(self.assigned_to) if self.assigned_to else None,
            "assignment_status": (
                self.assignment_status.value if self.assignment_status else None
            ),
        }
