"""
Repository interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from subscheduler.domain.entities.job import Job, JobAssignmentRow, JobPhase
from subscheduler.domain.entities.subcontractor import Subcontractor
from subscheduler.domain.value_objects.assignment_status import AssignmentDecision


@dataclass
class DecisionResult:
    """Outcome reported by the data layer for a decision call."""

    success: bool
    error: Optional[str] = None


@dataclass
class AdminRecipient:
    """Administrator configured to receive assignment notifications."""

    user_id: UUID
    email: Optional[str]
    full_name: Optional[str] = None


class JobRepositoryInterface(ABC):
    """Job repository interface."""

    @abstractmethod
    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID with its lookups loaded."""
        pass

    @abstractmethod
    async def fetch_active_phase_jobs(self, phase_ids: Sequence[UUID]) -> List[Job]:
        """Jobs whose current phase is one of ``phase_ids``."""
        pass

    @abstractmethod
    async def fetch_assigned_jobs(
        self,
        subcontractor_id: UUID,
        phase_id: UUID,
        starts_at: datetime,
        ends_before: datetime,
    ) -> List[Job]:
        """Jobs assigned to a subcontractor in a phase within a time range."""
        pass

    @abstractmethod
    async def count_by_phase(self, property_id: UUID) -> Dict[UUID, int]:
        """Number of the property's jobs per current phase id."""
        pass

    @abstractmethod
    async def batch_upsert_jobs(self, rows: Sequence[JobAssignmentRow]) -> int:
        """Idempotent upsert keyed by job id. Returns the number of rows written."""
        pass


class SubcontractorRepositoryInterface(ABC):
    """Subcontractor repository interface."""

    @abstractmethod
    async def fetch_subcontractors(self) -> List[Subcontractor]:
        """All profiles with the subcontractor role, ordered by name."""
        pass

    @abstractmethod
    async def get_by_id(self, subcontractor_id: UUID) -> Optional[Subcontractor]:
        """Get subcontractor by ID."""
        pass


class PhaseRepositoryInterface(ABC):
    """Job phase repository interface."""

    @abstractmethod
    async def find_by_labels(self, labels: Sequence[str]) -> List[JobPhase]:
        """Phases whose label is one of ``labels``."""
        pass

    @abstractmethod
    async def list_all(self) -> List[JobPhase]:
        """All phases in display order."""
        pass


class NotificationRepositoryInterface(ABC):
    """In-app notification repository interface."""

    @abstractmethod
    async def get_admin_recipients(self) -> List[AdminRecipient]:
        """Recipients of assignment decision notifications."""
        pass

    @abstractmethod
    async def create_notification(
        self,
        user_id: UUID,
        title: str,
        message: str,
        notification_type: str = "system",
        reference_id: Optional[UUID] = None,
        reference_type: Optional[str] = None,
    ) -> UUID:
        """Persist an in-app notification and return its id."""
        pass


class AssignmentGatewayInterface(ABC):
    """Atomic accept/decline transition."""

    @abstractmethod
    async def decide_assignment(
        self,
        job_id: UUID,
        subcontractor_id: UUID,
        decision: AssignmentDecision,
        reason_code: Optional[str] = None,
        reason_text: Optional[str] = None,
    ) -> DecisionResult:
        """Apply the decision only if the caller is the assignee and it is pending."""
        pass
