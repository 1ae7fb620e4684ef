"""
Database repositories package.
"""

from .assignment_gateway import AssignmentGateway
from .job_repository import JobRepository
from .notification_repository import NotificationRepository
from .phase_repository import PhaseRepository
from .subcontractor_repository import SubcontractorRepository
from .transaction_repository import TransactionService

__all__ = [
    "AssignmentGateway",
    "JobRepository",
    "NotificationRepository",
    "PhaseRepository",
    "SubcontractorRepository",
    "TransactionService",
]
