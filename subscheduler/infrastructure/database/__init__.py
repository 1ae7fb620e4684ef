"""
Database package.
"""

from .models import Base
from .repositories import (
    AssignmentGateway,
    JobRepository,
    NotificationRepository,
    PhaseRepository,
    SubcontractorRepository,
    TransactionService,
)

__all__ = [
    "Base",
    "AssignmentGateway",
    "JobRepository",
    "NotificationRepository",
    "PhaseRepository",
    "SubcontractorRepository",
    "TransactionService",
]
