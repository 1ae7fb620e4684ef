"""
Application interfaces package.
"""

from .repositories import (
    AdminRecipient,
    AssignmentGatewayInterface,
    DecisionResult,
    JobRepositoryInterface,
    NotificationRepositoryInterface,
    PhaseRepositoryInterface,
    SubcontractorRepositoryInterface,
)
from .services import (
    EmailSenderInterface,
    JobChangeFeedInterface,
    JobChangeSubscription,
)

__all__ = [
    "AdminRecipient",
    "AssignmentGatewayInterface",
    "DecisionResult",
    "JobRepositoryInterface",
    "NotificationRepositoryInterface",
    "PhaseRepositoryInterface",
    "SubcontractorRepositoryInterface",
    "EmailSenderInterface",
    "JobChangeFeedInterface",
    "JobChangeSubscription",
]
