"""
Infrastructure package.
"""

from .database import *
from .external import *
from .monitoring import *
from .realtime import *

__all__ = [
    # Database
    "Base",
    "AssignmentGateway",
    "JobRepository",
    "NotificationRepository",
    "PhaseRepository",
    "SubcontractorRepository",
    "TransactionService",
    # External
    "EmailFunctionClient",
    "HTTPClient",
    "LoggingEmailSender",
    # Monitoring
    "HealthChecker",
    "get_metrics",
    "get_metrics_content_type",
    # Realtime
    "InMemoryJobChangeFeed",
    "RedisJobChangeFeed",
    "create_change_feed",
]
