"""
Application services package.
"""

from .admin_notifier import AdminNotifier, AssignmentNotice, NotificationReport
from .phase_counts import PhaseCounts, PhaseCountsService, PhaseCountsWatcher

__all__ = [
    "AdminNotifier",
    "AssignmentNotice",
    "NotificationReport",
    "PhaseCounts",
    "PhaseCountsService",
    "PhaseCountsWatcher",
]
