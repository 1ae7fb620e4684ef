"""
Application layer package.

This package contains use cases, services, and interfaces that implement
the business logic of the application.
"""

from .interfaces.repositories import (
    AssignmentGatewayInterface,
    JobRepositoryInterface,
    NotificationRepositoryInterface,
    PhaseRepositoryInterface,
    SubcontractorRepositoryInterface,
)
from .services.admin_notifier import AdminNotifier
from .services.phase_counts import PhaseCountsService, PhaseCountsWatcher
from .use_cases.assignment_decision import (
    DecisionInFlightGuard,
    SubmitAssignmentDecisionUseCase,
)
from .use_cases.scheduler_board import SchedulerBoardUseCase
from .use_cases.subcontractor_assignments import ListSubcontractorAssignmentsUseCase

__all__ = [
    # Interfaces
    "AssignmentGatewayInterface",
    "JobRepositoryInterface",
    "NotificationRepositoryInterface",
    "PhaseRepositoryInterface",
    "SubcontractorRepositoryInterface",
    # Services
    "AdminNotifier",
    "PhaseCountsService",
    "PhaseCountsWatcher",
    # Use Cases
    "DecisionInFlightGuard",
    "ListSubcontractorAssignmentsUseCase",
    "SchedulerBoardUseCase",
    "SubmitAssignmentDecisionUseCase",
]
