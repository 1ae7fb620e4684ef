"""
Use cases package.

This package contains the business logic use cases that orchestrate
the application services and repositories.
"""

from .assignment_decision import DecisionInFlightGuard, SubmitAssignmentDecisionUseCase
from .scheduler_board import SchedulerBoardUseCase
from .subcontractor_assignments import ListSubcontractorAssignmentsUseCase

__all__ = [
    "DecisionInFlightGuard",
    "ListSubcontractorAssignmentsUseCase",
    "SchedulerBoardUseCase",
    "SubmitAssignmentDecisionUseCase",
]
