"""
API schemas for the subcontractor scheduler service.
"""

from .assignment import DecisionRequest, DecisionResponse, SubcontractorAssignmentsResponse
from .common import ErrorResponse
from .phase import PhaseCountSchema, PhaseCountsResponse
from .scheduler import (
    AssignmentChange,
    BoardChangesRequest,
    BoardResponse,
    BoardSaveResponse,
    JobSchema,
    SubcontractorColumn,
)

__all__ = [
    "DecisionRequest",
    "DecisionResponse",
    "SubcontractorAssignmentsResponse",
    "ErrorResponse",
    "PhaseCountSchema",
    "PhaseCountsResponse",
    "AssignmentChange",
    "BoardChangesRequest",
    "BoardResponse",
    "BoardSaveResponse",
    "JobSchema",
    "SubcontractorColumn",
]
