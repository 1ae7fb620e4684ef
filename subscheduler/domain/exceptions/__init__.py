"""
Domain exceptions package.
"""

from .assignment_error import (
    AssignmentDecisionRejectedError,
    AssignmentError,
    BatchSaveError,
    BoardLoadError,
    DecisionInProgressError,
    JobNotOnBoardError,
    SubcontractorUnavailableError,
    UnknownSubcontractorError,
)
from .validation_error import InvalidFormatError, RequiredFieldError, ValidationError

__all__ = [
    "AssignmentDecisionRejectedError",
    "AssignmentError",
    "BatchSaveError",
    "BoardLoadError",
    "DecisionInProgressError",
    "JobNotOnBoardError",
    "SubcontractorUnavailableError",
    "UnknownSubcontractorError",
    "InvalidFormatError",
    "RequiredFieldError",
    "ValidationError",
]
