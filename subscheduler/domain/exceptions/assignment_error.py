"""
Assignment-related domain exceptions.
"""

from typing import Optional
from uuid import UUID


class AssignmentError(Exception):
    """Base exception for scheduling and assignment errors."""

    pass


class DecisionInProgressError(AssignmentError):
    """Raised when a decision for the same job is already being submitted."""

    def __init__(self, job_id: UUID):
        self.job_id = job_id
        super().__init__(f"A decision for job {job_id} is already in progress")


class AssignmentDecisionRejectedError(AssignmentError):
    """Raised when the data layer refuses a decision."""

    def __init__(self, job_id: UUID, reason: Optional[str] = None):
        self.job_id = job_id
        self.reason = reason or "Failed to process assignment decision"
        super().__init__(self.reason)


class BatchSaveError(AssignmentError):
    """Raised when a save batch fails after earlier batches were committed."""

    def __init__(
        self,
        committed_rows: int,
        failed_rows: int,
        failed_batch: int,
        total_batches: int,
        cause: Optional[str] = None,
    ):
        self.committed_rows = committed_rows
        self.failed_rows = failed_rows
        self.failed_batch = failed_batch
        self.total_batches = total_batches
        self.cause = cause
        message = (
            f"Batch {failed_batch} of {total_batches} failed: "
            f"{committed_rows} rows saved, {failed_rows} rows not saved"
        )
        if cause:
            message = f"{message} ({cause})"
        super().__init__(message)


class BoardLoadError(AssignmentError):
    """Raised when part of the board data could not be fetched."""

    def __init__(self, failed_parts: list[str], cause: Optional[str] = None):
        self.failed_parts = failed_parts
        self.cause = cause
        message = f"Failed to load {', '.join(failed_parts)}"
        if cause:
            message = f"{message}: {cause}"
        super().__init__(message)


class SubcontractorUnavailableError(AssignmentError):
    """Raised when assigning to a subcontractor who does not work that day."""

    def __init__(self, subcontractor_id: UUID, day):
        self.subcontractor_id = subcontractor_id
        self.day = day
        super().__init__(
            f"Subcontractor {subcontractor_id} is not available on {day.isoformat()}"
        )


class JobNotOnBoardError(AssignmentError):
    """Raised when a board operation names a job that is not loaded."""

    def __init__(self, job_id: UUID):
        self.job_id = job_id
        super().__init__(f"Job {job_id} is not on the board")


class UnknownSubcontractorError(AssignmentError):
    """Raised when a board operation names an unknown subcontractor."""

    def __init__(self, subcontractor_id: UUID):
        self.subcontractor_id = subcontractor_id
        super().__init__(f"Subcontractor {subcontractor_id} is not on the board")
