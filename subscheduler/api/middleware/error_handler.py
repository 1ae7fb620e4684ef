"""
Error handling middleware.
"""

import traceback
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from subscheduler.api.schemas.common import ErrorResponse
from subscheduler.config.logging import get_logger
from subscheduler.domain.exceptions.assignment_error import (
    AssignmentDecisionRejectedError,
    AssignmentError,
    BatchSaveError,
    BoardLoadError,
    DecisionInProgressError,
    JobNotOnBoardError,
    SubcontractorUnavailableError,
    UnknownSubcontractorError,
)
from subscheduler.domain.exceptions.validation_error import ValidationError
from subscheduler.infrastructure.monitoring.metrics import record_error

logger = get_logger(__name__)


def _error_response(
    status_code: int,
    error: str,
    message: str,
    error_type: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=error, message=message, type=error_type, details=details or None
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def _field_details(exc: ValidationError) -> Optional[Dict[str, Any]]:
    field_name = getattr(exc, "field_name", None)
    return {"field": field_name} if field_name else None


class ErrorHandlerMiddleware:
    """Error handling middleware for FastAPI."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_error_handlers()

    def add_error_handlers(self) -> None:
        """Add custom error handlers to FastAPI app."""
        add_error_handlers(self.app)


def add_error_handlers(app: FastAPI) -> None:
    """Add custom error handlers to FastAPI app."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.warning("Validation error", error=str(exc), path=request.url.path)
        return _error_response(
            400,
            "Validation Error",
            str(exc),
            "validation_error",
            _field_details(exc),
        )

    @app.exception_handler(DecisionInProgressError)
    async def decision_in_progress_handler(
        request: Request, exc: DecisionInProgressError
    ):
        logger.info("Decision already in flight", job_id=str(exc.job_id))
        return _error_response(
            409, "Decision In Progress", str(exc), "decision_in_progress"
        )

    @app.exception_handler(AssignmentDecisionRejectedError)
    async def decision_rejected_handler(
        request: Request, exc: AssignmentDecisionRejectedError
    ):
        logger.warning(
            "Assignment decision rejected", job_id=str(exc.job_id), error=str(exc)
        )
        return _error_response(409, "Decision Rejected", str(exc), "decision_rejected")

    @app.exception_handler(SubcontractorUnavailableError)
    async def unavailable_handler(request: Request, exc: SubcontractorUnavailableError):
        return _error_response(
            409,
            "Subcontractor Unavailable",
            str(exc),
            "subcontractor_unavailable",
            {"subcontractor_id": str(exc.subcontractor_id), "day": exc.day.isoformat()},
        )

    @app.exception_handler(JobNotOnBoardError)
    @app.exception_handler(UnknownSubcontractorError)
    async def board_reference_handler(request: Request, exc: AssignmentError):
        logger.warning("Unknown board reference", error=str(exc), path=request.url.path)
        return _error_response(400, "Invalid Change", str(exc), "invalid_change")

    @app.exception_handler(BatchSaveError)
    async def batch_save_handler(request: Request, exc: BatchSaveError):
        record_error("batch_save", "api")
        logger.error("Board save failed", error=str(exc), path=request.url.path)
        return _error_response(
            502,
            "Save Failed",
            str(exc),
            "batch_save_error",
            {
                "committed_rows": exc.committed_rows,
                "failed_rows": exc.failed_rows,
                "failed_batch": exc.failed_batch,
                "total_batches": exc.total_batches,
            },
        )

    @app.exception_handler(BoardLoadError)
    async def board_load_handler(request: Request, exc: BoardLoadError):
        record_error("board_load", "api")
        logger.error("Board load failed", error=str(exc), path=request.url.path)
        return _error_response(
            502,
            "Load Failed",
            str(exc),
            "board_load_error",
            {"failed_parts": exc.failed_parts},
        )

    @app.exception_handler(AssignmentError)
    async def assignment_error_handler(request: Request, exc: AssignmentError):
        logger.warning("Assignment error", error=str(exc), path=request.url.path)
        return _error_response(400, "Assignment Error", str(exc), "assignment_error")

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        record_error("database", "api")
        logger.error("Database error", error=str(exc), path=request.url.path)
        return _error_response(
            500, "Database Error", "A database error occurred", "database_error"
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return _error_response(
            exc.status_code, "HTTP Error", str(exc.detail), "http_error"
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        record_error(type(exc).__name__, "api")
        logger.error(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
            traceback=traceback.format_exc(),
        )
        return _error_response(
            500,
            "Internal Server Error",
            "An unexpected error occurred",
            "internal_error",
        )
