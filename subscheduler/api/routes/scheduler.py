"""Scheduler board endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Query

from subscheduler.api.dependencies import SchedulerBoardUseCaseDep
from subscheduler.api.schemas.scheduler import (
    BoardChangesRequest,
    BoardResponse,
    BoardSaveResponse,
)
from subscheduler.config.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/scheduler", tags=["scheduler"])


@router.get("/board", response_model=BoardResponse)
async def get_board(
    use_case: SchedulerBoardUseCaseDep,
    day: Optional[date] = Query(None, description="Org-local day, defaults to today"),
):
    """Jobs and subcontractors for one day."""
    if day is not None:
        use_case.board.select_date(day)

    board = await use_case.load()
    return BoardResponse.from_board(board)


@router.post("/board/changes", response_model=BoardSaveResponse)
async def save_board_changes(
    changes_request: BoardChangesRequest,
    use_case: SchedulerBoardUseCaseDep,
):
    """Apply assignment moves to a fresh board and save them in batches."""
    if changes_request.day is not None:
        use_case.board.select_date(changes_request.day)

    board = await use_case.load()
    for change in changes_request.changes:
        if change.subcontractor_id is None:
            board.remove_assignment(change.job_id)
        else:
            board.assign(change.job_id, change.subcontractor_id)

    result = await use_case.save()

    logger.info(
        "Board changes saved",
        changes=len(changes_request.changes),
        rows_saved=result.rows_saved,
        batches=result.batches,
    )

    return BoardSaveResponse(
        rows_saved=result.rows_saved,
        batches=result.batches,
        board=BoardResponse.from_board(use_case.board),
    )
