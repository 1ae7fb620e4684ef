"""Scheduler board use case."""

import asyncio
import time
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from subscheduler.application.interfaces.repositories import (
    JobRepositoryInterface,
    PhaseRepositoryInterface,
    SubcontractorRepositoryInterface,
)
from subscheduler.application.interfaces.services import JobChangeFeedInterface
from subscheduler.config.logging import get_logger
from subscheduler.domain.entities.assignment_board import AssignmentBoard
from subscheduler.domain.entities.job import Job, JobAssignmentRow
from subscheduler.domain.events.job_changed import JobChanged
from subscheduler.domain.exceptions.assignment_error import (
    BatchSaveError,
    BoardLoadError,
)
from subscheduler.domain.value_objects.org_calendar import ORG_TIMEZONE
from subscheduler.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from subscheduler.infrastructure.monitoring.metrics import (
    record_assignment_batch,
    record_board_save,
)

logger = get_logger(__name__)

DEFAULT_ACTIVE_PHASES = ["Job Request", "Work Order", "Pending Work Order"]


@dataclass
class BoardSaveResult:
    """Result of saving board changes."""

    rows_saved: int
    batches: int


class SchedulerBoardUseCase:
    """Loads, edits and saves an assignment board.

    The board itself is a plain domain object; this class owns the I/O
    around it: concurrent loading, batched upserts and the forced reload
    after a successful save.
    """

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        subcontractor_repo: SubcontractorRepositoryInterface,
        phase_repo: PhaseRepositoryInterface,
        transaction_service: TransactionService,
        change_feed: Optional[JobChangeFeedInterface] = None,
        active_phase_labels: Optional[Sequence[str]] = None,
        batch_size: int = 10,
        tz_name: str = ORG_TIMEZONE,
        enforce_availability: bool = False,
        selected_date: Optional[date] = None,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")

        self.job_repo = job_repo
        self.subcontractor_repo = subcontractor_repo
        self.phase_repo = phase_repo
        self.transaction_service = transaction_service
        self.change_feed = change_feed
        self.active_phase_labels = list(active_phase_labels or DEFAULT_ACTIVE_PHASES)
        self.batch_size = batch_size
        self.board = AssignmentBoard(
            selected_date=selected_date,
            tz_name=tz_name,
            enforce_availability=enforce_availability,
        )

    async def _fetch_jobs(self) -> List[Job]:
        phases = await self.phase_repo.find_by_labels(self.active_phase_labels)
        if not phases:
            logger.warning(
                "No active job phases found", labels=self.active_phase_labels
            )
            return []

        return await self.job_repo.fetch_active_phase_jobs([p.id for p in phases])

    async def load(self) -> AssignmentBoard:
        """Fetch jobs and subcontractors in parallel.

        Each part that loads replaces the board's copy; a part that fails
        keeps whatever was loaded before and a BoardLoadError is raised.
        """
        jobs_result, subcontractors_result = await asyncio.gather(
            self._fetch_jobs(),
            self.subcontractor_repo.fetch_subcontractors(),
            return_exceptions=True,
        )

        failed_parts = []
        causes = []
        for part, result in (
            ("jobs", jobs_result),
            ("subcontractors", subcontractors_result),
        ):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                failed_parts.append(part)
                causes.append(str(result))
                logger.error("Failed to load board data", part=part, error=str(result))

        if not isinstance(jobs_result, BaseException):
            self.board.replace_jobs(jobs_result)
        if not isinstance(subcontractors_result, BaseException):
            self.board.replace_subcontractors(subcontractors_result)

        if failed_parts:
            raise BoardLoadError(failed_parts, "; ".join(causes))

        logger.info(
            "Board loaded",
            jobs=len(self.board.jobs),
            subcontractors=len(self.board.subcontractors),
            selected_date=self.board.selected_date.isoformat(),
        )
        return self.board

    def _batches(self, rows: List[JobAssignmentRow]) -> List[List[JobAssignmentRow]]:
        return [
            rows[i : i + self.batch_size] for i in range(0, len(rows), self.batch_size)
        ]

    async def save(self) -> BoardSaveResult:
        """Persist touched jobs in sequential batches, then reload.

        Batches already committed stay committed when a later one fails; the
        board keeps its local edits so the save can be retried.
        """
        started = time.time()
        rows = self.board.build_update_rows()

        if not rows:
            self.board.mark_saved()
            await self.load()
            return BoardSaveResult(rows_saved=0, batches=0)

        batches = self._batches(rows)
        committed = 0

        for index, batch in enumerate(batches, start=1):
            try:
                await self.transaction_service.execute_in_transaction(
                    lambda batch=batch: self.job_repo.batch_upsert_jobs(batch),
                    name="assignment_batch",
                )
            except Exception as e:
                record_assignment_batch("failed")
                record_board_save("failed", committed, time.time() - started)
                logger.error(
                    "Assignment batch failed",
                    batch=index,
                    total_batches=len(batches),
                    committed_rows=committed,
                    error=str(e),
                )
                raise BatchSaveError(
                    committed_rows=committed,
                    failed_rows=len(rows) - committed,
                    failed_batch=index,
                    total_batches=len(batches),
                    cause=str(e),
                ) from e

            committed += len(batch)
            record_assignment_batch("success")

        self.board.mark_saved()
        record_board_save("success", committed, time.time() - started)
        logger.info("Assignments saved", rows=committed, batches=len(batches))

        await self._publish_changes(rows)
        await self.load()

        return BoardSaveResult(rows_saved=committed, batches=len(batches))

    async def _publish_changes(self, rows: List[JobAssignmentRow]) -> None:
        if self.change_feed is None:
            return

        for row in rows:
            try:
                await self.change_feed.publish(
                    JobChanged(job_id=row.id, property_id=row.property_id)
                )
            except Exception as e:
                logger.warning(
                    "Failed to publish job change", job_id=str(row.id), error=str(e)
                )
