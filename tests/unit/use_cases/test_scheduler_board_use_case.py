"""
Unit tests for SchedulerBoardUseCase.
"""

from datetime import date, datetime, timezone
from unittest.mock import AsyncMock

import pytest

from conftest import JOB_REQUEST_PHASE, make_job, make_subcontractor
from subscheduler.application.use_cases.scheduler_board import SchedulerBoardUseCase
from subscheduler.domain.exceptions.assignment_error import (
    BatchSaveError,
    BoardLoadError,
)
from subscheduler.infrastructure.realtime.change_feed import InMemoryJobChangeFeed

DAY = date(2024, 6, 17)
NOON = datetime(2024, 6, 17, 16, 0, tzinfo=timezone.utc)


class TestSchedulerBoardUseCase:
    """Test cases for SchedulerBoardUseCase."""

    @pytest.fixture
    def subcontractor(self):
        return make_subcontractor("Alice Brush")

    @pytest.fixture
    def jobs(self):
        return [make_job(NOON, work_order_num=n) for n in range(1, 26)]

    @pytest.fixture
    def use_case(
        self,
        mock_job_repository,
        mock_subcontractor_repository,
        mock_phase_repository,
        mock_transaction_service,
        jobs,
        subcontractor,
    ):
        mock_job_repository.fetch_active_phase_jobs.return_value = jobs
        mock_subcontractor_repository.fetch_subcontractors.return_value = [subcontractor]
        return SchedulerBoardUseCase(
            job_repo=mock_job_repository,
            subcontractor_repo=mock_subcontractor_repository,
            phase_repo=mock_phase_repository,
            transaction_service=mock_transaction_service,
            selected_date=DAY,
        )

    @pytest.mark.asyncio
    async def test_load_fetches_active_phase_jobs_and_subcontractors(
        self, use_case, mock_phase_repository, mock_job_repository, jobs, subcontractor
    ):
        board = await use_case.load()

        mock_phase_repository.find_by_labels.assert_awaited_once_with(
            ["Job Request", "Work Order", "Pending Work Order"]
        )
        mock_job_repository.fetch_active_phase_jobs.assert_awaited_once_with(
            [JOB_REQUEST_PHASE.id]
        )
        assert board.jobs == jobs
        assert board.subcontractors == [subcontractor]

    @pytest.mark.asyncio
    async def test_load_without_active_phases_gives_empty_board(
        self, use_case, mock_phase_repository, mock_job_repository
    ):
        mock_phase_repository.find_by_labels.return_value = []

        board = await use_case.load()

        assert board.jobs == []
        mock_job_repository.fetch_active_phase_jobs.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_partial_load_failure_keeps_loaded_part(
        self, use_case, mock_subcontractor_repository, jobs
    ):
        mock_subcontractor_repository.fetch_subcontractors.side_effect = RuntimeError(
            "profiles unavailable"
        )

        with pytest.raises(BoardLoadError) as exc_info:
            await use_case.load()

        assert exc_info.value.failed_parts == ["subcontractors"]
        assert use_case.board.jobs == jobs

    @pytest.mark.asyncio
    async def test_save_splits_rows_into_batches_of_ten(
        self, use_case, mock_job_repository, mock_transaction_service, jobs, subcontractor
    ):
        board = await use_case.load()
        for job in jobs:
            board.assign(job.id, subcontractor.id)

        result = await use_case.save()

        assert result.rows_saved == 25
        assert result.batches == 3
        batch_sizes = [
            len(call.args[0]) for call in mock_job_repository.batch_upsert_jobs.await_args_list
        ]
        assert batch_sizes == [10, 10, 5]
        assert mock_transaction_service.execute_in_transaction.await_count == 3

        saved_ids = [
            row.id
            for call in mock_job_repository.batch_upsert_jobs.await_args_list
            for row in call.args[0]
        ]
        assert len(saved_ids) == len(set(saved_ids)) == 25

    @pytest.mark.asyncio
    async def test_save_reloads_board(
        self, use_case, mock_job_repository, mock_subcontractor_repository, jobs, subcontractor
    ):
        board = await use_case.load()
        board.assign(jobs[0].id, subcontractor.id)

        await use_case.save()

        assert mock_job_repository.fetch_active_phase_jobs.await_count == 2
        assert mock_subcontractor_repository.fetch_subcontractors.await_count == 2
        assert use_case.board.has_changes is False

    @pytest.mark.asyncio
    async def test_save_without_changes_skips_writes(self, use_case, mock_job_repository):
        await use_case.load()

        result = await use_case.save()

        assert result.rows_saved == 0
        assert result.batches == 0
        mock_job_repository.batch_upsert_jobs.assert_not_awaited()
        assert mock_job_repository.fetch_active_phase_jobs.await_count == 2

    @pytest.mark.asyncio
    async def test_cancelled_edits_still_reload(
        self, use_case, mock_job_repository, jobs, subcontractor
    ):
        board = await use_case.load()
        board.assign(jobs[0].id, subcontractor.id)
        board.remove_assignment(jobs[0].id)
        assert board.has_changes is True

        result = await use_case.save()

        assert result.rows_saved == 0
        mock_job_repository.batch_upsert_jobs.assert_not_awaited()
        assert mock_job_repository.fetch_active_phase_jobs.await_count == 2
        assert use_case.board.has_changes is False

    @pytest.mark.asyncio
    async def test_failed_batch_stops_and_keeps_edits(
        self, use_case, mock_job_repository, jobs, subcontractor
    ):
        calls = {"count": 0}

        async def fail_second_batch(rows):
            calls["count"] += 1
            if calls["count"] == 2:
                raise RuntimeError("constraint violated")
            return len(rows)

        mock_job_repository.batch_upsert_jobs.side_effect = fail_second_batch
        board = await use_case.load()
        for job in jobs:
            board.assign(job.id, subcontractor.id)

        with pytest.raises(BatchSaveError) as exc_info:
            await use_case.save()

        error = exc_info.value
        assert error.committed_rows == 10
        assert error.failed_rows == 15
        assert error.failed_batch == 2
        assert error.total_batches == 3
        assert calls["count"] == 2
        assert use_case.board.has_changes is True
        assert len(use_case.board.build_update_rows()) == 25
        # No reload after a failed save
        assert mock_job_repository.fetch_active_phase_jobs.await_count == 1

    @pytest.mark.asyncio
    async def test_custom_batch_size(
        self,
        mock_job_repository,
        mock_subcontractor_repository,
        mock_phase_repository,
        mock_transaction_service,
        jobs,
        subcontractor,
    ):
        mock_job_repository.fetch_active_phase_jobs.return_value = jobs
        mock_subcontractor_repository.fetch_subcontractors.return_value = [subcontractor]
        use_case = SchedulerBoardUseCase(
            job_repo=mock_job_repository,
            subcontractor_repo=mock_subcontractor_repository,
            phase_repo=mock_phase_repository,
            transaction_service=mock_transaction_service,
            batch_size=7,
            selected_date=DAY,
        )
        board = await use_case.load()
        for job in jobs:
            board.assign(job.id, subcontractor.id)

        result = await use_case.save()

        assert result.batches == 4

    def test_invalid_batch_size(
        self,
        mock_job_repository,
        mock_subcontractor_repository,
        mock_phase_repository,
        mock_transaction_service,
    ):
        with pytest.raises(ValueError):
            SchedulerBoardUseCase(
                job_repo=mock_job_repository,
                subcontractor_repo=mock_subcontractor_repository,
                phase_repo=mock_phase_repository,
                transaction_service=mock_transaction_service,
                batch_size=0,
            )

    @pytest.mark.asyncio
    async def test_save_publishes_job_changes(
        self,
        mock_job_repository,
        mock_subcontractor_repository,
        mock_phase_repository,
        mock_transaction_service,
        jobs,
        subcontractor,
    ):
        feed = InMemoryJobChangeFeed()
        subscription = await feed.subscribe()
        mock_job_repository.fetch_active_phase_jobs.return_value = jobs[:2]
        mock_subcontractor_repository.fetch_subcontractors.return_value = [subcontractor]
        use_case = SchedulerBoardUseCase(
            job_repo=mock_job_repository,
            subcontractor_repo=mock_subcontractor_repository,
            phase_repo=mock_phase_repository,
            transaction_service=mock_transaction_service,
            change_feed=feed,
            selected_date=DAY,
        )
        board = await use_case.load()
        board.assign(jobs[0].id, subcontractor.id)

        await use_case.save()

        event = await subscription.__anext__()
        assert event.job_id == jobs[0].id
        assert event.property_id == jobs[0].property_id
        await subscription.close()

    @pytest.mark.asyncio
    async def test_publish_failure_does_not_fail_save(
        self,
        mock_job_repository,
        mock_subcontractor_repository,
        mock_phase_repository,
        mock_transaction_service,
        jobs,
        subcontractor,
    ):
        feed = AsyncMock()
        feed.publish.side_effect = RuntimeError("redis down")
        mock_job_repository.fetch_active_phase_jobs.return_value = jobs[:1]
        mock_subcontractor_repository.fetch_subcontractors.return_value = [subcontractor]
        use_case = SchedulerBoardUseCase(
            job_repo=mock_job_repository,
            subcontractor_repo=mock_subcontractor_repository,
            phase_repo=mock_phase_repository,
            transaction_service=mock_transaction_service,
            change_feed=feed,
            selected_date=DAY,
        )
        board = await use_case.load()
        board.assign(jobs[0].id, subcontractor.id)

        result = await use_case.save()

        assert result.rows_saved == 1
