"""
Unit tests for ListSubcontractorAssignmentsUseCase.
"""

from datetime import date, datetime, timezone
from uuid import uuid4

import pytest

from conftest import JOB_REQUEST_PHASE, make_job
from subscheduler.application.use_cases.subcontractor_assignments import (
    ListSubcontractorAssignmentsUseCase,
)
from subscheduler.domain.value_objects.assignment_status import AssignmentStatus

DAY = date(2024, 6, 15)


class TestListSubcontractorAssignmentsUseCase:
    """Test cases for ListSubcontractorAssignmentsUseCase."""

    @pytest.fixture
    def use_case(self, mock_job_repository, mock_phase_repository):
        return ListSubcontractorAssignmentsUseCase(
            job_repo=mock_job_repository, phase_repo=mock_phase_repository
        )

    @pytest.mark.asyncio
    async def test_queries_org_day_window(self, use_case, mock_job_repository):
        sub_id = uuid4()

        await use_case.execute(sub_id, DAY)

        mock_job_repository.fetch_assigned_jobs.assert_awaited_once_with(
            sub_id,
            JOB_REQUEST_PHASE.id,
            datetime(2024, 6, 15, 4, 0, tzinfo=timezone.utc),
            datetime(2024, 6, 16, 4, 0, tzinfo=timezone.utc),
        )

    @pytest.mark.asyncio
    async def test_splits_pending_and_accepted(self, use_case, mock_job_repository):
        sub_id = uuid4()
        # 23:30 New York time on the 15th
        late = datetime(2024, 6, 16, 3, 30, tzinfo=timezone.utc)
        never_set = make_job(late, assigned_to=sub_id, work_order_num=1)
        pending = make_job(
            late, assigned_to=sub_id, assignment_status=AssignmentStatus.PENDING, work_order_num=2
        )
        accepted = make_job(
            late, assigned_to=sub_id, assignment_status=AssignmentStatus.ACCEPTED, work_order_num=3
        )
        in_progress = make_job(
            late,
            assigned_to=sub_id,
            assignment_status=AssignmentStatus.IN_PROGRESS,
            work_order_num=4,
        )
        declined = make_job(
            late, assigned_to=sub_id, assignment_status=AssignmentStatus.DECLINED, work_order_num=5
        )
        mock_job_repository.fetch_assigned_jobs.return_value = [
            never_set,
            pending,
            accepted,
            in_progress,
            declined,
        ]

        result = await use_case.execute(sub_id, DAY)

        assert result.day == DAY
        assert result.pending == [never_set, pending]
        assert result.accepted == [accepted, in_progress]

    @pytest.mark.asyncio
    async def test_missing_phase_returns_empty(
        self, use_case, mock_phase_repository, mock_job_repository
    ):
        mock_phase_repository.find_by_labels.return_value = []

        result = await use_case.execute(uuid4(), DAY)

        assert result.pending == []
        assert result.accepted == []
        mock_job_repository.fetch_assigned_jobs.assert_not_awaited()
