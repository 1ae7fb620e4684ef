"""
Unit tests for SubmitAssignmentDecisionUseCase.
"""

import asyncio
import time
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from conftest import make_job, make_subcontractor
from subscheduler.application.interfaces.repositories import DecisionResult
from subscheduler.application.services.admin_notifier import (
    AdminNotifier,
    NotificationReport,
)
from subscheduler.application.use_cases.assignment_decision import (
    DecisionInFlightGuard,
    SubmitAssignmentDecisionUseCase,
)
from subscheduler.domain.exceptions.assignment_error import (
    AssignmentDecisionRejectedError,
    DecisionInProgressError,
)
from subscheduler.domain.exceptions.validation_error import (
    InvalidFormatError,
    RequiredFieldError,
)
from subscheduler.domain.value_objects.assignment_status import (
    AssignmentDecision,
    AssignmentStatus,
)
from subscheduler.infrastructure.realtime.change_feed import InMemoryJobChangeFeed

NOON = datetime(2024, 6, 17, 16, 0, tzinfo=timezone.utc)


class TestSubmitAssignmentDecisionUseCase:
    """Test cases for SubmitAssignmentDecisionUseCase."""

    @pytest.fixture
    def subcontractor(self):
        return make_subcontractor("Alice Brush")

    @pytest.fixture
    def job(self, subcontractor):
        return make_job(
            NOON,
            assigned_to=subcontractor.id,
            assignment_status=AssignmentStatus.PENDING,
            work_order_num=42,
        )

    @pytest.fixture
    def notifier(self):
        notifier = MagicMock(spec=AdminNotifier)
        notifier.notify_admins = AsyncMock(
            return_value=NotificationReport(recipients=1, emails_sent=1, in_app_created=1)
        )
        return notifier

    @pytest.fixture
    def guard(self):
        return DecisionInFlightGuard()

    @pytest.fixture
    def use_case(
        self,
        mock_assignment_gateway,
        mock_job_repository,
        mock_subcontractor_repository,
        notifier,
        guard,
        job,
        subcontractor,
    ):
        mock_assignment_gateway.decide_assignment.return_value = DecisionResult(success=True)
        mock_job_repository.get_by_id.return_value = job
        mock_subcontractor_repository.get_by_id.return_value = subcontractor
        return SubmitAssignmentDecisionUseCase(
            gateway=mock_assignment_gateway,
            job_repo=mock_job_repository,
            subcontractor_repo=mock_subcontractor_repository,
            notifier=notifier,
            guard=guard,
            min_feedback_seconds=0.0,
        )

    @pytest.mark.asyncio
    async def test_accept(self, use_case, mock_assignment_gateway, notifier, job, subcontractor):
        outcome = await use_case.execute(job.id, subcontractor.id, "accepted")

        mock_assignment_gateway.decide_assignment.assert_awaited_once_with(
            job_id=job.id,
            subcontractor_id=subcontractor.id,
            decision=AssignmentDecision.ACCEPTED,
            reason_code=None,
            reason_text=None,
        )
        assert outcome.event.decision == AssignmentDecision.ACCEPTED
        assert outcome.notifications.emails_sent == 1

        notice = notifier.notify_admins.await_args.args[0]
        assert notice.subcontractor_name == "Alice Brush"
        assert notice.property_name == "Maple Court"
        assert notice.work_order_number == "WO-000042"

    @pytest.mark.asyncio
    async def test_decline_with_other_reason(
        self, use_case, mock_assignment_gateway, job, subcontractor
    ):
        outcome = await use_case.execute(
            job.id, subcontractor.id, "declined", "other", "Truck broke down"
        )

        mock_assignment_gateway.decide_assignment.assert_awaited_once_with(
            job_id=job.id,
            subcontractor_id=subcontractor.id,
            decision=AssignmentDecision.DECLINED,
            reason_code="other",
            reason_text="Truck broke down",
        )
        assert outcome.event.reason_code == "other"
        assert outcome.event.reason_text == "Truck broke down"

    @pytest.mark.asyncio
    async def test_decline_without_reason_never_calls_gateway(
        self, use_case, mock_assignment_gateway, guard, job, subcontractor
    ):
        with pytest.raises(RequiredFieldError):
            await use_case.execute(job.id, subcontractor.id, "declined")

        mock_assignment_gateway.decide_assignment.assert_not_awaited()
        assert guard.is_in_flight(job.id) is False

    @pytest.mark.asyncio
    async def test_decline_other_without_text_never_calls_gateway(
        self, use_case, mock_assignment_gateway, job, subcontractor
    ):
        with pytest.raises(RequiredFieldError) as exc_info:
            await use_case.execute(job.id, subcontractor.id, "declined", "other", "  ")

        assert exc_info.value.field_name == "reason_text"
        mock_assignment_gateway.decide_assignment.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_decision(self, use_case, mock_assignment_gateway, job, subcontractor):
        with pytest.raises(InvalidFormatError):
            await use_case.execute(job.id, subcontractor.id, "maybe")

        mock_assignment_gateway.decide_assignment.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rejection_raises_with_reason(
        self, use_case, mock_assignment_gateway, notifier, guard, job, subcontractor
    ):
        mock_assignment_gateway.decide_assignment.return_value = DecisionResult(
            success=False, error="Job is no longer pending (current status: accepted)"
        )

        with pytest.raises(AssignmentDecisionRejectedError) as exc_info:
            await use_case.execute(job.id, subcontractor.id, "accepted")

        assert "no longer pending" in str(exc_info.value)
        notifier.notify_admins.assert_not_awaited()
        assert guard.is_in_flight(job.id) is False

    @pytest.mark.asyncio
    async def test_gateway_exception_becomes_rejection(
        self, use_case, mock_assignment_gateway, guard, job, subcontractor
    ):
        mock_assignment_gateway.decide_assignment.side_effect = RuntimeError("timeout")

        with pytest.raises(AssignmentDecisionRejectedError):
            await use_case.execute(job.id, subcontractor.id, "accepted")

        assert guard.is_in_flight(job.id) is False

    @pytest.mark.asyncio
    async def test_second_submit_while_in_flight_is_refused(
        self, use_case, mock_assignment_gateway, job, subcontractor
    ):
        release = asyncio.Event()

        async def slow_decision(**kwargs):
            await release.wait()
            return DecisionResult(success=True)

        mock_assignment_gateway.decide_assignment.side_effect = slow_decision

        first = asyncio.create_task(use_case.execute(job.id, subcontractor.id, "accepted"))
        await asyncio.sleep(0)

        with pytest.raises(DecisionInProgressError):
            await use_case.execute(job.id, subcontractor.id, "declined", "too_far")

        release.set()
        await first
        assert mock_assignment_gateway.decide_assignment.await_count == 1

    @pytest.mark.asyncio
    async def test_minimum_feedback_time_on_success(
        self,
        mock_assignment_gateway,
        mock_job_repository,
        mock_subcontractor_repository,
        notifier,
        guard,
        job,
        subcontractor,
    ):
        mock_assignment_gateway.decide_assignment.return_value = DecisionResult(success=True)
        use_case = SubmitAssignmentDecisionUseCase(
            gateway=mock_assignment_gateway,
            job_repo=mock_job_repository,
            subcontractor_repo=mock_subcontractor_repository,
            notifier=notifier,
            guard=guard,
            min_feedback_seconds=0.5,
        )

        started = time.monotonic()
        await use_case.execute(job.id, subcontractor.id, "accepted")

        assert time.monotonic() - started >= 0.5

    @pytest.mark.asyncio
    async def test_minimum_feedback_time_on_rejection(
        self,
        mock_assignment_gateway,
        mock_job_repository,
        mock_subcontractor_repository,
        notifier,
        guard,
        job,
        subcontractor,
    ):
        mock_assignment_gateway.decide_assignment.return_value = DecisionResult(
            success=False, error="Job is not assigned to you"
        )
        use_case = SubmitAssignmentDecisionUseCase(
            gateway=mock_assignment_gateway,
            job_repo=mock_job_repository,
            subcontractor_repo=mock_subcontractor_repository,
            notifier=notifier,
            guard=guard,
            min_feedback_seconds=0.5,
        )

        started = time.monotonic()
        with pytest.raises(AssignmentDecisionRejectedError):
            await use_case.execute(job.id, subcontractor.id, "accepted")

        assert time.monotonic() - started >= 0.5

    @pytest.mark.asyncio
    async def test_notification_failure_does_not_fail_decision(
        self, use_case, notifier, job, subcontractor
    ):
        notifier.notify_admins.side_effect = RuntimeError("smtp down")

        outcome = await use_case.execute(job.id, subcontractor.id, "accepted")

        assert outcome.event.decision == AssignmentDecision.ACCEPTED
        assert outcome.notifications is None

    @pytest.mark.asyncio
    async def test_callback_runs_after_success(self, use_case, job, subcontractor):
        seen = []

        async def on_decision(outcome):
            seen.append(outcome.event.job_id)

        await use_case.execute(job.id, subcontractor.id, "accepted", on_decision=on_decision)

        assert seen == [job.id]

    @pytest.mark.asyncio
    async def test_callback_not_run_on_rejection(
        self, use_case, mock_assignment_gateway, job, subcontractor
    ):
        mock_assignment_gateway.decide_assignment.return_value = DecisionResult(success=False)
        on_decision = MagicMock()

        with pytest.raises(AssignmentDecisionRejectedError) as exc_info:
            await use_case.execute(
                job.id, subcontractor.id, "accepted", on_decision=on_decision
            )

        assert str(exc_info.value) == "Failed to process assignment decision"
        on_decision.assert_not_called()

    @pytest.mark.asyncio
    async def test_publishes_job_change(
        self,
        mock_assignment_gateway,
        mock_job_repository,
        mock_subcontractor_repository,
        notifier,
        guard,
        job,
        subcontractor,
    ):
        feed = InMemoryJobChangeFeed()
        subscription = await feed.subscribe()
        mock_assignment_gateway.decide_assignment.return_value = DecisionResult(success=True)
        mock_job_repository.get_by_id.return_value = job
        use_case = SubmitAssignmentDecisionUseCase(
            gateway=mock_assignment_gateway,
            job_repo=mock_job_repository,
            subcontractor_repo=mock_subcontractor_repository,
            notifier=notifier,
            guard=guard,
            min_feedback_seconds=0.0,
            change_feed=feed,
        )

        await use_case.execute(job.id, subcontractor.id, "accepted")

        event = await subscription.__anext__()
        assert event.job_id == job.id
        assert event.property_id == job.property_id
        await subscription.close()


class TestDecisionInFlightGuard:
    def test_acquire_release(self):
        guard = DecisionInFlightGuard()
        job_id = uuid4()

        guard.acquire(job_id)
        with pytest.raises(DecisionInProgressError):
            guard.acquire(job_id)

        guard.release(job_id)
        guard.acquire(job_id)
        assert guard.is_in_flight(job_id) is True
