"""Assignment decision use case."""

import asyncio
import inspect
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Set
from uuid import UUID

from subscheduler.application.interfaces.repositories import (
    AssignmentGatewayInterface,
    DecisionResult,
    JobRepositoryInterface,
    SubcontractorRepositoryInterface,
)
from subscheduler.application.interfaces.services import JobChangeFeedInterface
from subscheduler.application.services.admin_notifier import (
    AdminNotifier,
    AssignmentNotice,
    NotificationReport,
)
from subscheduler.config.logging import get_logger
from subscheduler.domain.events.assignment_decided import AssignmentDecided
from subscheduler.domain.events.job_changed import JobChanged
from subscheduler.domain.exceptions.assignment_error import (
    AssignmentDecisionRejectedError,
    DecisionInProgressError,
)
from subscheduler.domain.exceptions.validation_error import InvalidFormatError
from subscheduler.domain.value_objects.assignment_status import AssignmentDecision
from subscheduler.domain.value_objects.decline_reason import DeclineReason
from subscheduler.infrastructure.monitoring.metrics import record_assignment_decision

logger = get_logger(__name__)


class DecisionInFlightGuard:
    """Tracks jobs with a decision currently being submitted.

    Local to one process. Cross-client races are settled by the conditional
    update in the data layer.
    """

    def __init__(self):
        self._in_flight: Set[UUID] = set()

    def acquire(self, job_id: UUID) -> None:
        if job_id in self._in_flight:
            raise DecisionInProgressError(job_id)
        self._in_flight.add(job_id)

    def release(self, job_id: UUID) -> None:
        self._in_flight.discard(job_id)

    def is_in_flight(self, job_id: UUID) -> bool:
        return job_id in self._in_flight


@dataclass
class DecisionOutcome:
    """Result of a committed decision."""

    event: AssignmentDecided
    notifications: Optional[NotificationReport] = None


class SubmitAssignmentDecisionUseCase:
    """Accept or decline a pending assignment on behalf of the assignee."""

    def __init__(
        self,
        gateway: AssignmentGatewayInterface,
        job_repo: JobRepositoryInterface,
        subcontractor_repo: SubcontractorRepositoryInterface,
        notifier: AdminNotifier,
        guard: DecisionInFlightGuard,
        min_feedback_seconds: float = 0.5,
        change_feed: Optional[JobChangeFeedInterface] = None,
    ):
        self.gateway = gateway
        self.job_repo = job_repo
        self.subcontractor_repo = subcontractor_repo
        self.notifier = notifier
        self.guard = guard
        self.min_feedback_seconds = min_feedback_seconds
        self.change_feed = change_feed

    async def execute(
        self,
        job_id: UUID,
        subcontractor_id: UUID,
        decision: str,
        reason_code: Optional[str] = None,
        reason_text: Optional[str] = None,
        on_decision: Optional[Callable[[DecisionOutcome], Any]] = None,
    ) -> DecisionOutcome:
        """Submit a decision.

        Validation failures raise before anything is sent. Once submitted,
        both success and rejection are held back until at least
        ``min_feedback_seconds`` have passed.
        """
        try:
            decision = AssignmentDecision(decision)
        except ValueError:
            raise InvalidFormatError(
                "decision", ", ".join(d.value for d in AssignmentDecision)
            )

        reason = None
        if decision == AssignmentDecision.DECLINED:
            reason = DeclineReason.parse(reason_code, reason_text)

        self.guard.acquire(job_id)
        loop = asyncio.get_running_loop()
        started = loop.time()

        error = None
        outcome = None
        try:
            result = await self._call_gateway(job_id, subcontractor_id, decision, reason)

            if result.success:
                record_assignment_decision(decision.value, "success")
                event = AssignmentDecided(
                    job_id=job_id,
                    subcontractor_id=subcontractor_id,
                    decision=decision,
                    decided_at=datetime.now(timezone.utc),
                    reason_code=reason.code.value if reason else None,
                    reason_text=reason.text if reason else None,
                )
                logger.info(
                    "Assignment decision committed",
                    job_id=str(job_id),
                    subcontractor_id=str(subcontractor_id),
                    decision=decision.value,
                )
                report = await self._notify(event)
                await self._publish_change(job_id)
                outcome = DecisionOutcome(event=event, notifications=report)
            else:
                record_assignment_decision(decision.value, "rejected")
                logger.warning(
                    "Assignment decision rejected",
                    job_id=str(job_id),
                    subcontractor_id=str(subcontractor_id),
                    decision=decision.value,
                    error=result.error,
                )
                error = AssignmentDecisionRejectedError(job_id, result.error)

            remaining = self.min_feedback_seconds - (loop.time() - started)
            # Timers may fire slightly early
            while remaining > 0:
                await asyncio.sleep(remaining)
                remaining = self.min_feedback_seconds - (loop.time() - started)
        finally:
            self.guard.release(job_id)

        if error is not None:
            raise error

        if on_decision is not None:
            callback_result = on_decision(outcome)
            if inspect.isawaitable(callback_result):
                await callback_result

        return outcome

    async def _call_gateway(
        self,
        job_id: UUID,
        subcontractor_id: UUID,
        decision: AssignmentDecision,
        reason: Optional[DeclineReason],
    ) -> DecisionResult:
        try:
            return await self.gateway.decide_assignment(
                job_id=job_id,
                subcontractor_id=subcontractor_id,
                decision=decision,
                reason_code=reason.code.value if reason else None,
                reason_text=reason.text if reason else None,
            )
        except Exception as e:
            logger.error(
                "Assignment decision call failed",
                job_id=str(job_id),
                error=str(e),
                exc_info=True,
            )
            return DecisionResult(success=False, error=str(e))

    async def _notify(self, event: AssignmentDecided) -> Optional[NotificationReport]:
        """Best-effort fan-out; the decision is already committed."""
        try:
            job = await self.job_repo.get_by_id(event.job_id)
            subcontractor = await self.subcontractor_repo.get_by_id(
                event.subcontractor_id
            )
            notice = AssignmentNotice(
                job_id=event.job_id,
                decision=event.decision,
                subcontractor_name=(
                    subcontractor.display_name if subcontractor else "Subcontractor"
                ),
                property_name=job.property_name if job else None,
                work_order_number=job.work_order_number if job else "",
                scheduled_date=job.scheduled_date if job else None,
                reason_code=event.reason_code,
                reason_text=event.reason_text,
            )
            return await self.notifier.notify_admins(notice)
        except Exception as e:
            logger.error(
                "Error sending assignment notifications",
                job_id=str(event.job_id),
                error=str(e),
                exc_info=True,
            )
            return None

    async def _publish_change(self, job_id: UUID) -> None:
        if self.change_feed is None:
            return

        try:
            job = await self.job_repo.get_by_id(job_id)
            await self.change_feed.publish(
                JobChanged(job_id=job_id, property_id=job.property_id if job else None)
            )
        except Exception as e:
            logger.warning("Failed to publish job change", job_id=str(job_id), error=str(e))
