"""Subcontractor assignment endpoints."""

from datetime import date
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Header, Query

from subscheduler.api.dependencies import (
    DecisionUseCaseDep,
    SettingsDep,
    SubcontractorAssignmentsUseCaseDep,
)
from subscheduler.api.schemas.assignment import (
    DecisionRequest,
    DecisionResponse,
    SubcontractorAssignmentsResponse,
)
from subscheduler.api.schemas.scheduler import JobSchema
from subscheduler.config.logging import get_logger
from subscheduler.domain.value_objects.org_calendar import org_today

logger = get_logger(__name__)
router = APIRouter(tags=["assignments"])


@router.get(
    "/subcontractors/{subcontractor_id}/assignments",
    response_model=SubcontractorAssignmentsResponse,
)
async def list_subcontractor_assignments(
    subcontractor_id: UUID,
    use_case: SubcontractorAssignmentsUseCaseDep,
    config: SettingsDep,
    day: Optional[date] = Query(None, description="Org-local day, defaults to today"),
):
    """Pending and accepted jobs for one subcontractor on one day."""
    result = await use_case.execute(
        subcontractor_id, day or org_today(config.ORG_TIMEZONE)
    )

    return SubcontractorAssignmentsResponse(
        subcontractor_id=subcontractor_id,
        day=result.day,
        pending=[JobSchema.from_entity(job) for job in result.pending],
        accepted=[JobSchema.from_entity(job) for job in result.accepted],
    )


@router.post("/assignments/{job_id}/decision", response_model=DecisionResponse)
async def submit_decision(
    job_id: UUID,
    decision_request: DecisionRequest,
    use_case: DecisionUseCaseDep,
    user_id: Annotated[UUID, Header(alias="X-User-Id")],
):
    """Accept or decline a job assigned to the calling subcontractor."""
    outcome = await use_case.execute(
        job_id=job_id,
        subcontractor_id=user_id,
        decision=decision_request.decision,
        reason_code=decision_request.reason_code,
        reason_text=decision_request.reason_text,
    )

    event = outcome.event
    report = outcome.notifications
    return DecisionResponse(
        job_id=event.job_id,
        decision=event.decision.value,
        decided_at=event.decided_at,
        reason_code=event.reason_code,
        reason_text=event.reason_text,
        notifications_sent=(
            report.emails_sent + report.in_app_created if report else None
        ),
    )
