"""
FastAPI dependency injection container.
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from subscheduler.application.interfaces.services import (
    EmailSenderInterface,
    JobChangeFeedInterface,
)
from subscheduler.application.services.admin_notifier import AdminNotifier
from subscheduler.application.services.phase_counts import PhaseCountsService
from subscheduler.application.use_cases.assignment_decision import (
    DecisionInFlightGuard,
    SubmitAssignmentDecisionUseCase,
)
from subscheduler.application.use_cases.scheduler_board import SchedulerBoardUseCase
from subscheduler.application.use_cases.subcontractor_assignments import (
    ListSubcontractorAssignmentsUseCase,
)
from subscheduler.config.database import get_default_session_factory
from subscheduler.config.logging import get_logger
from subscheduler.config.settings import Settings, settings
from subscheduler.infrastructure.database.repositories.assignment_gateway import (
    AssignmentGateway,
)
from subscheduler.infrastructure.database.repositories.job_repository import JobRepository
from subscheduler.infrastructure.database.repositories.notification_repository import (
    NotificationRepository,
)
from subscheduler.infrastructure.database.repositories.phase_repository import (
    PhaseRepository,
)
from subscheduler.infrastructure.database.repositories.subcontractor_repository import (
    SubcontractorRepository,
)
from subscheduler.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from subscheduler.infrastructure.external.email_client import (
    EmailFunctionClient,
    LoggingEmailSender,
)

logger = get_logger(__name__)


async def get_settings() -> Settings:
    return settings


async def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return get_default_session_factory()


async def _open_session(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


# Database Dependencies
async def get_db_session(
    factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AsyncGenerator[AsyncSession, None]:
    """Session for the request's unit of work."""
    async for session in _open_session(factory):
        yield session


async def get_lookup_session(
    factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AsyncGenerator[AsyncSession, None]:
    """Second session for reads that run concurrently with ``get_db_session``.

    An AsyncSession cannot serve two awaits at once, so the parallel board
    load gives the subcontractor query its own session.
    """
    async for session in _open_session(factory):
        yield session


async def get_job_repository(
    db: AsyncSession = Depends(get_db_session),
) -> JobRepository:
    """Get job repository instance."""
    return JobRepository(db)


async def get_phase_repository(
    db: AsyncSession = Depends(get_db_session),
) -> PhaseRepository:
    """Get phase repository instance."""
    return PhaseRepository(db)


async def get_subcontractor_repository(
    db: AsyncSession = Depends(get_lookup_session),
) -> SubcontractorRepository:
    """Get subcontractor repository instance."""
    return SubcontractorRepository(db)


async def get_notification_repository(
    db: AsyncSession = Depends(get_db_session),
) -> NotificationRepository:
    """Get notification repository instance."""
    return NotificationRepository(db)


async def get_assignment_gateway(
    db: AsyncSession = Depends(get_db_session),
) -> AssignmentGateway:
    return AssignmentGateway(db)


async def get_transaction_service(
    db: AsyncSession = Depends(get_db_session),
) -> TransactionService:
    return TransactionService(db)


# Service Dependencies
async def get_change_feed(request: Request) -> JobChangeFeedInterface:
    return request.app.state.change_feed


async def get_decision_guard(request: Request) -> DecisionInFlightGuard:
    return request.app.state.decision_guard


async def get_email_sender(
    config: Settings = Depends(get_settings),
) -> EmailSenderInterface:
    """Email function client, or a logging sender when none is configured."""
    if not config.EMAIL_FUNCTION_URL:
        return LoggingEmailSender()
    return EmailFunctionClient(
        url=config.EMAIL_FUNCTION_URL,
        api_key=config.EMAIL_FUNCTION_API_KEY,
        timeout=config.HTTP_TIMEOUT,
    )


SettingsDep = Annotated[Settings, Depends(get_settings)]
JobRepositoryDep = Annotated[JobRepository, Depends(get_job_repository)]
PhaseRepositoryDep = Annotated[PhaseRepository, Depends(get_phase_repository)]
SubcontractorRepositoryDep = Annotated[
    SubcontractorRepository, Depends(get_subcontractor_repository)
]
NotificationRepositoryDep = Annotated[
    NotificationRepository, Depends(get_notification_repository)
]
AssignmentGatewayDep = Annotated[AssignmentGateway, Depends(get_assignment_gateway)]
TransactionServiceDep = Annotated[TransactionService, Depends(get_transaction_service)]
ChangeFeedDep = Annotated[JobChangeFeedInterface, Depends(get_change_feed)]
DecisionGuardDep = Annotated[DecisionInFlightGuard, Depends(get_decision_guard)]
EmailSenderDep = Annotated[EmailSenderInterface, Depends(get_email_sender)]
SessionFactoryDep = Annotated[
    async_sessionmaker[AsyncSession], Depends(get_session_factory)
]


# Use case Dependencies
async def get_admin_notifier(
    notification_repo: NotificationRepositoryDep,
    email_sender: EmailSenderDep,
    transaction_service: TransactionServiceDep,
    config: SettingsDep,
) -> AdminNotifier:
    return AdminNotifier(
        notification_repo=notification_repo,
        email_sender=email_sender,
        transaction_service=transaction_service,
        tz_name=config.ORG_TIMEZONE,
    )


async def get_scheduler_board_use_case(
    job_repo: JobRepositoryDep,
    subcontractor_repo: SubcontractorRepositoryDep,
    phase_repo: PhaseRepositoryDep,
    transaction_service: TransactionServiceDep,
    change_feed: ChangeFeedDep,
    config: SettingsDep,
) -> SchedulerBoardUseCase:
    return SchedulerBoardUseCase(
        job_repo=job_repo,
        subcontractor_repo=subcontractor_repo,
        phase_repo=phase_repo,
        transaction_service=transaction_service,
        change_feed=change_feed,
        active_phase_labels=config.ACTIVE_PHASE_LABELS,
        batch_size=config.SCHEDULER_BATCH_SIZE,
        tz_name=config.ORG_TIMEZONE,
        enforce_availability=config.SCHEDULER_ENFORCE_AVAILABILITY,
    )


AdminNotifierDep = Annotated[AdminNotifier, Depends(get_admin_notifier)]


async def get_decision_use_case(
    gateway: AssignmentGatewayDep,
    job_repo: JobRepositoryDep,
    subcontractor_repo: SubcontractorRepositoryDep,
    notifier: AdminNotifierDep,
    guard: DecisionGuardDep,
    change_feed: ChangeFeedDep,
    config: SettingsDep,
) -> SubmitAssignmentDecisionUseCase:
    return SubmitAssignmentDecisionUseCase(
        gateway=gateway,
        job_repo=job_repo,
        subcontractor_repo=subcontractor_repo,
        notifier=notifier,
        guard=guard,
        min_feedback_seconds=config.DECISION_MIN_FEEDBACK_SECONDS,
        change_feed=change_feed,
    )


async def get_subcontractor_assignments_use_case(
    job_repo: JobRepositoryDep,
    phase_repo: PhaseRepositoryDep,
    config: SettingsDep,
) -> ListSubcontractorAssignmentsUseCase:
    return ListSubcontractorAssignmentsUseCase(
        job_repo=job_repo,
        phase_repo=phase_repo,
        phase_label=config.SUBCONTRACTOR_PHASE_LABEL,
        tz_name=config.ORG_TIMEZONE,
    )


async def get_phase_counts_service(
    phase_repo: PhaseRepositoryDep,
    job_repo: JobRepositoryDep,
) -> PhaseCountsService:
    return PhaseCountsService(phase_repo=phase_repo, job_repo=job_repo)


SchedulerBoardUseCaseDep = Annotated[
    SchedulerBoardUseCase, Depends(get_scheduler_board_use_case)
]
DecisionUseCaseDep = Annotated[
    SubmitAssignmentDecisionUseCase, Depends(get_decision_use_case)
]
SubcontractorAssignmentsUseCaseDep = Annotated[
    ListSubcontractorAssignmentsUseCase,
    Depends(get_subcontractor_assignments_use_case),
]
PhaseCountsServiceDep = Annotated[PhaseCountsService, Depends(get_phase_counts_service)]
