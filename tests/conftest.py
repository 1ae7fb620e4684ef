"""
Pytest configuration and fixtures.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import AsyncGenerator, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from subscheduler.application.interfaces.repositories import (
    AssignmentGatewayInterface,
    JobRepositoryInterface,
    NotificationRepositoryInterface,
    PhaseRepositoryInterface,
    SubcontractorRepositoryInterface,
)
from subscheduler.application.interfaces.services import EmailSenderInterface
from subscheduler.config.settings import Settings
from subscheduler.domain.entities.job import (
    Job,
    JobPhase,
    JobTypeRef,
    PropertyRef,
    UnitSizeRef,
)
from subscheduler.domain.entities.subcontractor import Subcontractor
from subscheduler.domain.value_objects.assignment_status import AssignmentStatus
from subscheduler.domain.value_objects.working_days import WorkingDays
from subscheduler.infrastructure.database.models import (
    Base,
    JobModel,
    JobPhaseModel,
    JobTypeModel,
    NotificationRecipientModel,
    ProfileModel,
    PropertyModel,
    UnitSizeModel,
)
from subscheduler.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

JOB_REQUEST_PHASE = JobPhase(
    id=UUID("6f1c4b1e-0000-4000-8000-000000000001"),
    job_phase_label="Job Request",
    color_dark_mode="#2563EB",
)


@pytest.fixture
def test_settings():
    """Test settings configuration."""
    return Settings(
        ENVIRONMENT="test",
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        REDIS_URL="redis://localhost:6379/1",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        DECISION_MIN_FEEDBACK_SECONDS=0.0,
    )


# Domain factories


def make_job(
    scheduled_date: datetime,
    assigned_to: Optional[UUID] = None,
    assignment_status: Optional[AssignmentStatus] = None,
    work_order_num: int = 1,
    property_name: str = "Maple Court",
    phase: JobPhase = JOB_REQUEST_PHASE,
    property_id: Optional[UUID] = None,
) -> Job:
    """Build a job entity with its lookups filled in."""
    property_id = property_id or uuid4()
    unit_size_id = uuid4()
    job_type_id = uuid4()
    return Job(
        id=uuid4(),
        work_order_num=work_order_num,
        property_id=property_id,
        unit_number=f"{100 + work_order_num}",
        unit_size_id=unit_size_id,
        job_type_id=job_type_id,
        current_phase_id=phase.id,
        scheduled_date=scheduled_date,
        property_ref=PropertyRef(id=property_id, property_name=property_name),
        unit_size=UnitSizeRef(id=unit_size_id, unit_size_label="2 Bedroom"),
        job_type=JobTypeRef(id=job_type_id, job_type_label="Full Paint"),
        phase=phase,
        assigned_to=assigned_to,
        assignment_status=assignment_status,
    )


def make_subcontractor(
    full_name: str = "Alice Brush",
    working_days: Optional[WorkingDays] = None,
    email: Optional[str] = None,
) -> Subcontractor:
    return Subcontractor(
        id=uuid4(),
        full_name=full_name,
        email=email or f"{full_name.split()[0].lower()}@example.com",
        working_days=working_days,
    )


# Mocks


@pytest.fixture
def mock_job_repository():
    """Mock job repository."""
    mock_repo = AsyncMock(spec=JobRepositoryInterface)

    mock_repo.get_by_id = AsyncMock(return_value=None)
    mock_repo.fetch_active_phase_jobs = AsyncMock(return_value=[])
    mock_repo.fetch_assigned_jobs = AsyncMock(return_value=[])
    mock_repo.count_by_phase = AsyncMock(return_value={})
    mock_repo.batch_upsert_jobs = AsyncMock(side_effect=lambda rows: len(rows))

    return mock_repo


@pytest.fixture
def mock_subcontractor_repository():
    """Mock subcontractor repository."""
    mock_repo = AsyncMock(spec=SubcontractorRepositoryInterface)

    mock_repo.fetch_subcontractors = AsyncMock(return_value=[])
    mock_repo.get_by_id = AsyncMock(return_value=None)

    return mock_repo


@pytest.fixture
def mock_phase_repository():
    """Mock phase repository."""
    mock_repo = AsyncMock(spec=PhaseRepositoryInterface)

    mock_repo.find_by_labels = AsyncMock(return_value=[JOB_REQUEST_PHASE])
    mock_repo.list_all = AsyncMock(return_value=[JOB_REQUEST_PHASE])

    return mock_repo


@pytest.fixture
def mock_notification_repository():
    """Mock notification repository."""
    mock_repo = AsyncMock(spec=NotificationRepositoryInterface)

    mock_repo.get_admin_recipients = AsyncMock(return_value=[])
    mock_repo.create_notification = AsyncMock(side_effect=lambda **kwargs: uuid4())

    return mock_repo


@pytest.fixture
def mock_assignment_gateway():
    """Mock assignment gateway."""
    return AsyncMock(spec=AssignmentGatewayInterface)


@pytest.fixture
def mock_email_sender():
    """Mock email sender."""
    sender = AsyncMock(spec=EmailSenderInterface)
    sender.send_email = AsyncMock(return_value=None)
    return sender


@pytest.fixture
def mock_transaction_service():
    """Transaction service that runs the operation without a database."""

    async def run(operation, name="operation"):
        return await operation()

    service = MagicMock(spec=TransactionService)
    service.execute_in_transaction = AsyncMock(side_effect=run)
    service.commit = AsyncMock()
    service.rollback = AsyncMock()
    return service


# Database


@pytest_asyncio.fixture
async def test_engine(tmp_path):
    """File-backed SQLite engine so separate sessions see each other's commits."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'scheduler.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@dataclass
class SeededData:
    """Rows inserted by the ``seeded`` fixture."""

    phases: Dict[str, JobPhaseModel]
    property: PropertyModel
    unit_size: UnitSizeModel
    job_type: JobTypeModel
    admin: ProfileModel
    subcontractors: List[ProfileModel] = field(default_factory=list)

    def phase_id(self, label: str) -> UUID:
        return self.phases[label].id


@pytest_asyncio.fixture
async def seeded(session_factory) -> SeededData:
    """Phases, one property with lookups, an admin recipient and two subcontractors."""
    async with session_factory() as session:
        phases = {}
        for order, (label, color) in enumerate(
            [
                ("Job Request", "#2563EB"),
                ("Work Order", "#D97706"),
                ("Pending Work Order", "#7C3AED"),
                ("Completed", "#059669"),
            ]
        ):
            phases[label] = JobPhaseModel(
                id=uuid4(), job_phase_label=label, color_dark_mode=color, sort_order=order
            )

        prop = PropertyModel(id=uuid4(), property_name="Maple Court")
        unit_size = UnitSizeModel(id=uuid4(), unit_size_label="2 Bedroom")
        job_type = JobTypeModel(id=uuid4(), job_type_label="Full Paint")
        admin = ProfileModel(
            id=uuid4(), full_name="Office Admin", email="admin@example.com", role="admin"
        )
        subs = [
            ProfileModel(
                id=uuid4(),
                full_name="Alice Brush",
                email="alice@example.com",
                role="subcontractor",
                working_days=WorkingDays.weekdays().to_dict(),
            ),
            ProfileModel(
                id=uuid4(),
                full_name="Bob Roller",
                email="bob@example.com",
                role="subcontractor",
                work_schedule=["Saturday", "Sunday"],
            ),
        ]

        session.add_all(list(phases.values()) + [prop, unit_size, job_type, admin] + subs)
        session.add(NotificationRecipientModel(id=uuid4(), user_id=admin.id))
        await session.commit()

    return SeededData(
        phases=phases,
        property=prop,
        unit_size=unit_size,
        job_type=job_type,
        admin=admin,
        subcontractors=subs,
    )


async def insert_job(
    session_factory: async_sessionmaker[AsyncSession],
    seeded: SeededData,
    scheduled_date: datetime,
    work_order_num: int,
    phase_label: str = "Job Request",
    assigned_to: Optional[UUID] = None,
    assignment_status: Optional[str] = None,
) -> UUID:
    """Insert a job row; ``scheduled_date`` must be UTC."""
    job_id = uuid4()
    async with session_factory() as session:
        session.add(
            JobModel(
                id=job_id,
                work_order_num=work_order_num,
                property_id=seeded.property.id,
                unit_number=f"{100 + work_order_num}",
                unit_size_id=seeded.unit_size.id,
                job_type_id=seeded.job_type.id,
                current_phase_id=seeded.phase_id(phase_label),
                scheduled_date=scheduled_date.astimezone(timezone.utc),
                assigned_to=assigned_to,
                assignment_status=assignment_status,
                created_by=seeded.admin.id,
            )
        )
        await session.commit()
    return job_id
