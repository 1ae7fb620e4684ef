"""Per-property phase count endpoints."""

import asyncio
from typing import AsyncIterator, Optional
from uuid import UUID

from fastapi import APIRouter, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from subscheduler.api.dependencies import (
    ChangeFeedDep,
    PhaseCountsServiceDep,
    SessionFactoryDep,
)
from subscheduler.api.schemas.phase import PhaseCountsResponse
from subscheduler.application.interfaces.services import JobChangeFeedInterface
from subscheduler.application.services.phase_counts import (
    PhaseCounts,
    PhaseCountsService,
    PhaseCountsWatcher,
)
from subscheduler.config.logging import get_logger
from subscheduler.infrastructure.database.repositories.job_repository import JobRepository
from subscheduler.infrastructure.database.repositories.phase_repository import (
    PhaseRepository,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/properties", tags=["phases"])


@router.get("/{property_id}/phase-counts", response_model=PhaseCountsResponse)
async def get_phase_counts(property_id: UUID, service: PhaseCountsServiceDep):
    counts = await service.get_counts(property_id)
    return PhaseCountsResponse.from_counts(counts)


async def _stream_counts(
    session_factory: async_sessionmaker[AsyncSession],
    change_feed: JobChangeFeedInterface,
    property_id: UUID,
    limit: Optional[int],
) -> AsyncIterator[str]:
    updates: asyncio.Queue = asyncio.Queue()

    async with session_factory() as session:
        service = PhaseCountsService(PhaseRepository(session), JobRepository(session))

        async def on_update(counts: PhaseCounts) -> None:
            # End the read transaction so the next refresh sees new commits
            await session.rollback()
            await updates.put(counts)

        watcher = PhaseCountsWatcher(service, change_feed, property_id, on_update)
        task = watcher.start()
        sent = 0
        try:
            while limit is None or sent < limit:
                getter = asyncio.ensure_future(updates.get())
                done, _ = await asyncio.wait(
                    {getter, task}, return_when=asyncio.FIRST_COMPLETED
                )
                if getter not in done:
                    getter.cancel()
                    # Watcher stopped; surface its error
                    task.result()
                    return

                counts = getter.result()
                sent += 1
                yield PhaseCountsResponse.from_counts(counts).model_dump_json() + "\n"
        finally:
            await watcher.stop()
            logger.debug(
                "Phase count stream closed", property_id=str(property_id), sent=sent
            )


@router.get("/{property_id}/phase-counts/stream")
async def stream_phase_counts(
    property_id: UUID,
    session_factory: SessionFactoryDep,
    change_feed: ChangeFeedDep,
    limit: Optional[int] = Query(None, ge=1, description="Stop after this many updates"),
):
    """Newline-delimited counts, re-sent whenever one of the property's jobs changes."""
    return StreamingResponse(
        _stream_counts(session_factory, change_feed, property_id, limit),
        media_type="application/x-ndjson",
    )
