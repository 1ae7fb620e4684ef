"""
Per-property job counts by lifecycle bucket.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, List, Optional
from uuid import UUID

from subscheduler.application.interfaces.repositories import (
    JobRepositoryInterface,
    PhaseRepositoryInterface,
)
from subscheduler.application.interfaces.services import JobChangeFeedInterface
from subscheduler.config.logging import get_logger
from subscheduler.domain.entities.job import JobPhase
from subscheduler.domain.value_objects.phase_bucket import (
    PhaseBucket,
    is_archived_phase,
    matches_phase,
)

logger = get_logger(__name__)

NEUTRAL_COLOR = "#E5E7EB"
TOTAL_COLOR = "#6B7280"


@dataclass
class PhaseCount:
    count: int = 0
    color: str = NEUTRAL_COLOR


@dataclass
class PhaseCounts:
    property_id: UUID
    buckets: Dict[PhaseBucket, PhaseCount] = field(default_factory=dict)
    total_jobs: PhaseCount = field(default_factory=lambda: PhaseCount(color=TOTAL_COLOR))

    def count_for(self, bucket: PhaseBucket) -> int:
        return self.buckets.get(bucket, PhaseCount()).count


def _first_matching_phase(
    bucket: PhaseBucket, phases: List[JobPhase]
) -> Optional[JobPhase]:
    # Archived phases never represent a bucket, so their jobs stay out of the total
    for phase in phases:
        if is_archived_phase(phase.job_phase_label):
            continue
        if matches_phase(bucket, phase.job_phase_label):
            return phase
    return None


class PhaseCountsService:
    """Counts a property's jobs in each lifecycle bucket.

    Each bucket is represented by the first phase whose label matches it; its
    dark-mode colour is reported alongside the count.
    """

    def __init__(
        self,
        phase_repo: PhaseRepositoryInterface,
        job_repo: JobRepositoryInterface,
    ):
        self.phase_repo = phase_repo
        self.job_repo = job_repo

    async def get_counts(self, property_id: UUID) -> PhaseCounts:
        phases = await self.phase_repo.list_all()
        per_phase = await self.job_repo.count_by_phase(property_id)

        counts = PhaseCounts(property_id=property_id)
        total = 0
        for bucket in PhaseBucket:
            phase = _first_matching_phase(bucket, phases)
            if phase is None:
                counts.buckets[bucket] = PhaseCount()
                continue

            count = per_phase.get(phase.id, 0)
            counts.buckets[bucket] = PhaseCount(
                count=count, color=phase.color_dark_mode or NEUTRAL_COLOR
            )
            total += count

        counts.total_jobs = PhaseCount(count=total, color=TOTAL_COLOR)

        logger.debug(
            "Computed phase counts",
            property_id=str(property_id),
            total_jobs=total,
        )
        return counts


class PhaseCountsWatcher:
    """Recomputes a property's counts whenever one of its jobs changes."""

    def __init__(
        self,
        service: PhaseCountsService,
        change_feed: JobChangeFeedInterface,
        property_id: UUID,
        on_update: Callable[[PhaseCounts], Awaitable[None]],
    ):
        self.service = service
        self.change_feed = change_feed
        self.property_id = property_id
        self.on_update = on_update
        self._task: Optional[asyncio.Task] = None

    async def refresh(self) -> PhaseCounts:
        counts = await self.service.get_counts(self.property_id)
        await self.on_update(counts)
        return counts

    async def run(self) -> None:
        """Emit the current counts, then once per relevant change."""
        subscription = await self.change_feed.subscribe()
        try:
            await self.refresh()
            async for event in subscription:
                if event.property_id != self.property_id:
                    continue
                await self.refresh()
        finally:
            await subscription.close()

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
