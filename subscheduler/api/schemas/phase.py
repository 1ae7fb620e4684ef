"""
Phase count API schemas.
"""

from typing import Dict
from uuid import UUID

from pydantic import BaseModel

from subscheduler.application.services.phase_counts import PhaseCounts


class PhaseCountSchema(BaseModel):
    count: int
    color: str


class PhaseCountsResponse(BaseModel):
    property_id: UUID
    buckets: Dict[str, PhaseCountSchema]
    total_jobs: PhaseCountSchema

    @classmethod
    def from_counts(cls, counts: PhaseCounts) -> "PhaseCountsResponse":
        return cls(
            property_id=counts.property_id,
            buckets={
                bucket.value: PhaseCountSchema(count=c.count, color=c.color)
                for bucket, c in counts.buckets.items()
            },
            total_jobs=PhaseCountSchema(
                count=counts.total_jobs.count, color=counts.total_jobs.color
            ),
        )
