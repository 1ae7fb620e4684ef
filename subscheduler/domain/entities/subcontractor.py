"""
Subcontractor domain entity.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional
from uuid import UUID

from subscheduler.domain.value_objects.working_days import (
    WorkingDays,
    availability_summary,
    is_available_on_date,
)


@dataclass
class Subcontractor:
    """Worker profile eligible for job assignment."""

    id: UUID
    full_name: Optional[str]
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    working_days: Optional[WorkingDays] = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.email or "Unknown"

    def is_available_on(self, day: date) -> bool:
        return is_available_on_date(self.working_days, day)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "full_name": self.full_name,
            "email": self.email,
            "avatar_url": self.avatar_url,
            "working_days": self.working_days.to_dict() if self.working_days else None,
            "availability": availability_summary(self.working_days),
        }
