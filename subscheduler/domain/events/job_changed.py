"""
Job changed domain event.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID


@dataclass
class JobChanged:
    """Event published when a job row is written."""

    job_id: UUID
    property_id: Optional[UUID] = None
    change: str = "updated"
    changed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "job_id": str(self.job_id),
            "property_id": str(self.property_id) if self.property_id else None,
            "change": self.change,
            "changed_at": self.changed_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobChanged":
        return cls(
            job_id=UUID(data["job_id"]),
            property_id=UUID(data["property_id"]) if data.get("property_id") else None,
            change=data.get("change", "updated"),
            changed_at=datetime.fromisoformat(data["changed_at"]),
        )
