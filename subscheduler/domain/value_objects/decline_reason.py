"""
Decline reason value object.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from subscheduler.domain.exceptions.validation_error import (
    InvalidFormatError,
    RequiredFieldError,
)


class DeclineReasonCode(str, Enum):
    """Fixed set of reasons a subcontractor may give when declining."""

    SCHEDULE_CONFLICT = "schedule_conflict"
    TOO_FAR = "too_far"
    SCOPE_MISMATCH = "scope_mismatch"
    RATE_ISSUE = "rate_issue"
    OTHER = "other"


@dataclass(frozen=True)
class DeclineReason:
    """Reason attached to a decline.

    ``text`` is required for ``OTHER`` and always None for the other codes.
    """

    code: DeclineReasonCode
    text: Optional[str] = None

    def __post_init__(self):
        if self.code == DeclineReasonCode.OTHER:
            if not self.text or not self.text.strip():
                raise RequiredFieldError(
                    "reason_text", "Please provide a reason for Other."
                )
            object.__setattr__(self, "text", self.text.strip())
        elif self.text is not None:
            object.__setattr__(self, "text", None)

    @classmethod
    def parse(
        cls, code: Optional[str], text: Optional[str] = None
    ) -> "DeclineReason":
        """Validate raw form input into a DeclineReason."""
        if not code:
            raise RequiredFieldError(
                "reason_code", "Please choose a reason to decline."
            )

        try:
            reason_code = DeclineReasonCode(code)
        except ValueError:
            raise InvalidFormatError(
                "reason_code", ", ".join(c.value for c in DeclineReasonCode)
            )

        return cls(code=reason_code, text=text)
