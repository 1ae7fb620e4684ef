"""
Phase bucket value object.

Phase labels are free text maintained by administrators. They are normalised
and matched against a fixed set of lifecycle buckets for counting and
filtering.
"""

import re
from enum import Enum
from typing import Optional


class PhaseBucket(str, Enum):
    """Lifecycle buckets a job phase label can fall into."""

    JOB_REQUEST = "job_request"
    WORK_ORDER = "work_order"
    PENDING_WORK_ORDER = "pending_work_order"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    INVOICING = "invoicing"

    def matches(self, raw_label: Optional[str]) -> bool:
        return matches_phase(self, raw_label)


_PATTERNS = {
    PhaseBucket.JOB_REQUEST: re.compile(r"\bjob\s*requests?\b"),
    PhaseBucket.WORK_ORDER: re.compile(r"\bwork\s*orders?\b"),
    PhaseBucket.PENDING_WORK_ORDER: re.compile(r"\bpending\s+work\s*orders?\b"),
    PhaseBucket.COMPLETED: re.compile(r"\bcomplete(d)?\b"),
    PhaseBucket.CANCELLED: re.compile(r"\bcancel{1,2}ed\b"),
    PhaseBucket.INVOICING: re.compile(r"\binvoic(ing|e)\b"),
}

_ARCHIVED = re.compile(r"\barchived?\b")
_WHITESPACE = re.compile(r"\s+")


def normalize_phase_label(raw_label: Optional[str]) -> str:
    """Trim, lowercase and collapse internal whitespace."""
    return _WHITESPACE.sub(" ", (raw_label or "").strip().lower())


def matches_phase(bucket: PhaseBucket, raw_label: Optional[str]) -> bool:
    """Check whether a phase label belongs to ``bucket``."""
    label = normalize_phase_label(raw_label)
    if not label:
        return False

    if not _PATTERNS[bucket].search(label):
        return False

    # "Pending Work Order" must only count as pending
    if bucket == PhaseBucket.WORK_ORDER and "pending" in label:
        return False

    return True


def classify_phase(raw_label: Optional[str]) -> Optional[PhaseBucket]:
    """Return the first bucket matching the label, or None."""
    for bucket in PhaseBucket:
        if matches_phase(bucket, raw_label):
            return bucket
    return None


def is_archived_phase(raw_label: Optional[str]) -> bool:
    return bool(_ARCHIVED.search(normalize_phase_label(raw_label)))
