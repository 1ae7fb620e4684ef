"""
Domain entities package.
"""

from .assignment_board import AssignmentBoard
from .job import (
    Job,
    JobAssignmentRow,
    JobPhase,
    JobTypeRef,
    PropertyRef,
    UnitSizeRef,
    format_work_order_number,
)
from .subcontractor import Subcontractor

__all__ = [
    "AssignmentBoard",
    "Job",
    "JobAssignmentRow",
    "JobPhase",
    "JobTypeRef",
    "PropertyRef",
    "UnitSizeRef",
    "format_work_order_number",
    "Subcontractor",
]
