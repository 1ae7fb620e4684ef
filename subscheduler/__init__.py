"""
Subcontractor scheduler service.

Assigns painting jobs to subcontractors by day and records their
accept/decline decisions.
"""

__version__ = "0.1.0"
__description__ = "Subcontractor scheduler service"
