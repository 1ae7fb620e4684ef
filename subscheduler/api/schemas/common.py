"""
Common API schemas.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body returned by the exception handlers."""

    error: str
    message: str
    type: str
    details: Optional[Dict[str, Any]] = None
