"""
External integrations package.
"""

from .email_client import EmailDeliveryError, EmailFunctionClient, LoggingEmailSender
from .http_client import HTTPClient

__all__ = [
    "EmailDeliveryError",
    "EmailFunctionClient",
    "LoggingEmailSender",
    "HTTPClient",
]
