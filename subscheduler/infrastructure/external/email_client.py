"""
Client for the hosted send-email function.
"""

from typing import Optional

import httpx

from subscheduler.application.interfaces.services import EmailSenderInterface
from subscheduler.config.logging import get_logger
from subscheduler.infrastructure.external.http_client import HTTPClient

logger = get_logger(__name__)


class EmailDeliveryError(Exception):
    """Raised when the email function refuses or fails a delivery."""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Email function returned {status_code}: {detail}")


class EmailFunctionClient(EmailSenderInterface):
    """Posts ``{to, subject, text, html}`` to the email function endpoint."""

    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport = None,
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def send_email(
        self, to: str, subject: str, html: str, text: Optional[str] = None
    ) -> None:
        payload = {"to": to, "subject": subject, "html": html}
        if text is not None:
            payload["text"] = text

        async with HTTPClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(self.url, data=payload, headers=self._headers())

        if response.status_code >= 400:
            raise EmailDeliveryError(response.status_code, response.text[:200])

        logger.info("Email sent", to=to, subject=subject)


class LoggingEmailSender(EmailSenderInterface):
    """Logs emails instead of sending them, used when no endpoint is configured."""

    async def send_email(
        self, to: str, subject: str, html: str, text: Optional[str] = None
    ) -> None:
        logger.info("Email delivery disabled, skipping", to=to, subject=subject)
