"""
Service interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator, Optional

from subscheduler.domain.events.job_changed import JobChanged


class EmailSenderInterface(ABC):
    """Interface for outgoing email delivery."""

    @abstractmethod
    async def send_email(
        self, to: str, subject: str, html: str, text: Optional[str] = None
    ) -> None:
        """Send an email, raising on delivery failure."""
        pass


class JobChangeSubscription(ABC):
    """Active subscription to a job change feed."""

    def __aiter__(self) -> AsyncIterator[JobChanged]:
        return self

    @abstractmethod
    async def __anext__(self) -> JobChanged:
        """Wait for the next job change."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Stop receiving changes."""
        pass


class JobChangeFeedInterface(ABC):
    """Interface for job change notifications between clients."""

    @abstractmethod
    async def publish(self, event: JobChanged) -> None:
        """Publish a job change to all subscribers."""
        pass

    @abstractmethod
    async def subscribe(self) -> JobChangeSubscription:
        """Start receiving changes published from now on."""
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check that the feed backend is reachable."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release feed resources."""
        pass
