"""Abstract base class for cloud browser providers."""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from qunit_cloud_runner.models.result import JobStatus


@dataclass(frozen=True, kw_only=True)
class BrowserProvider(ABC):
    """Abstract base for remote browser automation providers.

    A provider addresses every session by the opaque identifier returned from
    create_session, which is also the identifier of the provider-side job.
    """

    @abstractmethod
    async def create_session(self, capabilities: Mapping[str, Any]) -> str:
        """Start a remote browser session.

        Args:
            capabilities: Merged platform capabilities, including ``name``

        Returns:
            Session identifier

        """

    @abstractmethod
    async def navigate(self, session_id: str, url: str) -> None:
        """Load a URL in the session's browser."""

    @abstractmethod
    async def find_elements(self, session_id: str, selector: str) -> Sequence[str]:
        """Return identifiers of elements matching a CSS selector (may be empty)."""

    @abstractmethod
    async def read_text(self, session_id: str, element_id: str) -> str:
        """Return the visible text of an element.

        Raises:
            StaleElementReferenceError: If the element left the page

        """

    @abstractmethod
    async def report_outcome(self, session_id: str, passed: bool) -> None:
        """Record the pass/fail outcome on the provider-side job."""

    @abstractmethod
    async def close_session(self, session_id: str) -> None:
        """Quit the remote browser."""

    @abstractmethod
    async def get_job_status(self, session_id: str) -> JobStatus:
        """Fetch the health of the job behind a session."""

    @abstractmethod
    def job_url(self, session_id: str) -> str:
        """Return a URL where a human can inspect the job."""

    async def wait_for_element(
        self,
        session_id: str,
        selector: str,
        timeout: float = 300,
        poll_interval: float = 2,
    ) -> str:
        """Wait until an element matching the selector exists.

        Args:
            session_id: Session to search in
            selector: CSS selector
            timeout: Maximum wait time in seconds
            poll_interval: Seconds between lookups

        Returns:
            Identifier of the first matching element

        Raises:
            TimeoutError: If no element appears within timeout

        """
        deadline = asyncio.get_event_loop().time() + timeout

        while True:
            if elements := await self.find_elements(session_id, selector):
                return elements[0]

            if asyncio.get_event_loop().time() >= deadline:
                raise TimeoutError(
                    f"Element {selector!r} did not appear within {timeout} seconds"
                )

            await asyncio.sleep(poll_interval)
