"""Sauce Labs provider implementation."""

import json
import logging
from collections.abc import AsyncGenerator, Mapping, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import aiohttp
from pydantic import ValidationError

from qunit_cloud_runner.models.result import JobStatus
from qunit_cloud_runner.providers.base import BrowserProvider
from qunit_cloud_runner.providers.errors import (
    StaleElementReferenceError,
    WebDriverError,
)
from qunit_cloud_runner.providers.saucelabs.config import SauceLabsConfig
from qunit_cloud_runner.providers.saucelabs.models import SauceJob, WebDriverResponse

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class SauceLabsProvider(BrowserProvider):
    """Sauce Labs browser provider.

    Talks WebDriver to the ondemand hub for browser control and the REST API
    for job status and outcome reporting. Both use the account credentials as
    basic auth.
    """

    config: SauceLabsConfig
    webdriver: aiohttp.ClientSession = field(repr=False)
    api: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: SauceLabsConfig
    ) -> AsyncGenerator["SauceLabsProvider", None]:
        """Create provider with managed session lifecycle."""
        auth = aiohttp.BasicAuth(config.username, config.access_key.get_secret_value())
        timeout = aiohttp.ClientTimeout(total=config.request_timeout)
        async with (
            aiohttp.ClientSession(
                base_url=config.webdriver_url, auth=auth, timeout=timeout
            ) as webdriver,
            aiohttp.ClientSession(
                base_url=config.api_base_url, auth=auth, timeout=timeout
            ) as api,
        ):
            yield cls(config=config, webdriver=webdriver, api=api)

    async def create_session(self, capabilities: Mapping[str, Any]) -> str:
        """Start a session using JSON Wire desired capabilities."""
        log.info("Starting session: name=%s", capabilities.get("name"))
        response = await self._command(
            "POST", "session", {"desiredCapabilities": dict(capabilities)}
        )

        if (session_id := response.new_session_id()) is None:
            raise WebDriverError(f"No session id in new session response: {response}")
        return session_id

    async def navigate(self, session_id: str, url: str) -> None:
        """Load a URL in the session's browser."""
        await self._command("POST", f"session/{session_id}/url", {"url": url})

    async def find_elements(self, session_id: str, selector: str) -> Sequence[str]:
        """Find elements by CSS selector."""
        response = await self._command(
            "POST",
            f"session/{session_id}/elements",
            {"using": "css selector", "value": selector},
        )
        return response.element_ids()

    async def read_text(self, session_id: str, element_id: str) -> str:
        """Return the visible text of an element."""
        response = await self._command(
            "GET", f"session/{session_id}/element/{element_id}/text"
        )
        return str(response.value)

    async def close_session(self, session_id: str) -> None:
        """Quit the remote browser."""
        await self._command("DELETE", f"session/{session_id}")

    async def get_job_status(self, session_id: str) -> JobStatus:
        """Fetch the job behind a session from the REST API."""
        async with self.api.get(self._job_path(session_id)) as response:
            if response.status != 200:
                text = await response.text()
                raise RuntimeError(
                    f"Failed to fetch job {session_id}: {response.status} {text}"
                )
            data = await response.json()

        job = SauceJob.model_validate(data)
        return JobStatus(status=job.status, error=job.error)

    async def report_outcome(self, session_id: str, passed: bool) -> None:
        """Mark the job as passed or failed."""
        async with self.api.put(
            self._job_path(session_id), json={"passed": passed}
        ) as response:
            if response.status != 200:
                text = await response.text()
                raise RuntimeError(
                    f"Failed to update job {session_id}: {response.status} {text}"
                )

    def job_url(self, session_id: str) -> str:
        """Return the Sauce Labs dashboard URL of a job."""
        return f"{self.config.app_url}{session_id}"

    def _job_path(self, session_id: str) -> str:
        return f"{self.config.username}/jobs/{session_id}"

    async def _command(
        self,
        method: str,
        path: str,
        payload: Mapping[str, Any] | None = None,
    ) -> WebDriverResponse:
        """Send a WebDriver command and raise on any reported failure."""
        async with self.webdriver.request(method, path, json=payload) as response:
            status = response.status
            text = await response.text()

        try:
            result = WebDriverResponse.model_validate(json.loads(text) if text else {})
        except (json.JSONDecodeError, ValidationError):
            raise WebDriverError(
                f"WebDriver {method} {path} failed: {status} {text}"
            ) from None

        if result.is_stale_element:
            raise StaleElementReferenceError(
                f"Stale element reference: {result.error_message}",
                error=result.error,
            )

        if status >= 400 or result.error is not None:
            raise WebDriverError(
                f"WebDriver {method} {path} failed: {status} {result.error_message}",
                error=result.error,
            )

        return result
