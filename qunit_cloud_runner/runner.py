"""Test run of one page on one platform."""

import asyncio
import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from qunit_cloud_runner.heartbeat import KeepAliveHeartbeat
from qunit_cloud_runner.job_poller import JobStatusPoller
from qunit_cloud_runner.models.config import ResultSelectors
from qunit_cloud_runner.models.result import PlatformResult, ResultCounters
from qunit_cloud_runner.progress import ProgressStream
from qunit_cloud_runner.providers.base import BrowserProvider
from qunit_cloud_runner.result_scraper import (
    ELEMENT_POLL_INTERVAL,
    STALE_RETRY_DELAY,
    ResultScraper,
    RetryBudget,
)

log = logging.getLogger(__name__)

DEFAULT_IDLE_TIMEOUT = 300


class RunnerState(enum.Enum):
    """Lifecycle of a platform runner."""

    IDLE = "idle"
    INITIALIZING = "initializing"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(kw_only=True)
class PlatformRunner:
    """Runs one test page on one platform and reports a single result.

    run() never raises: every failure, from session creation to teardown, ends
    as a non-passing PlatformResult so other platforms keep running.
    """

    provider: BrowserProvider
    url: str
    platform: Mapping[str, Any]
    heartbeat: KeepAliveHeartbeat
    progress: ProgressStream
    retry_budget: RetryBudget
    selectors: ResultSelectors = field(default_factory=ResultSelectors)
    zero_assertions_pass: bool = True
    poll_interval: float = 10.0
    element_poll_interval: float = ELEMENT_POLL_INTERVAL
    stale_retry_delay: float = STALE_RETRY_DELAY
    state: RunnerState = field(default=RunnerState.IDLE, init=False)

    @property
    def name(self) -> str:
        """Display name of the platform."""
        return str(self.platform.get("name", self.url))

    async def run(self) -> PlatformResult:
        """Create a session, run the page and tear the session down."""
        started = asyncio.get_event_loop().time()
        self.state = RunnerState.INITIALIZING

        try:
            async with self.heartbeat.hold():
                session_id = await self.provider.create_session(self.platform)
        except Exception as exc:
            log.error("Session creation failed for %s: %s", self.name, exc)
            self.progress.line(f"Error starting session for {self.name}: {exc}")
            self.state = RunnerState.COMPLETED
            return self._result(started, "error", message=str(exc))

        job_url = self.provider.job_url(session_id)
        self.progress.line(f"Job URL for {self.name}: {job_url}")

        self.state = RunnerState.RUNNING
        result = self._result(started, "error", job_url=job_url, message="Interrupted")
        try:
            result = await self._run_session(session_id, started, job_url)
        except Exception as exc:
            log.error("Test run failed for %s: %s", self.name, exc)
            self.progress.line(f"Error checking test results for {self.name}: {exc}")
            result = self._result(started, "error", job_url=job_url, message=str(exc))
        finally:
            self.state = RunnerState.COMPLETED
            await self._teardown(session_id, result.succeeded)

        return result

    async def _run_session(
        self, session_id: str, started: float, job_url: str
    ) -> PlatformResult:
        await self.provider.navigate(session_id, self.url)

        poller = JobStatusPoller(
            provider=self.provider,
            session_id=session_id,
            progress=self.progress,
            interval=self.poll_interval,
        )
        scraper = ResultScraper(
            provider=self.provider,
            selectors=self.selectors,
            retry_budget=self.retry_budget,
            element_timeout=float(
                self.platform.get("idleTimeout", DEFAULT_IDLE_TIMEOUT)
            ),
            poll_interval=self.element_poll_interval,
            retry_delay=self.stale_retry_delay,
        )

        job_task = asyncio.create_task(poller.wait_for_job_error())
        results_task = asyncio.create_task(scraper.read_result_counters(session_id))
        try:
            done, _ = await asyncio.wait(
                {job_task, results_task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            job_task.cancel()
            results_task.cancel()
            await asyncio.gather(job_task, results_task, return_exceptions=True)

        if results_task in done:
            return self._decide(results_task.result(), started, job_url)

        job_error = job_task.result()
        self.progress.line(f"Job Error for {self.name}: {job_error}")
        return self._result(
            started, "error", job_url=job_url, message=f"Job error: {job_error}"
        )

    def _decide(
        self, counters: ResultCounters, started: float, job_url: str
    ) -> PlatformResult:
        passed = counters.is_passing(self.zero_assertions_pass)
        self.progress.line(
            f"Results for {self.name}: {'Passed' if passed else 'Failed'} "
            f"({counters.passed} / {counters.total})."
        )
        return self._result(
            started,
            "passed" if passed else "failed",
            counters=counters,
            job_url=job_url,
        )

    async def _teardown(self, session_id: str, passed: bool) -> None:
        try:
            await self.provider.report_outcome(session_id, passed)
        except Exception as exc:
            log.warning("Failed to report outcome for %s: %s", self.name, exc)

        try:
            await self.provider.close_session(session_id)
        except Exception as exc:
            log.warning("Failed to close session for %s: %s", self.name, exc)

    def _result(
        self,
        started: float,
        status: Literal["passed", "failed", "error"],
        *,
        counters: ResultCounters | None = None,
        job_url: str | None = None,
        message: str | None = None,
    ) -> PlatformResult:
        return PlatformResult(
            name=self.name,
            url=self.url,
            status=status,
            duration=asyncio.get_event_loop().time() - started,
            counters=counters,
            job_url=job_url,
            message=message,
        )
