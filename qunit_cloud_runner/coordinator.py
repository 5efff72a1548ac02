"""Run coordinator expanding test targets into platform runs."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from qunit_cloud_runner.heartbeat import KeepAliveHeartbeat
from qunit_cloud_runner.models.config import RunConfig
from qunit_cloud_runner.models.platform import PlatformDefaults
from qunit_cloud_runner.models.result import PlatformResult, RunSummary
from qunit_cloud_runner.platforms import DEFAULT_TEST_NAME, merge_platform
from qunit_cloud_runner.progress import ProgressStream
from qunit_cloud_runner.providers.base import BrowserProvider
from qunit_cloud_runner.result_scraper import RetryBudget
from qunit_cloud_runner.runner import PlatformRunner

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class RunCoordinator:
    """Runs every (test page, platform) pair on a single provider."""

    provider: BrowserProvider
    config: RunConfig
    defaults: PlatformDefaults = field(default_factory=PlatformDefaults)
    progress: ProgressStream = field(default_factory=ProgressStream)

    def build_runners(self) -> Sequence[PlatformRunner]:
        """Create one runner per test target and resolved platform, in order."""
        heartbeat = KeepAliveHeartbeat(
            progress=self.progress, interval=self.config.poll_interval
        )
        shared_budget = (
            RetryBudget(limit=self.config.retry_limit)
            if self.config.retry_scope == "run"
            else None
        )

        runners: list[PlatformRunner] = []
        for target in self.config.urls:
            test_name = target.name or DEFAULT_TEST_NAME
            platforms = (
                target.platforms
                if target.platforms is not None
                else self.config.platforms
            )
            for platform in platforms:
                runners.append(
                    PlatformRunner(
                        provider=self.provider,
                        url=target.url,
                        platform=merge_platform(test_name, platform, self.defaults),
                        heartbeat=heartbeat,
                        progress=self.progress,
                        retry_budget=shared_budget
                        or RetryBudget(limit=self.config.retry_limit),
                        selectors=self.config.selectors,
                        zero_assertions_pass=self.config.zero_assertions_pass,
                        poll_interval=self.config.poll_interval,
                    )
                )
        return runners

    async def run_all(self) -> RunSummary:
        """Run all platforms and fold their outcomes into one summary."""
        runners = self.build_runners()
        if not runners:
            log.info("No platforms to run")
            return RunSummary(results=[])

        mode = "in parallel" if self.config.run_in_parallel else "in series"
        log.info("Running %d platform(s) %s...", len(runners), mode)

        if self.config.run_in_parallel:
            results = await asyncio.gather(
                *(self._run_platform(runner) for runner in runners)
            )
        else:
            results = [await self._run_platform(runner) for runner in runners]

        summary = RunSummary(results=results)
        self.progress.line(
            f"All tests completed. Status: {'Passed' if summary.passed else 'Failed'}."
        )
        return summary

    async def _run_platform(self, runner: PlatformRunner) -> PlatformResult:
        """Run one platform, turning any escaped exception into an error result."""
        try:
            result = await runner.run()
        except Exception as exc:
            log.error("Platform run failed: %s", exc, exc_info=exc)
            return PlatformResult(
                name=runner.name,
                url=runner.url,
                status="error",
                duration=0.0,
                message=str(exc),
            )

        log.info(
            "Platform completed: name=%s status=%s duration=%.1fs",
            result.name,
            result.status,
            result.duration,
        )
        return result
