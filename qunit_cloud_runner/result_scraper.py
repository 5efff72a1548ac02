"""Reading QUnit result counters out of a running test page."""

import asyncio
import logging
from dataclasses import dataclass

from qunit_cloud_runner.models.config import ResultSelectors
from qunit_cloud_runner.models.result import ResultCounters
from qunit_cloud_runner.providers.base import BrowserProvider
from qunit_cloud_runner.providers.errors import StaleElementReferenceError

log = logging.getLogger(__name__)

ELEMENT_POLL_INTERVAL = 2.0
STALE_RETRY_DELAY = 2.0


class ResultReadError(RuntimeError):
    """The result counters could not be read."""


@dataclass(kw_only=True)
class RetryBudget:
    """Number of stale element retries still allowed."""

    limit: int = 10
    used: int = 0

    def consume(self) -> bool:
        """Take one retry from the budget, returning False when exhausted."""
        if self.used >= self.limit:
            return False
        self.used += 1
        return True


@dataclass(frozen=True, kw_only=True)
class ResultScraper:
    """Reads the passed, failed and total counters of a QUnit page."""

    provider: BrowserProvider
    selectors: ResultSelectors
    retry_budget: RetryBudget
    element_timeout: float
    poll_interval: float = ELEMENT_POLL_INTERVAL
    retry_delay: float = STALE_RETRY_DELAY

    async def read_result_counters(self, session_id: str) -> ResultCounters:
        """Wait for the QUnit summary and read its counters.

        QUnit re-renders the summary while tests run, so a counter may go stale
        between lookup and read. In that case all three counters are read
        again, so the values always come from one pass over the page.

        Raises:
            ResultReadError: If the retry budget runs out
            TimeoutError: If a counter does not appear in time

        """
        while True:
            try:
                return await self._read_once(session_id)
            except StaleElementReferenceError as exc:
                if not self.retry_budget.consume():
                    raise ResultReadError(
                        f"Result counters still stale after "
                        f"{self.retry_budget.limit} retries"
                    ) from exc

                log.warning(
                    "Stale result counter in session %s, retrying (%d/%d)",
                    session_id,
                    self.retry_budget.used,
                    self.retry_budget.limit,
                )
                await asyncio.sleep(self.retry_delay)

    async def _read_once(self, session_id: str) -> ResultCounters:
        passed = await self._read_counter(session_id, self.selectors.passed)
        failed = await self._read_counter(session_id, self.selectors.failed)
        total = await self._read_counter(session_id, self.selectors.total)
        return ResultCounters(passed=passed, failed=failed, total=total)

    async def _read_counter(self, session_id: str, selector: str) -> str:
        element_id = await self.provider.wait_for_element(
            session_id,
            selector,
            timeout=self.element_timeout,
            poll_interval=self.poll_interval,
        )
        return await self.provider.read_text(session_id, element_id)
