"""Keep-alive output while remote sessions are being established."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from qunit_cloud_runner.progress import SESSION_TICK, ProgressStream

log = logging.getLogger(__name__)


@dataclass(kw_only=True)
class KeepAliveHeartbeat:
    """Single heartbeat shared by every platform of a run.

    Session creation can take minutes when the provider queues requests, and
    nothing else is printed meanwhile. The heartbeat writes a tick every
    interval for as long as at least one acquisition is in flight.
    """

    progress: ProgressStream
    interval: float = 10.0
    _pending: int = field(default=0, init=False)
    _task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)

    @property
    def running(self) -> bool:
        """Whether a tick is currently scheduled."""
        return self._task is not None and not self._task.done()

    @property
    def pending(self) -> int:
        """Number of session acquisitions currently in flight."""
        return self._pending

    def start(self) -> None:
        """Tick now and keep ticking every interval, unless already running."""
        if self.running:
            return

        self.progress.tick(SESSION_TICK)
        self._task = asyncio.create_task(self._beat())

    def stop(self) -> None:
        """Cancel the pending tick."""
        if self._task is not None:
            self._task.cancel()
            self._task = None

    @asynccontextmanager
    async def hold(self) -> AsyncIterator[None]:
        """Keep the heartbeat alive for the duration of one acquisition."""
        self._pending += 1
        self.start()
        try:
            yield
        finally:
            self._pending -= 1
            if self._pending == 0:
                log.debug("No session acquisitions pending, stopping heartbeat")
                self.stop()

    async def _beat(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.progress.tick(SESSION_TICK)
