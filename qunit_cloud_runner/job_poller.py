"""Polling of provider job health while a test page runs."""

import asyncio
import logging
from dataclasses import dataclass

from qunit_cloud_runner.progress import JOB_TICK, ProgressStream
from qunit_cloud_runner.providers.base import BrowserProvider

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class JobStatusPoller:
    """Watches one session's job for provider-side errors."""

    provider: BrowserProvider
    session_id: str
    progress: ProgressStream
    interval: float = 10.0

    async def wait_for_job_error(self) -> str:
        """Poll the job until it reports an error and return that error.

        Failed status queries are logged and polling continues. This never
        returns for a healthy job; the caller cancels it once results are in.
        """
        while True:
            try:
                job = await self.provider.get_job_status(self.session_id)
            except Exception as exc:
                log.warning(
                    "Job status query failed for session %s: %s", self.session_id, exc
                )
            else:
                if job.error:
                    log.error("Job %s reported error: %s", self.session_id, job.error)
                    return job.error
                self.progress.tick(JOB_TICK)

            await asyncio.sleep(self.interval)
