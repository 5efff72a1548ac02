"""Tests for the job status poller."""

import asyncio
import io

import pytest

from qunit_cloud_runner.job_poller import JobStatusPoller
from qunit_cloud_runner.models.result import JobStatus
from qunit_cloud_runner.progress import ProgressStream
from qunit_cloud_runner.testing.fakes import FakeBrowserProvider


def make_poller(provider: FakeBrowserProvider, output: io.StringIO) -> JobStatusPoller:
    """Create a poller with a short interval."""
    return JobStatusPoller(
        provider=provider,
        session_id="session-1",
        progress=ProgressStream(stream=output),
        interval=0.01,
    )


async def test_returns_job_error() -> None:
    """Returns the error once the job reports one."""
    output = io.StringIO()
    provider = FakeBrowserProvider(
        job_statuses=[
            JobStatus(status="in progress"),
            JobStatus(status="in progress"),
            JobStatus(status="error", error="Internal server error"),
        ]
    )

    error = await make_poller(provider, output).wait_for_job_error()

    assert error == "Internal server error"
    assert output.getvalue() == ".."
    assert provider.called("get_job_status") == ["session-1"] * 3


async def test_keeps_polling_after_query_failure(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A failed status query is logged and polling continues."""
    output = io.StringIO()
    provider = FakeBrowserProvider(
        job_statuses=[
            RuntimeError("Failed to fetch job session-1: 502 Bad Gateway"),
            JobStatus(status="in progress"),
            JobStatus(status="error", error="Test exceeded maximum duration"),
        ]
    )

    error = await make_poller(provider, output).wait_for_job_error()

    assert error == "Test exceeded maximum duration"
    assert output.getvalue() == "."
    assert "Job status query failed" in caplog.text


async def test_never_returns_for_healthy_job() -> None:
    """Keeps ticking for a healthy job until cancelled."""
    output = io.StringIO()
    provider = FakeBrowserProvider()
    task = asyncio.create_task(make_poller(provider, output).wait_for_job_error())

    await asyncio.sleep(0.05)
    assert not task.done()

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert len(output.getvalue()) >= 2
