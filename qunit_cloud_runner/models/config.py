"""Models for the run configuration given to the command line or entry point."""

from collections.abc import Sequence
from typing import Any, Literal

from pydantic import Field, model_validator

from qunit_cloud_runner.models.base import Model


class ResultSelectors(Model):
    """CSS selectors of the QUnit result counters."""

    passed: str = Field(default="#qunit-testresult .passed")
    failed: str = Field(default="#qunit-testresult .failed")
    total: str = Field(default="#qunit-testresult .total")


class TestTarget(Model):
    """A test page and, optionally, the platforms it must run on."""

    __test__ = False

    url: str = Field(..., description="URL of the QUnit test page")
    name: str | None = Field(default=None, description="Base name of the test run")
    platforms: Sequence[dict[str, Any]] | None = Field(
        default=None,
        description="Platforms overriding the run defaults (None uses defaults)",
    )


class RunConfig(Model):
    """Global settings of one run, read-only for its whole lifetime."""

    urls: Sequence[TestTarget] = Field(..., description="Test pages to run")
    platforms: Sequence[dict[str, Any]] = Field(
        default_factory=list, description="Default platform descriptors"
    )
    zero_assertions_pass: bool = Field(
        default=True, description="Whether a run with 0 assertions passes"
    )
    run_in_parallel: bool = Field(
        default=True, description="Run all platforms at once instead of in series"
    )
    poll_interval: float = Field(
        default=10.0, gt=0, description="Seconds between job polls and heartbeats"
    )
    retry_limit: int = Field(
        default=10, ge=0, description="Stale element retries before giving up"
    )
    retry_scope: Literal["platform", "run"] = Field(
        default="platform",
        description="Whether the retry limit applies per platform or to the run",
    )
    selectors: ResultSelectors = Field(default_factory=ResultSelectors)

    @model_validator(mode="before")
    @classmethod
    def _accept_run_in_series(cls, data: Any) -> Any:
        """Translate the legacy runInSeries flag into runInParallel."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        for key in ("runInSeries", "run_in_series"):
            if key not in data:
                continue
            run_in_series = data.pop(key)
            if "runInParallel" not in data and "run_in_parallel" not in data:
                data["runInParallel"] = not run_in_series
        return data
