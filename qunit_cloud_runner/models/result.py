"""Models for platform run results."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, kw_only=True)
class ResultCounters:
    """Raw text of the QUnit passed/failed/total counters.

    Values are compared as scraped strings, never parsed as integers.
    """

    passed: str
    failed: str
    total: str

    def is_passing(self, allow_zero_assertions: bool) -> bool:
        """Check whether the counters describe a passing run."""
        return (
            self.passed == self.total
            and self.failed == "0"
            and (self.total != "0" or allow_zero_assertions)
        )


@dataclass(frozen=True, kw_only=True)
class JobStatus:
    """Health of a provider job, independent of the page content."""

    status: str | None = None
    error: str | None = None


@dataclass(frozen=True, kw_only=True)
class PlatformResult:
    """Outcome of running one test page on one platform."""

    name: str
    url: str
    status: Literal["passed", "failed", "error"]
    duration: float
    counters: ResultCounters | None = None
    job_url: str | None = None
    message: str | None = None

    @property
    def succeeded(self) -> bool:
        """Whether this platform counts as passed."""
        return self.status == "passed"


@dataclass(frozen=True, kw_only=True)
class RunSummary:
    """All platform results of a run, folded into one outcome."""

    results: Sequence[PlatformResult]

    @property
    def passed(self) -> bool:
        """Whether every platform passed (an empty run passes)."""
        return all(result.succeeded for result in self.results)

    @property
    def exit_code(self) -> int:
        """Process exit status for this run."""
        return 0 if self.passed else 1
