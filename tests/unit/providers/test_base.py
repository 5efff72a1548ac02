"""Tests for BrowserProvider base class."""

from collections.abc import Sequence
from dataclasses import dataclass, field

import pytest

from qunit_cloud_runner.testing.fakes import FakeBrowserProvider


@dataclass(frozen=True, kw_only=True)
class AppearingProvider(FakeBrowserProvider):
    """Provider whose elements appear after a number of lookups."""

    lookups_before_found: int = 0
    _lookups: list[int] = field(default_factory=lambda: [0])

    async def find_elements(self, session_id: str, selector: str) -> Sequence[str]:
        """Return nothing until enough lookups happened."""
        self._lookups[0] += 1
        if self._lookups[0] <= self.lookups_before_found:
            return []
        return [f"{selector}-1", f"{selector}-2"]


class TestWaitForElement:
    """Tests for wait_for_element method."""

    async def test_returns_immediately_when_present(self) -> None:
        """Returns the first element when the first lookup finds it."""
        provider = AppearingProvider()

        element = await provider.wait_for_element(
            "session-1", ".passed", timeout=1, poll_interval=0.01
        )

        assert element == ".passed-1"
        assert provider._lookups[0] == 1

    async def test_polls_until_present(self) -> None:
        """Keeps looking until the element appears."""
        provider = AppearingProvider(lookups_before_found=2)

        element = await provider.wait_for_element(
            "session-1", ".total", timeout=1, poll_interval=0.01
        )

        assert element == ".total-1"
        assert provider._lookups[0] == 3

    async def test_raises_timeout_error(self) -> None:
        """Raises TimeoutError when the element never appears."""
        provider = AppearingProvider(lookups_before_found=1000)

        with pytest.raises(TimeoutError, match="did not appear within"):
            await provider.wait_for_element(
                "session-1", ".failed", timeout=0.05, poll_interval=0.02
            )

    async def test_propagates_lookup_errors(self) -> None:
        """Lookup failures are not swallowed by the wait."""
        provider = FakeBrowserProvider(find_error=RuntimeError("session deleted"))

        with pytest.raises(RuntimeError, match="session deleted"):
            await provider.wait_for_element(
                "session-1", ".passed", timeout=1, poll_interval=0.01
            )
