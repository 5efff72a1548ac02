"""Fixed capability defaults applied to every platform."""

import os
from collections.abc import Mapping
from typing import Any, Self

from pydantic import Field

from qunit_cloud_runner.models.base import Model


class PlatformDefaults(Model):
    """Capabilities every remote session starts from.

    Timeouts are in seconds. See the Sauce Labs test configuration options for
    the allowed ranges (maxDuration up to 10800, commandTimeout up to 600,
    idleTimeout up to 1000).
    """

    max_duration: int = Field(default=1800, description="Maximum test duration")
    command_timeout: int = Field(default=300, description="Per-command timeout")
    idle_timeout: int = Field(default=300, description="Idle timeout")
    build: str | None = Field(default=None, description="CI build identifier")
    tunnel_identifier: str | None = Field(
        default=None, description="Identified tunnel the jobs must use"
    )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> Self:
        """Build defaults from CI environment variables."""
        return cls(
            build=environ.get("SAUCE_BUILD") or environ.get("TRAVIS_JOB_ID"),
            tunnel_identifier=(
                environ.get("SAUCE_TUNNEL_IDENTIFIER")
                or environ.get("TRAVIS_JOB_NUMBER")
            ),
        )

    def capabilities(self) -> dict[str, Any]:
        """Return the defaults as camelCase capabilities, omitting unset ones."""
        return self.model_dump(by_alias=True, exclude_none=True)
