"""Provider manifest definition for the plugin system."""

from collections.abc import Callable, Mapping
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from qunit_cloud_runner.providers.base import BrowserProvider


def no_environment(environ: Mapping[str, str]) -> Mapping[str, Any]:
    """Read nothing from the environment."""
    return {}


@dataclass(frozen=True, kw_only=True)
class ProviderManifest[ConfigT: BaseModel]:
    """Manifest describing a provider plugin.

    The manifest references the configuration class, a function extracting
    configuration values from environment variables, and the provider factory
    used to lazily create a provider from its key.
    """

    config_cls: type[ConfigT]
    provider_factory: Callable[
        [ConfigT], AbstractAsyncContextManager[BrowserProvider]
    ]
    config_from_env: Callable[[Mapping[str, str]], Mapping[str, Any]] = (
        no_environment
    )
