"""Discovery of browser providers registered as entry points."""

from collections.abc import Sequence
from importlib.metadata import EntryPoint, entry_points
from typing import Any

from qunit_cloud_runner.providers.manifest import ProviderManifest

ENTRY_POINT_GROUP = "qunit_cloud_runner.providers"


class ProviderNotFoundError(LookupError):
    """No provider is registered under the requested key."""


def _registered() -> dict[str, EntryPoint]:
    return {entry.name: entry for entry in entry_points(group=ENTRY_POINT_GROUP)}


def available_providers() -> Sequence[str]:
    """Return the keys of every installed provider, sorted."""
    return sorted(_registered())


def load_provider_manifest(key: str) -> ProviderManifest[Any]:
    """Load the manifest of the provider registered as ``key``.

    Raises:
        ProviderNotFoundError: If the key is not registered; the message lists
            the available keys

    """
    registered = _registered()
    if key not in registered:
        raise ProviderNotFoundError(
            f"Provider '{key}' not found. Available providers: {sorted(registered)}"
        )

    manifest: ProviderManifest[Any] = registered[key].load()
    return manifest
