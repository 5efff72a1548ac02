"""Sauce Labs provider manifest."""

from qunit_cloud_runner.providers.manifest import ProviderManifest
from qunit_cloud_runner.providers.saucelabs.config import (
    SauceLabsConfig,
    config_from_env,
)
from qunit_cloud_runner.providers.saucelabs.provider import SauceLabsProvider

saucelabs_manifest = ProviderManifest(
    config_cls=SauceLabsConfig,
    provider_factory=SauceLabsProvider.from_config,
    config_from_env=config_from_env,
)
