"""Sauce Labs provider module."""

from qunit_cloud_runner.providers.saucelabs.config import SauceLabsConfig
from qunit_cloud_runner.providers.saucelabs.manifest import saucelabs_manifest
from qunit_cloud_runner.providers.saucelabs.provider import SauceLabsProvider

__all__ = ["SauceLabsConfig", "SauceLabsProvider", "saucelabs_manifest"]
