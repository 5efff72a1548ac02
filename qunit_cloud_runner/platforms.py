"""Display names and merged capabilities for platform descriptors."""

from collections.abc import Mapping
from typing import Any

from qunit_cloud_runner.models.platform import PlatformDefaults

DEFAULT_TEST_NAME = "qunit tests"

NAME_FIELDS = (
    "deviceName",
    "platform",
    "platformName",
    "platformVersion",
    "browserName",
    "version",
)


def build_platform_name(test_name: str, platform: Mapping[str, Any]) -> str:
    """Build a display name like ``qunit tests (Windows 10 chrome 120)``.

    Fields are always taken in NAME_FIELDS order; missing or empty fields are
    skipped.
    """
    label = " ".join(str(platform[key]) for key in NAME_FIELDS if platform.get(key))
    return f"{test_name} ({label})"


def merge_platform(
    test_name: str,
    platform: Mapping[str, Any],
    defaults: PlatformDefaults,
) -> dict[str, Any]:
    """Merge a platform descriptor over the run defaults.

    Caller fields override the defaults; ``name`` is always recomputed.
    """
    return {
        **defaults.capabilities(),
        **platform,
        "name": build_platform_name(test_name, platform),
    }
