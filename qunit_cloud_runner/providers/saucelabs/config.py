"""Configuration for Sauce Labs provider."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, SecretStr


class SauceLabsConfig(BaseModel):
    """Configuration for Sauce Labs provider.

    Base URLs end with a slash so that relative request paths resolve below
    them. The defaults target the us-west-1 data center.
    """

    username: str
    access_key: SecretStr
    webdriver_url: str = "https://ondemand.us-west-1.saucelabs.com/wd/hub/"
    api_base_url: str = "https://api.us-west-1.saucelabs.com/rest/v1/"
    app_url: str = "https://app.saucelabs.com/tests/"
    # Session creation waits for a free VM, so keep this generous
    request_timeout: float = 600


def config_from_env(environ: Mapping[str, str]) -> Mapping[str, Any]:
    """Read Sauce Labs credentials from the environment."""
    values: dict[str, Any] = {}
    if username := environ.get("SAUCE_USERNAME"):
        values["username"] = username
    if access_key := environ.get("SAUCE_ACCESS_KEY"):
        values["access_key"] = access_key
    return values
