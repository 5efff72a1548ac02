"""Pydantic models for Sauce Labs WebDriver and REST API responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# JSON Wire Protocol status codes
JSONWP_SUCCESS = 0
JSONWP_STALE_ELEMENT = 10

W3C_STALE_ELEMENT = "stale element reference"

W3C_ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"
JSONWP_ELEMENT_KEY = "ELEMENT"


class WebDriverResponse(BaseModel):
    """Response envelope shared by the JSON Wire and W3C WebDriver dialects."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str | None = Field(default=None, alias="sessionId")
    status: int | None = None
    value: Any = None

    @property
    def error(self) -> str | None:
        """Error code of a failed command, None on success."""
        if isinstance(self.value, dict) and isinstance(self.value.get("error"), str):
            return str(self.value["error"])
        if self.status is not None and self.status != JSONWP_SUCCESS:
            return f"status {self.status}"
        return None

    @property
    def error_message(self) -> str:
        """Human-readable message of a failed command."""
        if isinstance(self.value, dict) and self.value.get("message"):
            return str(self.value["message"])
        return str(self.value)

    @property
    def is_stale_element(self) -> bool:
        """Whether the command failed on a stale element reference."""
        return self.status == JSONWP_STALE_ELEMENT or self.error == W3C_STALE_ELEMENT

    def new_session_id(self) -> str | None:
        """Session id from either a JSON Wire or a W3C new session response."""
        if self.session_id:
            return self.session_id
        if isinstance(self.value, dict) and self.value.get("sessionId"):
            return str(self.value["sessionId"])
        return None

    def element_ids(self) -> list[str]:
        """Element ids from a find elements response."""
        if not isinstance(self.value, list):
            return []
        return [
            str(element.get(W3C_ELEMENT_KEY) or element.get(JSONWP_ELEMENT_KEY))
            for element in self.value
            if isinstance(element, dict)
            and (W3C_ELEMENT_KEY in element or JSONWP_ELEMENT_KEY in element)
        ]


class SauceJob(BaseModel):
    """A job from the Sauce Labs REST API."""

    id: str
    status: str | None = None
    error: str | None = None
    passed: bool | None = None
