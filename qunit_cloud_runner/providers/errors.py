"""Errors raised by browser automation providers."""


class WebDriverError(RuntimeError):
    """A WebDriver command was rejected by the remote end."""

    def __init__(self, message: str, *, error: str | None = None) -> None:
        super().__init__(message)
        self.error = error


class StaleElementReferenceError(WebDriverError):
    """A located element is no longer attached to the page."""
