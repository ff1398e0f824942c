from __future__ import annotations


PASTE_HINT = "Please copy and paste the content directly instead."


class ContentProcessingError(Exception):
    """Base class for per-request failures surfaced to the caller."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ExtractionError(ContentProcessingError):
    """Raised when a URL, video or upload cannot be turned into text."""


class ContentValidationError(ContentProcessingError):
    def __init__(self, message: str, *, security: bool = False) -> None:
        super().__init__(message)
        self.security = security
