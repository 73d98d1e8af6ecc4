from __future__ import annotations


class InstafilterError(Exception):
    """Base class for errors surfaced to the user."""


class NoSourceImage(InstafilterError):
    """Raised when saving or processing is attempted before an image was picked."""

    def __init__(self, message: str = "No Image selected") -> None:
        super().__init__(message)


class PersistenceFailure(InstafilterError):
    """The photo library refused the image. `reason` is human readable."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Could not save image: {reason}")
        self.reason = reason


class UnknownFilterError(InstafilterError, ValueError):
    pass
