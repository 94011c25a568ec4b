"""Error taxonomy for course asset addressing and projection."""

from __future__ import annotations


class CourseMediaError(Exception):
    """Base error for course media subsystem failures."""


class InvalidAssetSpecError(CourseMediaError, ValueError):
    """Raised when course id, asset kind or filename cannot form a storage key."""


class InvalidVideoReferenceError(CourseMediaError, ValueError):
    """Raised when a video reference cannot be normalized to an embed URL."""

    def __init__(self, message: str, *, reference: str) -> None:
        super().__init__(message)
        self.reference = reference


class NotFoundError(CourseMediaError, LookupError):
    """Raised by call sites that treat an empty query result as an error."""


class StorageSettingsError(CourseMediaError):
    """Raised when storage configuration is invalid."""
