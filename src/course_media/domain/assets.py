"""Domain models for course asset taxonomy and storage keys."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import PurePosixPath

from course_media.domain.errors import InvalidAssetSpecError

COURSES_PREFIX = "courses"
_PATH_SEPARATORS = ("/", "\\")
_DOT_SEGMENTS = frozenset({".", ".."})


class AssetKind(StrEnum):
    """Closed set of folders an uploaded course asset can live under."""

    IMAGES = "images"
    VIDEOS = "videos"
    DOCUMENTS = "documents"
    ARCHIVES = "archives"
    ASSETS = "assets"
    INTRODUCTION = "introduction"


_KIND_VALUES = frozenset(kind.value for kind in AssetKind)

_KIND_BY_EXTENSION: dict[str, AssetKind] = {
    **dict.fromkeys((".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg"), AssetKind.IMAGES),
    **dict.fromkeys((".mp4", ".mkv", ".mov", ".avi", ".webm", ".m4v"), AssetKind.VIDEOS),
    **dict.fromkeys((".pdf", ".doc", ".docx", ".txt", ".ppt", ".pptx"), AssetKind.DOCUMENTS),
    **dict.fromkeys((".zip", ".rar", ".7z", ".tar", ".gz"), AssetKind.ARCHIVES),
}


def all_kinds() -> tuple[AssetKind, ...]:
    """Return every asset kind in declaration order."""
    return tuple(AssetKind)


def is_valid_kind(candidate: str) -> bool:
    """Return whether candidate names one of the asset kinds."""
    return candidate in _KIND_VALUES


def detect_kind_for_filename(filename: str) -> AssetKind:
    """Classify a filename by extension; unknown extensions are generic assets."""
    extension = PurePosixPath(filename.replace("\\", "/")).suffix.lower()
    return _KIND_BY_EXTENSION.get(extension, AssetKind.ASSETS)


@dataclass(frozen=True)
class StorageKey:
    """Backend-agnostic location of one course asset.

    Serialized as ``courses/{course_id}/{kind}/[{lesson_id}/]{filename}``.
    """

    course_id: str
    kind: AssetKind
    filename: str
    lesson_id: str | None = None

    def __post_init__(self) -> None:
        _require_segment("course_id", self.course_id)
        _require_segment("filename", self.filename)
        if self.lesson_id is not None:
            _require_segment("lesson_id", self.lesson_id)
        if not isinstance(self.kind, AssetKind):
            if not is_valid_kind(str(self.kind)):
                raise InvalidAssetSpecError(f"Unsupported asset kind: {self.kind!r}.")
            object.__setattr__(self, "kind", AssetKind(self.kind))

    @property
    def segments(self) -> tuple[str, ...]:
        """Path segments after the ``courses/`` prefix."""
        if self.lesson_id is None:
            return (self.course_id, self.kind.value, self.filename)
        return (self.course_id, self.kind.value, self.lesson_id, self.filename)

    def serialize(self) -> str:
        """Return the slash-joined key."""
        return "/".join((COURSES_PREFIX, *self.segments))

    def __str__(self) -> str:
        return self.serialize()


@dataclass(frozen=True)
class AssetDescriptor:
    """Persisted reference to an uploaded asset."""

    name: str
    key: str
    url: str

    def to_object(self) -> dict[str, str]:
        return {"name": self.name, "key": self.key, "url": self.url}


def _require_segment(field_name: str, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidAssetSpecError(f"{field_name} is required.")
    if any(separator in value for separator in _PATH_SEPARATORS):
        raise InvalidAssetSpecError(f"{field_name} must not contain path separators: {value!r}.")
    if value in _DOT_SEGMENTS:
        raise InvalidAssetSpecError(f"{field_name} must not be a relative path segment.")
