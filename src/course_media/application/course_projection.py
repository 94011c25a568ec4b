"""Project persisted course documents into flat read models."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from course_media.application.media_normalizer import normalize_video_reference
from course_media.domain.course import CourseProjection
from course_media.domain.errors import NotFoundError
from course_media.domain.video import VideoProvider

REFERENCE_FIELDS = ("instructorId", "category", "subcategory")
ENROLLMENTS_FIELD = "coursesEnrolled"
EMBEDDABLE_VIDEO_SOURCES = frozenset({VideoProvider.YOUTUBE.value, VideoProvider.VIMEO.value})

_PLAIN_CONVERSIONS = ("to_object", "toObject")
_HEX_CONVERSIONS = ("to_hex_string", "toHexString")

TCourses = TypeVar("TCourses", bound=Sequence[Any])


def require_non_empty(courses: TCourses, error_message: str) -> TCourses:
    """Return courses unchanged, or raise NotFoundError when there are none."""
    if not courses:
        raise NotFoundError(error_message)
    return courses


def project_course(raw_course: Any) -> CourseProjection:
    """Build the client-safe projection of one course document.

    Applying the projection to its own output yields an equal projection.
    """
    document = as_plain_document(raw_course)
    for derived in ("thumbnailUrl", "videoEmbedUrl", "enrollmentCount"):
        document.pop(derived, None)

    for field_name in REFERENCE_FIELDS:
        value = document.get(field_name)
        if value:
            document[field_name] = reference_to_str(value)
        else:
            document.pop(field_name, None)

    enrolled = [reference_to_str(item) for item in document.get(ENROLLMENTS_FIELD) or []]
    document[ENROLLMENTS_FIELD] = enrolled
    document["enrollmentCount"] = len(enrolled)

    thumbnail_url = _thumbnail_url(document.get("thumbnail"))
    if thumbnail_url is not None:
        document["thumbnailUrl"] = thumbnail_url

    embed_url = _video_embed_url(document)
    if embed_url is not None:
        document["videoEmbedUrl"] = embed_url

    return CourseProjection.model_validate(document)


def as_plain_document(raw_course: Any) -> dict[str, Any]:
    """Return a mutable plain copy of a course document.

    Accepts mappings and objects exposing a ``to_object()``-style conversion
    (ORM rows, driver documents, earlier projections).
    """
    if isinstance(raw_course, Mapping):
        return dict(raw_course)

    for method_name in _PLAIN_CONVERSIONS:
        converter = getattr(raw_course, method_name, None)
        if callable(converter):
            return dict(converter())

    raise TypeError(f"Unsupported course document type: {type(raw_course).__name__}.")


def reference_to_str(value: Any) -> str:
    """Convert a database reference id to its canonical string form."""
    if isinstance(value, str):
        return value

    for method_name in _HEX_CONVERSIONS:
        converter = getattr(value, method_name, None)
        if callable(converter):
            return str(converter())

    if isinstance(value, bytes | bytearray | memoryview):
        return bytes(value).hex()

    return str(value)


def _thumbnail_url(thumbnail: Any) -> str | None:
    if isinstance(thumbnail, Mapping):
        url = thumbnail.get("url")
    else:
        url = getattr(thumbnail, "url", None)
    return url if isinstance(url, str) and url else None


def _video_embed_url(document: Mapping[str, Any]) -> str | None:
    source = str(document.get("videoSource") or "").lower()
    video_url = document.get("videoUrl")
    if source not in EMBEDDABLE_VIDEO_SOURCES or not video_url:
        return None
    return normalize_video_reference(str(video_url)).url
