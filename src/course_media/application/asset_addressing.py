"""Storage key construction and key/URL translation for course assets."""

from __future__ import annotations

import re
import secrets
from pathlib import PurePosixPath
import httpx

from course_media.domain.assets import COURSES_PREFIX, AssetKind, StorageKey, is_valid_kind
from course_media.domain.errors import InvalidAssetSpecError

UPLOADS_MARKER = "/uploads/"

_ABSOLUTE_HTTP_PATTERN = re.compile(r"^https?://", re.IGNORECASE)
_UPLOADS_PATTERN = re.compile(re.escape(UPLOADS_MARKER) + r"(.+)$")


def build_key(
    course_id: str,
    kind: str | AssetKind,
    filename: str,
    lesson_id: str | None = None,
) -> StorageKey:
    """Build the storage key for one course asset.

    Raises:
        InvalidAssetSpecError: course id is empty, kind is outside the taxonomy,
            or a segment contains a path separator.
    """
    if not is_valid_kind(str(kind)):
        raise InvalidAssetSpecError(f"Unsupported asset kind: {kind!r}.")

    return StorageKey(
        course_id=course_id,
        kind=AssetKind(str(kind)),
        filename=filename,
        lesson_id=lesson_id or None,
    )


def parse_key(text: str) -> StorageKey:
    """Parse a serialized key back into its components."""
    parts = text.strip("/").split("/")
    if len(parts) not in (4, 5) or parts[0] != COURSES_PREFIX:
        raise InvalidAssetSpecError(f"Not a course storage key: {text!r}.")

    if len(parts) == 4:
        _, course_id, kind, filename = parts
        return build_key(course_id, kind, filename)

    _, course_id, kind, lesson_id, filename = parts
    return build_key(course_id, kind, filename, lesson_id=lesson_id)


def to_url(base_url: str, key: str | StorageKey) -> str:
    """Join base URL and key with exactly one separator.

    A value that is already an absolute http(s) URL, such as a signed object
    store URL returned by the storage backend, is returned unchanged.
    """
    relative_or_absolute = str(key)
    if _ABSOLUTE_HTTP_PATTERN.match(relative_or_absolute):
        return relative_or_absolute

    return f"{base_url.rstrip('/')}/{relative_or_absolute.lstrip('/')}"


def extract_key(url: str) -> str | None:
    """Return the storage key embedded in a previously issued URL.

    Values that do not parse as absolute URLs are returned unchanged: older
    records store bare keys instead of URLs. Absolute URLs without the
    ``/uploads/`` marker belong to third parties and yield ``None``.
    """
    if not url:
        return None

    parsed = _parse_absolute_url(url)
    if parsed is None:
        # Bare key stored by an older writer.
        return url

    match = _UPLOADS_PATTERN.search(parsed.path)
    return match.group(1) if match else None


def extract_storage_key(url: str) -> StorageKey | None:
    """Extract and parse a course storage key; ``None`` when none is present.

    Site-relative ``/uploads/...`` URLs written by local storage are accepted
    alongside absolute URLs and bare keys.
    """
    raw_key = extract_key(url)
    if raw_key is None:
        return None

    try:
        return parse_key(raw_key.removeprefix(UPLOADS_MARKER))
    except InvalidAssetSpecError:
        return None


def generate_stored_filename(original_name: str) -> str:
    """Return a random filename that keeps the original extension."""
    extension = PurePosixPath(original_name.replace("\\", "/")).suffix.lower()
    return f"{secrets.token_hex(16)}{extension}"


def _parse_absolute_url(value: str) -> httpx.URL | None:
    try:
        parsed = httpx.URL(value)
    except httpx.InvalidURL:
        return None

    if not parsed.scheme or not parsed.host:
        return None
    return parsed
