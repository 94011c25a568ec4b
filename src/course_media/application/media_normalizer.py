"""Normalize externally hosted video references into embeddable URLs.

Known providers are validated strictly: a YouTube or Vimeo link without a
video id fails. Any other host is trusted as a directly playable media URL and
passed through unchanged.
"""

from __future__ import annotations

import httpx

from course_media.domain.errors import InvalidVideoReferenceError
from course_media.domain.video import CanonicalEmbedUrl, VideoProvider

YOUTUBE_EMBED_BASE = "https://www.youtube.com/embed/"
VIMEO_PLAYER_BASE = "https://player.vimeo.com/video"

_YOUTUBE_HOST = "youtube.com"
_YOUTUBE_SHORT_HOST = "youtu.be"
_VIMEO_HOST = "vimeo.com"
_VIMEO_PLAYER_HOST = "player.vimeo.com"


def normalize_video_reference(reference: str) -> CanonicalEmbedUrl:
    """Return the canonical embed URL for a user-supplied video reference."""
    parsed = _parse(reference)
    host = parsed.host

    if _YOUTUBE_HOST in host:
        return _youtube_embed(reference, parsed)
    if host == _YOUTUBE_SHORT_HOST:
        return _youtube_embed_from_id(reference, parsed.path.lstrip("/"))
    if host == _VIMEO_PLAYER_HOST:
        return CanonicalEmbedUrl(url=reference, provider=VideoProvider.VIMEO)
    if _VIMEO_HOST in host:
        return _vimeo_embed(reference, parsed)

    return CanonicalEmbedUrl(url=reference, provider=VideoProvider.DIRECT)


def _parse(reference: str) -> httpx.URL:
    candidate = reference.strip() if isinstance(reference, str) else ""
    if not candidate:
        raise InvalidVideoReferenceError("Video reference is empty.", reference=str(reference))

    try:
        parsed = httpx.URL(candidate)
    except httpx.InvalidURL as exc:
        raise InvalidVideoReferenceError(
            f"Video reference is not a valid URL: {reference!r}.",
            reference=reference,
        ) from exc

    if not parsed.scheme or not parsed.host:
        raise InvalidVideoReferenceError(
            f"Video reference is not an absolute URL: {reference!r}.",
            reference=reference,
        )
    return parsed


def _youtube_embed(reference: str, parsed: httpx.URL) -> CanonicalEmbedUrl:
    if parsed.path.startswith("/embed/"):
        # Already canonical.
        return _youtube_embed_from_id(reference, parsed.path.removeprefix("/embed/"))

    return _youtube_embed_from_id(reference, parsed.params.get("v", ""))


def _youtube_embed_from_id(reference: str, video_id: str) -> CanonicalEmbedUrl:
    video_id = video_id.strip().strip("/")
    if not video_id:
        raise InvalidVideoReferenceError(
            f"YouTube reference has no video id: {reference!r}.",
            reference=reference,
        )
    return CanonicalEmbedUrl(url=f"{YOUTUBE_EMBED_BASE}{video_id}", provider=VideoProvider.YOUTUBE)


def _vimeo_embed(reference: str, parsed: httpx.URL) -> CanonicalEmbedUrl:
    path = parsed.path.rstrip("/")
    if not path:
        raise InvalidVideoReferenceError(
            f"Vimeo reference has no video path: {reference!r}.",
            reference=reference,
        )

    query = parsed.query.decode("ascii")
    url = f"{VIMEO_PLAYER_BASE}{path}"
    if query:
        url = f"{url}?{query}"
    if parsed.fragment:
        url = f"{url}#{parsed.fragment}"
    return CanonicalEmbedUrl(url=url, provider=VideoProvider.VIMEO)
