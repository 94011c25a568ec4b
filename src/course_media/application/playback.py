"""Choose the player source for a lesson from its media entries."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from course_media.application.asset_addressing import to_url
from course_media.application.media_normalizer import normalize_video_reference
from course_media.domain.video import Playback, PlaybackKind

VIDEO_MP4 = "video/mp4"


def resolve_lesson_playback(
    media: Iterable[Mapping[str, Any]],
    *,
    public_base_url: str,
    cdn_base_url: str | None = None,
) -> Playback:
    """Resolve playback by priority: youtube, vimeo, CDN key, local file.

    Raises:
        InvalidVideoReferenceError: a youtube or vimeo entry holds a malformed URL.
    """
    entries = [entry for entry in media if isinstance(entry, Mapping)]

    youtube = _find(entries, "youtube", "url")
    if youtube is not None:
        return Playback(
            kind=PlaybackKind.YOUTUBE,
            src=normalize_video_reference(youtube["url"]).url,
        )

    vimeo = _find(entries, "vimeo", "url")
    if vimeo is not None:
        return Playback(
            kind=PlaybackKind.VIMEO,
            src=normalize_video_reference(vimeo["url"]).url,
        )

    if cdn_base_url:
        for name in ("s3", "lessonvideo"):
            keyed = _find(entries, name, "key")
            if keyed is not None:
                return Playback(
                    kind=PlaybackKind.S3,
                    src=to_url(cdn_base_url, keyed["key"]),
                    mime_type=VIDEO_MP4,
                )

    local = _find(entries, "local", "url")
    if local is not None:
        return Playback(
            kind=PlaybackKind.LOCAL,
            src=to_url(public_base_url, local["url"]),
            mime_type=VIDEO_MP4,
        )

    return Playback(kind=PlaybackKind.UNKNOWN, src=None)


def _find(
    entries: list[Mapping[str, Any]],
    name: str,
    required_field: str,
) -> Mapping[str, Any] | None:
    for entry in entries:
        if str(entry.get("name") or "").lower() == name and entry.get(required_field):
            return entry
    return None
