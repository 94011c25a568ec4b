"""Domain models for normalized video references."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class VideoProvider(StrEnum):
    """Hosting providers recognized by video normalization."""

    YOUTUBE = "youtube"
    VIMEO = "vimeo"
    DIRECT = "direct"


@dataclass(frozen=True)
class CanonicalEmbedUrl:
    """Embeddable video URL tagged with the provider that produced it."""

    url: str
    provider: VideoProvider

    def __str__(self) -> str:
        return self.url


class PlaybackKind(StrEnum):
    """Playback strategies for lesson media."""

    YOUTUBE = "youtube"
    VIMEO = "vimeo"
    S3 = "s3"
    LOCAL = "local"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Playback:
    """Resolved player source for a lesson."""

    kind: PlaybackKind
    src: str | None
    mime_type: str | None = None
