"""Unit tests for video reference normalization."""

from __future__ import annotations

import pytest

from course_media.application.media_normalizer import normalize_video_reference
from course_media.domain.errors import InvalidVideoReferenceError
from course_media.domain.video import CanonicalEmbedUrl, VideoProvider


@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        ("https://www.youtube.com/watch?v=abc123", "https://www.youtube.com/embed/abc123"),
        ("https://youtube.com/watch?v=abc123&t=42s", "https://www.youtube.com/embed/abc123"),
        ("https://m.youtube.com/watch?feature=share&v=abc123", "https://www.youtube.com/embed/abc123"),
        ("https://youtu.be/abc123", "https://www.youtube.com/embed/abc123"),
    ],
)
def test_youtube_references_become_embed_urls(reference: str, expected: str) -> None:
    result = normalize_video_reference(reference)

    assert result == CanonicalEmbedUrl(url=expected, provider=VideoProvider.YOUTUBE)


def test_youtube_embed_url_is_already_canonical() -> None:
    embed = "https://www.youtube.com/embed/abc123"

    assert normalize_video_reference(embed).url == embed
    assert normalize_video_reference(embed).provider is VideoProvider.YOUTUBE


@pytest.mark.parametrize(
    "reference",
    [
        "https://youtube.com/watch",
        "https://www.youtube.com/watch?v=",
        "https://youtu.be/",
        "https://www.youtube.com/embed/",
    ],
)
def test_youtube_reference_without_video_id_fails(reference: str) -> None:
    with pytest.raises(InvalidVideoReferenceError, match="no video id") as error:
        normalize_video_reference(reference)

    assert error.value.reference == reference


def test_vimeo_reference_is_rewritten_to_player_host() -> None:
    result = normalize_video_reference("https://vimeo.com/12345")

    assert result.url == "https://player.vimeo.com/video/12345"
    assert result.provider is VideoProvider.VIMEO


def test_vimeo_rewrite_preserves_path_and_query() -> None:
    result = normalize_video_reference("https://www.vimeo.com/channels/staff/12345?share=copy")

    assert result.url == "https://player.vimeo.com/video/channels/staff/12345?share=copy"


def test_vimeo_rewrite_keeps_fragment_and_upgrades_scheme() -> None:
    result = normalize_video_reference("http://vimeo.com/123#t=10")

    assert result.url == "https://player.vimeo.com/video/123#t=10"
    assert result.provider is VideoProvider.VIMEO


def test_vimeo_player_url_passes_through() -> None:
    player = "https://player.vimeo.com/video/12345"

    result = normalize_video_reference(player)

    assert result.url == player
    assert result.provider is VideoProvider.VIMEO


def test_vimeo_reference_without_path_fails() -> None:
    with pytest.raises(InvalidVideoReferenceError, match="no video path"):
        normalize_video_reference("https://vimeo.com/")


@pytest.mark.parametrize(
    "reference",
    [
        "https://cdn.example.com/clip.mp4",
        "http://localhost:5000/uploads/courses/1/videos/intro.mp4",
        "https://d111111abcdef8.cloudfront.net/courses/1/videos/l1/a.m3u8",
    ],
)
def test_other_hosts_pass_through_as_direct(reference: str) -> None:
    result = normalize_video_reference(reference)

    assert result.url == reference
    assert result.provider is VideoProvider.DIRECT


@pytest.mark.parametrize("reference", ["", "   ", "not a url", "/uploads/clip.mp4", "clip.mp4"])
def test_non_url_references_fail(reference: str) -> None:
    with pytest.raises(InvalidVideoReferenceError):
        normalize_video_reference(reference)


def test_normalization_is_stable_on_its_own_output() -> None:
    for reference in (
        "https://www.youtube.com/watch?v=abc123",
        "https://vimeo.com/12345",
        "https://cdn.example.com/clip.mp4",
    ):
        once = normalize_video_reference(reference)
        assert normalize_video_reference(once.url) == once
