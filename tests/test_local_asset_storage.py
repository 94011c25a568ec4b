"""Filesystem tests for local asset storage."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from course_media.application.asset_uploads import (
    RemoveCourseAssetUseCase,
    UploadCourseAssetCommand,
    UploadCourseAssetUseCase,
)
from course_media.domain.errors import InvalidAssetSpecError
from course_media.infrastructure.storage import LocalAssetStorage


def test_save_writes_file_below_upload_root(tmp_path: Path) -> None:
    storage = LocalAssetStorage(tmp_path / "uploads")

    location = storage.save("courses/c1/images/cover.png", io.BytesIO(b"png-bytes"))

    assert location == "courses/c1/images/cover.png"
    assert (tmp_path / "uploads" / "courses" / "c1" / "images" / "cover.png").read_bytes() == (
        b"png-bytes"
    )


def test_remove_reports_whether_file_existed(tmp_path: Path) -> None:
    storage = LocalAssetStorage(tmp_path)
    storage.save("courses/c1/archives/bundle.zip", io.BytesIO(b"zip"))

    assert storage.remove("courses/c1/archives/bundle.zip") is True
    assert storage.remove("courses/c1/archives/bundle.zip") is False


@pytest.mark.parametrize("key", ["../escape.txt", "courses/../../escape.txt", ""])
def test_keys_outside_upload_root_are_rejected(tmp_path: Path, key: str) -> None:
    storage = LocalAssetStorage(tmp_path / "uploads")

    with pytest.raises(InvalidAssetSpecError, match="escapes upload root"):
        storage.save(key, io.BytesIO(b"x"))

    assert not (tmp_path / "escape.txt").exists()


def test_upload_and_remove_by_issued_url(tmp_path: Path) -> None:
    storage = LocalAssetStorage(tmp_path)
    descriptor = UploadCourseAssetUseCase(storage, "http://localhost:5000/uploads/").execute(
        UploadCourseAssetCommand(
            course_id="c1",
            kind="introduction",
            filename="welcome.mp4",
            content=io.BytesIO(b"intro"),
        )
    )
    stored_file = tmp_path / "courses" / "c1" / "introduction" / "welcome.mp4"

    assert descriptor.url == "http://localhost:5000/uploads/courses/c1/introduction/welcome.mp4"
    assert stored_file.read_bytes() == b"intro"

    assert RemoveCourseAssetUseCase(storage).execute(descriptor.url) is True
    assert not stored_file.exists()


class _BrokenStream(io.BytesIO):
    def __init__(self) -> None:
        super().__init__(b"first-chunk")
        self._reads = 0

    def read(self, size: int | None = -1) -> bytes:
        self._reads += 1
        if self._reads > 1:
            raise OSError("connection reset")
        return super().read(size)


def test_failed_save_leaves_no_file_behind(tmp_path: Path) -> None:
    storage = LocalAssetStorage(tmp_path)
    image_dir = tmp_path / "courses" / "c1" / "images"

    with pytest.raises(OSError, match="connection reset"):
        storage.save("courses/c1/images/a.png", _BrokenStream())

    assert not (image_dir / "a.png").exists()
    assert list(image_dir.iterdir()) == []


def test_failed_save_keeps_previous_file_intact(tmp_path: Path) -> None:
    storage = LocalAssetStorage(tmp_path)
    storage.save("courses/c1/images/a.png", io.BytesIO(b"original"))

    with pytest.raises(OSError):
        storage.save("courses/c1/images/a.png", _BrokenStream())

    assert (tmp_path / "courses" / "c1" / "images" / "a.png").read_bytes() == b"original"


def test_remove_use_case_accepts_site_relative_uploads_url(tmp_path: Path) -> None:
    storage = LocalAssetStorage(tmp_path)
    storage.save("courses/c1/images/a.png", io.BytesIO(b"png"))

    removed = RemoveCourseAssetUseCase(storage).execute("/uploads/courses/c1/images/a.png")

    assert removed is True
    assert not (tmp_path / "courses" / "c1" / "images" / "a.png").exists()
