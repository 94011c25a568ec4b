"""Unit tests for course asset upload and removal use-cases."""

from __future__ import annotations

import io
import logging
import re
from typing import BinaryIO

import pytest

from course_media.application.asset_uploads import (
    RemoveCourseAssetUseCase,
    UploadCourseAssetCommand,
    UploadCourseAssetUseCase,
)
from course_media.domain.errors import InvalidAssetSpecError

ASSET_BASE_URL = "https://lms.example.com/uploads"


class _RecordingStorage:
    def __init__(self, location_prefix: str = "") -> None:
        self.saved: dict[str, bytes] = {}
        self.removed: list[str] = []
        self._location_prefix = location_prefix

    def save(self, key: str, source: BinaryIO) -> str:
        self.saved[key] = source.read()
        return f"{self._location_prefix}{key}"

    def remove(self, key: str) -> bool:
        self.removed.append(key)
        return self.saved.pop(key, None) is not None


class _FailingStorage(_RecordingStorage):
    def save(self, key: str, source: BinaryIO) -> str:
        raise OSError("disk full")


def _command(**overrides: object) -> UploadCourseAssetCommand:
    values: dict[str, object] = {
        "course_id": "c1",
        "kind": "videos",
        "filename": "intro.mp4",
        "content": io.BytesIO(b"video-bytes"),
        "lesson_id": "l1",
    }
    values.update(overrides)
    return UploadCourseAssetCommand(**values)  # type: ignore[arg-type]


def test_upload_stores_bytes_under_canonical_key_and_issues_url() -> None:
    storage = _RecordingStorage()
    use_case = UploadCourseAssetUseCase(storage, ASSET_BASE_URL)

    descriptor = use_case.execute(_command())

    assert descriptor.key == "courses/c1/videos/l1/intro.mp4"
    assert descriptor.url == f"{ASSET_BASE_URL}/courses/c1/videos/l1/intro.mp4"
    assert descriptor.name == "intro.mp4"
    assert storage.saved == {"courses/c1/videos/l1/intro.mp4": b"video-bytes"}


def test_upload_keeps_absolute_url_returned_by_storage() -> None:
    storage = _RecordingStorage(location_prefix="https://bucket.s3.amazonaws.com/")
    use_case = UploadCourseAssetUseCase(storage, ASSET_BASE_URL)

    descriptor = use_case.execute(_command(kind="images", filename="cover.png", lesson_id=None))

    assert descriptor.url == "https://bucket.s3.amazonaws.com/courses/c1/images/cover.png"


def test_upload_with_random_name_keeps_original_display_name() -> None:
    storage = _RecordingStorage()
    use_case = UploadCourseAssetUseCase(storage, ASSET_BASE_URL)

    descriptor = use_case.execute(
        _command(kind="documents", filename="Syllabus.PDF", keep_original_name=False)
    )

    assert descriptor.name == "Syllabus.PDF"
    assert re.fullmatch(r"courses/c1/documents/l1/[0-9a-f]{32}\.pdf", descriptor.key)


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"kind": "misc"}, "Unsupported asset kind"),
        ({"filename": "../../etc/passwd"}, "path separators"),
        ({"course_id": ""}, "course_id is required"),
    ],
)
def test_upload_rejects_invalid_spec_before_writing(
    overrides: dict[str, object],
    message: str,
) -> None:
    storage = _RecordingStorage()
    use_case = UploadCourseAssetUseCase(storage, ASSET_BASE_URL)

    with pytest.raises(InvalidAssetSpecError, match=message):
        use_case.execute(_command(**overrides))

    assert storage.saved == {}


def test_upload_propagates_storage_failure_and_logs_it(caplog: pytest.LogCaptureFixture) -> None:
    use_case = UploadCourseAssetUseCase(_FailingStorage(), ASSET_BASE_URL)

    with caplog.at_level(logging.ERROR), pytest.raises(OSError, match="disk full"):
        use_case.execute(_command())

    assert "event=course_asset_upload_failed" in caplog.text
    assert "error_type=OSError" in caplog.text


def test_remove_deletes_asset_referenced_by_issued_url() -> None:
    storage = _RecordingStorage()
    descriptor = UploadCourseAssetUseCase(storage, ASSET_BASE_URL).execute(_command())

    removed = RemoveCourseAssetUseCase(storage).execute(descriptor.url)

    assert removed is True
    assert storage.removed == ["courses/c1/videos/l1/intro.mp4"]


def test_remove_accepts_bare_key() -> None:
    storage = _RecordingStorage()
    storage.saved["courses/c1/images/cover.png"] = b"png"

    assert RemoveCourseAssetUseCase(storage).execute("courses/c1/images/cover.png") is True


def test_remove_skips_foreign_urls_without_touching_storage() -> None:
    storage = _RecordingStorage()

    removed = RemoveCourseAssetUseCase(storage).execute("https://i.ytimg.com/vi/abc/hq.jpg")

    assert removed is False
    assert storage.removed == []
