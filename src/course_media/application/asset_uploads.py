"""Application ports and use-cases for course asset upload and removal."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO, Protocol
from uuid import uuid4

from course_media.application.asset_addressing import (
    build_key,
    extract_storage_key,
    generate_stored_filename,
    to_url,
)
from course_media.domain.assets import AssetDescriptor, AssetKind, is_valid_kind
from course_media.domain.errors import InvalidAssetSpecError

LOGGER = logging.getLogger(__name__)


class AssetStorage(Protocol):
    """Storage backend port for course asset bytes."""

    def save(self, key: str, source: BinaryIO) -> str:
        """Write bytes at key; return a relative path or an absolute URL."""
        ...

    def remove(self, key: str) -> bool:
        """Delete bytes at key. Returns True when something was deleted."""
        ...


@dataclass(frozen=True)
class UploadCourseAssetCommand:
    """Input contract for storing one uploaded course asset."""

    course_id: str
    kind: str
    filename: str
    content: BinaryIO
    lesson_id: str | None = None
    keep_original_name: bool = True


class UploadCourseAssetUseCase:
    """Store an uploaded asset under its canonical key and issue its URL."""

    def __init__(self, storage: AssetStorage, asset_base_url: str) -> None:
        self._storage = storage
        self._asset_base_url = asset_base_url

    def execute(self, command: UploadCourseAssetCommand) -> AssetDescriptor:
        """Validate, write and resolve the public URL of one asset."""
        if not is_valid_kind(command.kind):
            raise InvalidAssetSpecError(f"Unsupported asset kind: {command.kind!r}.")

        stored_name = (
            command.filename
            if command.keep_original_name
            else generate_stored_filename(command.filename)
        )
        key = build_key(
            command.course_id,
            AssetKind(command.kind),
            stored_name,
            lesson_id=command.lesson_id,
        ).serialize()

        correlation_id = str(uuid4())
        try:
            location = self._storage.save(key, command.content)
        except Exception as exc:
            LOGGER.exception(
                (
                    "event=course_asset_upload_failed correlation_id=%s course_id=%s "
                    "lesson_id=%s kind=%s key=%s error_type=%s"
                ),
                correlation_id,
                command.course_id,
                command.lesson_id or "-",
                command.kind,
                key,
                exc.__class__.__name__,
            )
            raise

        descriptor = AssetDescriptor(
            name=command.filename,
            key=key,
            url=to_url(self._asset_base_url, location),
        )
        LOGGER.info(
            (
                "event=course_asset_uploaded correlation_id=%s course_id=%s "
                "lesson_id=%s kind=%s key=%s"
            ),
            correlation_id,
            command.course_id,
            command.lesson_id or "-",
            command.kind,
            key,
        )
        return descriptor


class RemoveCourseAssetUseCase:
    """Delete a stored asset given the URL or bare key persisted for it."""

    def __init__(self, storage: AssetStorage) -> None:
        self._storage = storage

    def execute(self, stored_reference: str) -> bool:
        """Return True when the referenced asset existed and was deleted."""
        correlation_id = str(uuid4())
        key = extract_storage_key(stored_reference)
        if key is None:
            LOGGER.info(
                "event=course_asset_remove_skipped correlation_id=%s course_id=- reason=foreign",
                correlation_id,
            )
            return False

        serialized = key.serialize()
        try:
            removed = self._storage.remove(serialized)
        except Exception as exc:
            LOGGER.exception(
                (
                    "event=course_asset_remove_failed correlation_id=%s course_id=%s "
                    "key=%s error_type=%s"
                ),
                correlation_id,
                key.course_id,
                serialized,
                exc.__class__.__name__,
            )
            raise

        LOGGER.info(
            "event=course_asset_removed correlation_id=%s course_id=%s key=%s removed=%s",
            correlation_id,
            key.course_id,
            serialized,
            removed,
        )
        return removed
