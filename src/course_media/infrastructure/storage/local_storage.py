"""Local filesystem adapter for course asset storage."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import BinaryIO

from course_media.application.asset_uploads import AssetStorage
from course_media.domain.errors import InvalidAssetSpecError

PARTIAL_SUFFIX = ".part"


class LocalAssetStorage(AssetStorage):
    """Store asset bytes below a configured upload root."""

    def __init__(self, upload_root: Path) -> None:
        self._upload_root = upload_root.expanduser().resolve()

    @property
    def upload_root(self) -> Path:
        return self._upload_root

    def save(self, key: str, source: BinaryIO) -> str:
        """Stream source to ``upload_root/key`` and return the relative key.

        Bytes land in a ``.part`` sibling first; the key only appears once the
        copy completed.
        """
        destination = self._resolve(key)
        destination.parent.mkdir(parents=True, exist_ok=True)
        partial = destination.with_name(f"{destination.name}{PARTIAL_SUFFIX}")
        try:
            with partial.open("wb") as target:
                shutil.copyfileobj(source, target)
            partial.replace(destination)
        except BaseException:
            partial.unlink(missing_ok=True)
            raise
        return key

    def remove(self, key: str) -> bool:
        """Delete the file at key; a missing file is not an error."""
        target = self._resolve(key)
        try:
            target.unlink()
        except FileNotFoundError:
            return False
        return True

    def _resolve(self, key: str) -> Path:
        candidate = (self._upload_root / key).resolve()
        if not candidate.is_relative_to(self._upload_root) or candidate == self._upload_root:
            raise InvalidAssetSpecError(f"Storage key escapes upload root: {key!r}.")
        return candidate
