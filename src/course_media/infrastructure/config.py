"""Storage and database configuration resolved from environment variables."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path

from course_media.domain.errors import StorageSettingsError

PUBLIC_BASE_URL_ENV_VAR = "COURSE_MEDIA_PUBLIC_BASE_URL"
UPLOAD_ROOT_ENV_VAR = "COURSE_MEDIA_UPLOAD_ROOT"
CDN_BASE_URL_ENV_VAR = "COURSE_MEDIA_CDN_BASE_URL"
DB_PATH_ENV_VAR = "COURSE_MEDIA_DB_PATH"
DEFAULT_PUBLIC_BASE_URL = "http://localhost:5000"
DEFAULT_UPLOAD_ROOT = "uploads"
UPLOADS_PATH = "uploads"
DEFAULT_DB_PATH = "var/course_media.db"

_HTTP_URL_PATTERN = re.compile(r"^https?://[^/\s]+", re.IGNORECASE)


@dataclass(frozen=True)
class StorageSettings:
    """Explicit storage configuration handed to addressing components."""

    public_base_url: str
    upload_root: Path
    cdn_base_url: str | None = None

    def __post_init__(self) -> None:
        _require_http_url(PUBLIC_BASE_URL_ENV_VAR, self.public_base_url)
        if self.cdn_base_url is not None:
            _require_http_url(CDN_BASE_URL_ENV_VAR, self.cdn_base_url)

    @property
    def asset_base_url(self) -> str:
        """Base URL under which storage keys are served."""
        return f"{self.public_base_url.rstrip('/')}/{UPLOADS_PATH}"


def load_storage_settings() -> StorageSettings:
    """Build settings from environment, falling back to local defaults."""
    return StorageSettings(
        public_base_url=_resolve(PUBLIC_BASE_URL_ENV_VAR, DEFAULT_PUBLIC_BASE_URL).rstrip("/"),
        upload_root=Path(_resolve(UPLOAD_ROOT_ENV_VAR, DEFAULT_UPLOAD_ROOT)).expanduser().resolve(),
        cdn_base_url=_resolve(CDN_BASE_URL_ENV_VAR, "").rstrip("/") or None,
    )


def resolve_database_path() -> Path:
    """Return the SQLite database path, relative paths anchored at the working directory."""
    return Path(_resolve(DB_PATH_ENV_VAR, DEFAULT_DB_PATH)).expanduser().resolve()


def _resolve(env_var: str, fallback: str) -> str:
    resolved = os.environ.get(env_var, "").strip()
    return resolved if resolved else fallback


def _require_http_url(setting_name: str, value: str) -> None:
    if not _HTTP_URL_PATTERN.match(value):
        raise StorageSettingsError(f"{setting_name} must be an http(s) URL, got {value!r}.")
