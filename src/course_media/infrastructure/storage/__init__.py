"""Asset storage infrastructure package."""

from course_media.infrastructure.storage.local_storage import LocalAssetStorage

__all__ = ["LocalAssetStorage"]
