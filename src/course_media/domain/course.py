"""Read-side course contracts."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

_OMIT_WHEN_ABSENT = ("instructorId", "category", "subcategory", "thumbnailUrl", "videoEmbedUrl")


class CourseProjection(BaseModel):
    """Flat, client-safe course record built on every read.

    Fields not declared here are carried through unchanged from the source
    document.
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    instructor_id: str | None = Field(default=None, alias="instructorId")
    category: str | None = None
    subcategory: str | None = None
    courses_enrolled: list[str] = Field(default_factory=list, alias="coursesEnrolled")
    enrollment_count: int = Field(default=0, ge=0, alias="enrollmentCount")
    thumbnail_url: str | None = Field(default=None, alias="thumbnailUrl")
    video_embed_url: str | None = Field(default=None, alias="videoEmbedUrl")

    def to_object(self) -> dict[str, Any]:
        """Return the flat document; absent references and derived fields are omitted."""
        document = self.model_dump(by_alias=True)
        for name in _OMIT_WHEN_ABSENT:
            if document.get(name) is None:
                document.pop(name, None)
        return document
