"""SQLAlchemy models for course persistence."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from course_media.infrastructure.db.base import Base


class CourseModel(Base):
    """Course aggregate root with asset references stored as JSON sub-documents."""

    __tablename__ = "courses"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="draft", index=True)
    level: Mapped[str | None] = mapped_column(String(32), nullable=True)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    is_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    instructor_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True, index=True)
    category_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    subcategory_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    thumbnail: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    guidelines: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    introduction: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    video_source: Mapped[str | None] = mapped_column(String(16), nullable=True)
    video_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    enrollments: Mapped[list[CourseEnrollmentModel]] = relationship(
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="CourseEnrollmentModel.enrolled_at",
    )

    def to_object(self) -> dict[str, Any]:
        """Return the course as a document keyed the way API clients expect.

        Reference ids keep their native UUID type.
        """
        return {
            "id": str(self.id),
            "title": self.title,
            "status": self.status,
            "level": self.level,
            "price": self.price,
            "isPaid": self.is_paid,
            "instructorId": self.instructor_id,
            "category": self.category_id,
            "subcategory": self.subcategory_id,
            "thumbnail": self.thumbnail,
            "guidelines": self.guidelines,
            "introduction": self.introduction,
            "videoSource": self.video_source,
            "videoUrl": self.video_url,
            "createdAt": self.created_at,
            "coursesEnrolled": [enrollment.student_id for enrollment in self.enrollments],
        }


class CourseEnrollmentModel(Base):
    """Student enrollment in a course."""

    __tablename__ = "course_enrollments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    course_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("courses.id"),
        nullable=False,
        index=True,
    )
    student_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    enrolled_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    course: Mapped[CourseModel] = relationship(back_populates="enrollments")
