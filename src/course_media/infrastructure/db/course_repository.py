"""SQLAlchemy repository implementation for course reads."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from course_media.application.course_queries import CourseReadRepository
from course_media.infrastructure.db.models import CourseModel


class SqlAlchemyCourseReadRepository(CourseReadRepository):
    """Read course rows with their enrollments eagerly loaded."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_by_status(self, status: str) -> list[CourseModel]:
        statement = (
            select(CourseModel)
            .options(selectinload(CourseModel.enrollments))
            .where(CourseModel.status == status)
            .order_by(CourseModel.created_at.desc())
        )
        return list(self._session.execute(statement).scalars())

    def search_by_title(self, query: str) -> list[CourseModel]:
        statement = (
            select(CourseModel)
            .options(selectinload(CourseModel.enrollments))
            .where(CourseModel.title.icontains(query, autoescape=True))
            .order_by(CourseModel.title)
        )
        return list(self._session.execute(statement).scalars())

    def get_course(self, course_id: str) -> CourseModel | None:
        try:
            primary_key = uuid.UUID(course_id)
        except ValueError:
            return None

        statement = (
            select(CourseModel)
            .options(selectinload(CourseModel.enrollments))
            .where(CourseModel.id == primary_key)
        )
        return self._session.execute(statement).scalars().first()
