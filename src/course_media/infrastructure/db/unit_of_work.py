"""SQLAlchemy unit-of-work implementation for course reads."""

from __future__ import annotations

from types import TracebackType
from typing import Any

from sqlalchemy.orm import Session, sessionmaker

from course_media.application.course_queries import CourseReadRepository, CourseReadUnitOfWork
from course_media.infrastructure.db.course_repository import SqlAlchemyCourseReadRepository


class _UninitializedRepository(CourseReadRepository):
    """Placeholder repository before entering unit-of-work context."""

    def list_by_status(self, status: str) -> list[Any]:
        raise RuntimeError("Unit of work is not active.")

    def search_by_title(self, query: str) -> list[Any]:
        raise RuntimeError("Unit of work is not active.")

    def get_course(self, course_id: str) -> Any | None:
        raise RuntimeError("Unit of work is not active.")


class SqlAlchemyCourseReadUnitOfWork(CourseReadUnitOfWork):
    """Manage session scope for course reads."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None
        self.courses: CourseReadRepository = _UninitializedRepository()

    def __enter__(self) -> SqlAlchemyCourseReadUnitOfWork:
        self._session = self._session_factory()
        self.courses = SqlAlchemyCourseReadRepository(self._session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        session = self._session
        self._session = None
        self.courses = _UninitializedRepository()
        if session is not None:
            session.rollback()
            session.close()
