"""Application ports and read use-cases for course projections."""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType
from typing import Any, Protocol
from uuid import uuid4

from course_media.application.course_projection import project_course, require_non_empty
from course_media.domain.course import CourseProjection
from course_media.domain.errors import NotFoundError

LOGGER = logging.getLogger(__name__)

REJECTED_STATUS = "rejected"


class CourseReadRepository(Protocol):
    """Repository port returning raw course documents."""

    def list_by_status(self, status: str) -> list[Any]:
        """Return courses with the given moderation status."""
        ...

    def search_by_title(self, query: str) -> list[Any]:
        """Return courses whose title contains query, case-insensitively."""
        ...

    def get_course(self, course_id: str) -> Any | None:
        """Return one course document or None."""
        ...


class CourseReadUnitOfWork(Protocol):
    """Unit-of-work port around course reads."""

    courses: CourseReadRepository

    def __enter__(self) -> CourseReadUnitOfWork:
        """Start read scope."""
        ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Finalize read scope."""
        ...


CourseReadUnitOfWorkFactory = Callable[[], CourseReadUnitOfWork]


class ListRejectedCoursesUseCase:
    """List rejected courses; having none is reported as not found."""

    def __init__(self, uow_factory: CourseReadUnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def execute(self) -> list[CourseProjection]:
        correlation_id = str(uuid4())
        with self._uow_factory() as uow:
            courses = uow.courses.list_by_status(REJECTED_STATUS)
            try:
                require_non_empty(courses, "No rejected courses found")
            except NotFoundError:
                LOGGER.info(
                    "event=rejected_courses_not_found correlation_id=%s course_id=-",
                    correlation_id,
                )
                raise
            projections = [project_course(course) for course in courses]

        LOGGER.info(
            "event=rejected_courses_listed correlation_id=%s course_id=- items_count=%s",
            correlation_id,
            len(projections),
        )
        return projections


class SearchCoursesUseCase:
    """Search courses by title; an empty result is a valid answer."""

    def __init__(self, uow_factory: CourseReadUnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def execute(self, query: str) -> list[CourseProjection]:
        normalized_query = query.strip()
        if not normalized_query:
            raise ValueError("Search query must not be empty.")

        correlation_id = str(uuid4())
        with self._uow_factory() as uow:
            projections = [
                project_course(course) for course in uow.courses.search_by_title(normalized_query)
            ]

        LOGGER.info(
            "event=courses_searched correlation_id=%s course_id=- items_count=%s",
            correlation_id,
            len(projections),
        )
        return projections


class GetCourseUseCase:
    """Load one course projection by id."""

    def __init__(self, uow_factory: CourseReadUnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def execute(self, course_id: str) -> CourseProjection:
        if not course_id:
            raise ValueError("course_id is required")

        with self._uow_factory() as uow:
            course = uow.courses.get_course(course_id)
            if course is None:
                raise NotFoundError(f"Course not found: {course_id}")
            return project_course(course)
