"""Database infrastructure package."""

from course_media.infrastructure.db.session import (
    create_default_session_factory,
    create_schema,
    create_session_factory,
    create_sqlite_engine,
)
from course_media.infrastructure.db.unit_of_work import SqlAlchemyCourseReadUnitOfWork

__all__ = [
    "SqlAlchemyCourseReadUnitOfWork",
    "create_default_session_factory",
    "create_schema",
    "create_session_factory",
    "create_sqlite_engine",
]
