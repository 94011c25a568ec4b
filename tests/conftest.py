"""Shared pytest fixtures for course media tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from sqlalchemy.orm import Session, sessionmaker

from course_media.infrastructure.db.session import (
    create_schema,
    create_session_factory,
    create_sqlite_engine,
)


@pytest.fixture
def session_factory(tmp_path: Path) -> Iterator[sessionmaker[Session]]:
    """SQLite session factory with the course schema created."""
    engine = create_sqlite_engine(tmp_path / "courses.db")
    create_schema(engine)
    yield create_session_factory(engine)
    engine.dispose()
