"""Engine/session bootstrap for SQLite course persistence."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from course_media.infrastructure.config import resolve_database_path
from course_media.infrastructure.db.base import Base


def create_sqlite_engine(database_path: Path) -> Engine:
    """Create SQLite engine for provided database path."""
    database_path.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(f"sqlite:///{database_path.as_posix()}")


def create_schema(engine: Engine) -> None:
    """Create course tables that do not exist yet."""
    Base.metadata.create_all(engine)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create typed SQLAlchemy session factory."""
    return sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
        class_=Session,
    )


def create_default_session_factory() -> sessionmaker[Session]:
    """Create session factory for the configured database, ensuring the schema."""
    engine = create_sqlite_engine(resolve_database_path())
    create_schema(engine)
    return create_session_factory(engine)
