"""Command line interface for course asset addressing.

Commands:
    course-media kinds                                  List asset kinds
    course-media build-key COURSE KIND FILE [--lesson-id ID]
    course-media extract-key URL                        Print the storage key of a URL
    course-media normalize-video URL                    Print provider and embed URL
    course-media upload COURSE KIND PATH [--lesson-id ID] [--random-name]
    course-media remove URL_OR_KEY
    course-media rejected-courses                       Print rejected course projections
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn

import click

from course_media.application.asset_addressing import build_key, extract_key, to_url
from course_media.application.asset_uploads import (
    RemoveCourseAssetUseCase,
    UploadCourseAssetCommand,
    UploadCourseAssetUseCase,
)
from course_media.application.course_queries import ListRejectedCoursesUseCase
from course_media.application.media_normalizer import normalize_video_reference
from course_media.domain.assets import all_kinds
from course_media.domain.errors import (
    InvalidAssetSpecError,
    InvalidVideoReferenceError,
    NotFoundError,
)
from course_media.infrastructure.config import load_storage_settings
from course_media.infrastructure.db import (
    SqlAlchemyCourseReadUnitOfWork,
    create_default_session_factory,
)
from course_media.infrastructure.storage import LocalAssetStorage

EXIT_NOT_FOUND = 1
EXIT_INVALID_INPUT = 2


@click.group()
def cli() -> None:
    """Course media - storage keys, asset URLs and video embeds."""


@cli.command()
def kinds() -> None:
    """List the asset kinds accepted at upload."""
    for kind in all_kinds():
        click.echo(kind.value)


@cli.command("build-key")
@click.argument("course_id")
@click.argument("kind")
@click.argument("filename")
@click.option("--lesson-id", default=None, help="Lesson the asset belongs to.")
def build_key_command(course_id: str, kind: str, filename: str, lesson_id: str | None) -> None:
    """Print the storage key and public URL for an asset."""
    try:
        key = build_key(course_id, kind, filename, lesson_id=lesson_id)
    except InvalidAssetSpecError as exc:
        _fail(str(exc), EXIT_INVALID_INPUT)

    settings = load_storage_settings()
    click.echo(key.serialize())
    click.echo(to_url(settings.asset_base_url, key))


@cli.command("extract-key")
@click.argument("url")
def extract_key_command(url: str) -> None:
    """Print the storage key embedded in a stored URL."""
    key = extract_key(url)
    if key is None:
        _fail(f"No storage key in {url}", EXIT_NOT_FOUND)
    click.echo(key)


@cli.command("normalize-video")
@click.argument("url")
def normalize_video_command(url: str) -> None:
    """Print the provider and canonical embed URL of a video reference."""
    try:
        embed = normalize_video_reference(url)
    except InvalidVideoReferenceError as exc:
        _fail(str(exc), EXIT_INVALID_INPUT)
    click.echo(f"{embed.provider.value} {embed.url}")


@cli.command()
@click.argument("course_id")
@click.argument("kind")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--lesson-id", default=None, help="Lesson the asset belongs to.")
@click.option("--random-name", is_flag=True, help="Store under a random filename.")
def upload(course_id: str, kind: str, path: Path, lesson_id: str | None, random_name: bool) -> None:
    """Copy a local file into asset storage and print its descriptor."""
    settings = load_storage_settings()
    use_case = UploadCourseAssetUseCase(
        LocalAssetStorage(settings.upload_root),
        settings.asset_base_url,
    )
    with path.open("rb") as content:
        try:
            descriptor = use_case.execute(
                UploadCourseAssetCommand(
                    course_id=course_id,
                    kind=kind,
                    filename=path.name,
                    content=content,
                    lesson_id=lesson_id,
                    keep_original_name=not random_name,
                )
            )
        except InvalidAssetSpecError as exc:
            _fail(str(exc), EXIT_INVALID_INPUT)
    click.echo(json.dumps(descriptor.to_object(), indent=2))


@cli.command()
@click.argument("reference")
def remove(reference: str) -> None:
    """Delete the stored asset a URL or bare key points to."""
    settings = load_storage_settings()
    removed = RemoveCourseAssetUseCase(LocalAssetStorage(settings.upload_root)).execute(reference)
    if not removed:
        _fail(f"Nothing removed for {reference}", EXIT_NOT_FOUND)
    click.echo("removed")


@cli.command("rejected-courses")
def rejected_courses() -> None:
    """Print rejected courses as JSON."""
    session_factory = create_default_session_factory()
    use_case = ListRejectedCoursesUseCase(lambda: SqlAlchemyCourseReadUnitOfWork(session_factory))
    try:
        projections = use_case.execute()
    except NotFoundError as exc:
        _fail(str(exc), EXIT_NOT_FOUND)
    click.echo(
        json.dumps([projection.to_object() for projection in projections], indent=2, default=str)
    )


def _fail(message: str, exit_code: int) -> NoReturn:
    click.echo(message, err=True)
    raise SystemExit(exit_code)
