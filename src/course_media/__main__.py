"""Command line entrypoint."""

from __future__ import annotations

import logging
from uuid import uuid4

import click

from course_media.cli import cli
from course_media.infrastructure.logging_config import configure_logging

LOGGER = logging.getLogger(__name__)


def main() -> int:
    """Run the course-media CLI."""
    configure_logging()
    try:
        cli.main(prog_name="course-media", standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        return 1
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1
    except Exception:
        correlation_id = str(uuid4())
        LOGGER.exception(
            "event=cli_failed correlation_id=%s course_id=-",
            correlation_id,
        )
        print(f"course-media failed. correlation_id={correlation_id}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
