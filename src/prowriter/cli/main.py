"""ProWriter CLI: main entry point and shared utilities."""

from __future__ import annotations

import logging
import sys
from collections.abc import Generator
from contextlib import contextmanager

import click
from rich.console import Console
from rich.markup import escape
from sqlalchemy.orm import Session

from prowriter.core.errors import ProWriterError, ValidationError

console = Console()

SEVERITY_STYLES = {
    "info": "cyan",
    "warn": "yellow",
    "error": "red",
}


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def report_error(error: ProWriterError) -> None:
    """Print an error (and any schema error details) in red."""
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    if isinstance(error, ValidationError):
        for detail in error.errors:
            loc = ".".join(str(part) for part in detail.get("loc", ())) or "<root>"
            console.print(f"  [dim]{escape(loc)}:[/dim] {escape(str(detail.get('msg', '')))}")


@contextmanager
def project_session(project_id: str | None) -> Generator[tuple[Session, str], None, None]:
    """Open a session on the given project, or on the default project.

    Store errors are reported and end the command with exit code 1.
    """
    from prowriter.config import get_settings
    from prowriter.db.engine import get_session, init_database
    from prowriter.services.projects import get_or_create_default_project, require_project

    settings = get_settings()
    try:
        init_database(settings)
        with get_session(settings) as session:
            if project_id:
                require_project(session, project_id)
            else:
                project_id = get_or_create_default_project(session, settings)
            yield session, project_id
    except ProWriterError as e:
        report_error(e)
        sys.exit(1)


def project_option(fn):
    """Shared --project option; defaults to the default project."""
    return click.option(
        "--project",
        "project_id",
        default=None,
        help="Project ID (default: the default project)",
    )(fn)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """ProWriter: versioned writing artifacts and prose diagnostics."""
    setup_logging(verbose)


def cli():
    """Entrypoint that loads .env before running the CLI."""
    from dotenv import load_dotenv

    load_dotenv()
    main()


# Import subcommand modules to register commands
from prowriter.cli.artifact_commands import artifacts  # noqa: E402
from prowriter.cli.diagnose_commands import diagnose, plan  # noqa: E402
from prowriter.cli.project_commands import digest, init, projects  # noqa: E402

# Register commands
main.add_command(init)
main.add_command(projects)
main.add_command(artifacts)
main.add_command(diagnose)
main.add_command(plan)
main.add_command(digest)
