"""Project commands: prowriter init, prowriter projects, prowriter digest."""

from __future__ import annotations

import sys

import click
from rich import box
from rich.markup import escape
from rich.table import Table

from prowriter.cli.main import console, project_option, project_session, report_error
from prowriter.core.errors import ProWriterError


@click.command()
def init():
    """Create the database and the seeded default project."""
    from prowriter.config import get_settings

    settings = get_settings()
    with project_session(None) as (_session, project_id):
        pass

    console.print(f"[green]Initialized:[/green] {settings.db_url}")
    console.print(f"  Default project: {project_id}")
    console.print(f"  Style profile: {settings.default_style_profile_name}")


@click.group()
def projects():
    """Create and list projects."""
    pass


@projects.command("create")
@click.option("--name", default=None, help="Project name")
def create_project_cmd(name: str | None):
    """Create a new project and print its ID."""
    from prowriter.config import get_settings
    from prowriter.db.engine import get_session, init_database
    from prowriter.services.projects import create_project

    settings = get_settings()
    try:
        init_database(settings)
        with get_session(settings) as session:
            project = create_project(session, name)
            project_id = project.id
    except ProWriterError as e:
        report_error(e)
        sys.exit(1)

    console.print(f"[green]Created project:[/green] {project_id}")


@projects.command("list")
def list_projects_cmd():
    """List projects, most recently updated first."""
    from prowriter.config import get_settings
    from prowriter.db.engine import get_session, init_database
    from prowriter.services.projects import list_projects

    settings = get_settings()
    init_database(settings)
    with get_session(settings) as session:
        rows = list_projects(session)

    if not rows:
        console.print("[dim]No projects found.[/dim] Run [bold]prowriter init[/bold] first.")
        return

    table = Table(box=box.ROUNDED, show_header=True)
    table.add_column("Project ID", style="bold", no_wrap=True)
    table.add_column("Name")
    table.add_column("Updated", style="dim", no_wrap=True)
    for row in rows:
        table.add_row(row["project_id"], escape(row["name"] or "-"), row["updated_at"] or "-")
    console.print(table)


@click.command()
@project_option
def digest(project_id: str | None):
    """Show the names of a project's style profiles, characters and directives."""
    from prowriter.services.projects import canon_digest

    with project_session(project_id) as (session, pid):
        summary = canon_digest(session, pid)

    console.print(f"[bold]Project:[/bold] {summary['project_id']}")
    for key, title in (
        ("style_profiles", "Style profiles"),
        ("characters", "Characters"),
        ("draft_directives", "Draft directives"),
    ):
        names = summary[key]
        console.print(f"  [bold]{title}:[/bold] {escape(', '.join(names)) if names else '[dim]none[/dim]'}")
