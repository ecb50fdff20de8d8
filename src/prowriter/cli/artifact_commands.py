"""Artifact commands: prowriter artifacts list/show/history/put."""

from __future__ import annotations

import json
import sys

import click
from rich import box
from rich.markup import escape
from rich.table import Table

from prowriter.cli.main import console, project_option, project_session
from prowriter.schemas import ArtifactType

TYPE_CHOICE = click.Choice([t.value for t in ArtifactType])


@click.group()
def artifacts():
    """Read and write versioned artifacts."""
    pass


@artifacts.command("list")
@click.option("--type", "artifact_type", type=TYPE_CHOICE, default=None, help="Filter by artifact type")
@project_option
def list_cmd(artifact_type: str | None, project_id: str | None):
    """List artifacts in a project with their current revision."""
    from prowriter.services.artifacts import list_artifacts

    with project_session(project_id) as (session, pid):
        rows = list_artifacts(session, pid, artifact_type)

    if not rows:
        console.print("[dim]No artifacts found.[/dim]")
        return

    table = Table(box=box.ROUNDED, show_header=True)
    table.add_column("Type", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Rev", justify="right")
    table.add_column("Schema", justify="right", style="dim")
    table.add_column("Updated", style="dim", no_wrap=True)
    for row in rows:
        table.add_row(
            row["type"],
            escape(row["name"]),
            str(row["revision"]),
            str(row["schema_version"]),
            row["updated_at"] or "-",
        )
    console.print(table)


@artifacts.command("show")
@click.argument("artifact_type", type=TYPE_CHOICE)
@click.argument("name")
@click.option("--revision", type=int, default=None, help="Show a specific revision instead of the latest")
@project_option
def show_cmd(artifact_type: str, name: str, revision: int | None, project_id: str | None):
    """Print an artifact revision as JSON."""
    from prowriter.services.artifacts import require_artifact_latest, require_artifact_revision

    with project_session(project_id) as (session, pid):
        if revision is None:
            found = require_artifact_latest(session, pid, artifact_type, name)
        else:
            found = require_artifact_revision(session, pid, artifact_type, name, revision)

    click.echo(json.dumps(found, indent=2))


@artifacts.command("history")
@click.argument("artifact_type", type=TYPE_CHOICE)
@click.argument("name")
@project_option
def history_cmd(artifact_type: str, name: str, project_id: str | None):
    """List every revision of an artifact, oldest first."""
    from prowriter.core.errors import NotFoundError
    from prowriter.services.artifacts import list_artifact_revisions

    with project_session(project_id) as (session, pid):
        revisions = list_artifact_revisions(session, pid, artifact_type, name)
        if revisions is None:
            raise NotFoundError(f"Artifact {artifact_type}/{name} not found")

    table = Table(title=f"{artifact_type}/{name}", box=box.ROUNDED, show_header=True)
    table.add_column("Rev", justify="right", style="bold")
    table.add_column("Created", style="dim", no_wrap=True)
    for rev in revisions:
        table.add_row(str(rev["revision"]), rev["created_at"] or "-")
    console.print(table)


@artifacts.command("put")
@click.argument("artifact_type", type=TYPE_CHOICE)
@click.argument("name")
@click.argument("payload_file", type=click.File("r"))
@click.option(
    "--schema-version",
    type=int,
    default=None,
    help="Schema version (default: the payload's schema_version, else 1)",
)
@project_option
def put_cmd(artifact_type: str, name: str, payload_file, schema_version: int | None, project_id: str | None):
    """Write a JSON payload as the next revision of an artifact.

    PAYLOAD_FILE is a path to a JSON file, or - for stdin.
    """
    from prowriter.services.artifacts import upsert_artifact

    try:
        payload = json.load(payload_file)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] Invalid JSON in {payload_file.name}: {e}")
        sys.exit(1)

    if schema_version is None:
        # Checked by the store along with the payload
        schema_version = payload.get("schema_version", 1) if isinstance(payload, dict) else 1

    with project_session(project_id) as (session, pid):
        result = upsert_artifact(session, pid, artifact_type, name, schema_version, payload)

    console.print(
        f"[green]Wrote[/green] {result['type']}/{escape(result['name'])} "
        f"revision [bold]{result['revision']}[/bold] (schema {result['schema_version']})"
    )
