"""Diagnostics commands: prowriter diagnose, prowriter plan."""

from __future__ import annotations

import json
import sys
from typing import Any

import click
from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from prowriter.cli.main import SEVERITY_STYLES, console, project_option, project_session, report_error
from prowriter.core.errors import ProWriterError
from prowriter.schemas import RevisionMode

METRIC_LABELS = (
    ("word_count", "Words"),
    ("sentence_count", "Sentences"),
    ("avg_sentence_words", "Avg words/sentence"),
    ("adverb_like_count", "-ly words"),
    ("vague_word_count", "Vague words"),
    ("filler_phrase_count", "Filler phrases"),
    ("metaphor_marker_count", "Metaphor markers"),
    ("dialogue_ratio", "Dialogue ratio"),
    ("readability_flesch", "Flesch reading ease"),
)


def _format_metric(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


def _print_report(report: dict[str, Any]) -> None:
    metrics = report["metrics"]
    table = Table(title="Metrics", box=box.ROUNDED, show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    for key, label in METRIC_LABELS:
        table.add_row(label, _format_metric(metrics.get(key)))
    console.print(table)

    issues = report["issues"]
    if issues:
        console.print("\n[bold]Issues[/bold]")
        for issue in issues:
            style = SEVERITY_STYLES.get(issue["severity"], "white")
            console.print(f"  [{style}]{issue['severity']:5}[/{style}] {issue['category']}: {issue['message']}")
    else:
        console.print("\n[green]No threshold issues.[/green]")

    deai = report.get("deai")
    if deai and deai["flags"]:
        console.print("\n[bold]Flags[/bold]")
        for flag in deai["flags"]:
            style = SEVERITY_STYLES.get(flag["severity"], "white")
            snippets = escape(", ".join(repr(s["snippet"]) for s in flag["spans"][:5]))
            more = len(flag["spans"]) - 5
            suffix = f" (+{more} more)" if more > 0 else ""
            console.print(f"  [{style}]{flag['kind']}[/{style}] {flag['message']}")
            console.print(f"    [dim]{snippets}{suffix}[/dim]")
        console.print(f"\n  {len(deai['suggested_ops'])} suggested edit(s)")

    if "cleaned_text" in report:
        applied = len((deai or {}).get("applied_ops", []))
        console.print(Panel(Text(report["cleaned_text"]), title=f"Cleaned text ({applied} edit(s) applied)"))


@click.command()
@click.argument("text_file", type=click.File("r", encoding="utf-8"))
@click.option("--name", "report_name", default="latest", show_default=True, help="Quality report artifact name")
@click.option("--apply", "apply_ops", is_flag=True, help="Apply the suggested edits and keep the cleaned text")
@click.option("--directive", "directive_name", default=None, help="Draft directive the text was written against")
@click.option("--style-profile", "style_profile_name", default=None, help="Style profile the text should follow")
@click.option("--schema-version", type=int, default=1, show_default=True, help="Report schema version")
@click.option("--dry-run", is_flag=True, help="Analyze only; do not store a report")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@project_option
def diagnose(
    text_file,
    report_name: str,
    apply_ops: bool,
    directive_name: str | None,
    style_profile_name: str | None,
    schema_version: int,
    dry_run: bool,
    as_json: bool,
    project_id: str | None,
):
    """Run prose diagnostics on TEXT_FILE (or - for stdin).

    The report is stored as a quality_report revision unless --dry-run is given.
    """
    from prowriter.config import get_settings

    request = {
        "schema_version": schema_version,
        "text": text_file.read(),
        "directive_name": directive_name,
        "style_profile_name": style_profile_name,
    }

    settings = get_settings()
    if dry_run:
        from prowriter.analysis.quality import build_quality_report
        from prowriter.schemas import ProseDiagnosticRequest, parse_model

        try:
            parsed = parse_model(ProseDiagnosticRequest, request, "diagnostic request")
        except ProWriterError as e:
            report_error(e)
            sys.exit(1)
        report = build_quality_report(
            parsed.text,
            schema_version=parsed.schema_version,
            directive_name=parsed.directive_name,
            style_profile_name=parsed.style_profile_name or settings.default_style_profile_name,
            apply=apply_ops,
        )
        result = None
    else:
        from prowriter.services.diagnostics import run_prose_diagnostics

        with project_session(project_id) as (session, pid):
            result = run_prose_diagnostics(
                session,
                pid,
                request,
                report_name=report_name,
                apply=apply_ops,
                default_style_profile_name=settings.default_style_profile_name,
            )
        report = result["report"]

    if as_json:
        click.echo(json.dumps(result if result is not None else report, indent=2))
        return

    _print_report(report)
    if result is not None:
        console.print(
            f"\n[green]Stored[/green] quality_report/{result['name']} revision [bold]{result['revision']}[/bold]"
        )


@click.command()
@click.argument("mode", type=click.Choice([m.value for m in RevisionMode]))
@click.option("--name", "plan_name", default="current", show_default=True, help="Revision plan artifact name")
@click.option("--constraint", "constraints", multiple=True, help="Extra constraint (repeatable)")
@click.option("--audience", "target_audience", default=None, help="Target audience")
@click.option("--tone", default=None, help="Tone to keep")
@click.option("--pov", default=None, help="Point of view to stay in")
@click.option("--rating", "rating_boundaries", default=None, help="Rating boundaries")
@click.option("--json", "as_json", is_flag=True, help="Print the plan as JSON")
@project_option
def plan(
    mode: str,
    plan_name: str,
    constraints: tuple[str, ...],
    target_audience: str | None,
    tone: str | None,
    pov: str | None,
    rating_boundaries: str | None,
    as_json: bool,
    project_id: str | None,
):
    """Create a revision plan for MODE and store it."""
    from prowriter.services.diagnostics import create_revision_plan

    request = {
        "schema_version": 1,
        "mode": mode,
        "constraints": list(constraints) or None,
        "target_audience": target_audience,
        "tone": tone,
        "pov": pov,
        "rating_boundaries": rating_boundaries,
    }

    with project_session(project_id) as (session, pid):
        result = create_revision_plan(session, pid, request, plan_name=plan_name)

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    payload = result["plan"]
    console.print(f"[bold]Revision plan:[/bold] {payload['mode']}")
    for i, rule in enumerate(payload["rubric"], 1):
        console.print(f"  {i:2}. {escape(rule)}")
    if payload.get("risks_to_avoid"):
        console.print("\n[bold]Risks to avoid[/bold]")
        for risk in payload["risks_to_avoid"]:
            console.print(f"  - {escape(risk)}")
    if payload.get("recommended_passes"):
        console.print("\n[bold]Recommended passes[/bold]")
        for step in payload["recommended_passes"]:
            console.print(f"  - {escape(step)}")
    console.print(
        f"\n[green]Stored[/green] revision_plan/{result['name']} revision [bold]{result['revision']}[/bold]"
    )
