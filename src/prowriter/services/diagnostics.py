"""Diagnostics and revision-plan operations that persist their results."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from prowriter.analysis.quality import build_quality_report
from prowriter.analysis.revision import build_revision_plan
from prowriter.schemas import (
    ArtifactType,
    ProseDiagnosticRequest,
    RevisionPlanRequest,
    parse_model,
)
from prowriter.services.artifacts import upsert_artifact

logger = logging.getLogger(__name__)


def run_prose_diagnostics(
    session: Session,
    project_id: str,
    request: dict[str, Any] | ProseDiagnosticRequest,
    report_name: str = "latest",
    apply: bool = False,
    default_style_profile_name: str | None = None,
) -> dict[str, Any]:
    """Analyze prose and store the result as a quality_report revision.

    Args:
        session: Database session.
        project_id: Project to write into.
        request: ProseDiagnosticRequest or its dict form.
        report_name: Artifact name for the report.
        apply: Also store the text with suggested ops applied.
        default_style_profile_name: Recorded in the report meta when the
            request names no style profile.

    Returns:
        The upsert summary plus the report payload under ``report``.
    """
    if not isinstance(request, ProseDiagnosticRequest):
        request = parse_model(ProseDiagnosticRequest, request, "diagnostic request")

    report = build_quality_report(
        request.text,
        schema_version=request.schema_version,
        directive_name=request.directive_name,
        style_profile_name=request.style_profile_name or default_style_profile_name,
        include_scan=True,
        apply=apply,
    )
    logger.debug(
        "Diagnosed %d words, %d issue(s)",
        report["metrics"]["word_count"],
        len(report["issues"]),
    )

    result = upsert_artifact(
        session,
        project_id,
        ArtifactType.QUALITY_REPORT,
        report_name,
        request.schema_version,
        report,
    )
    return {**result, "report": report}


def create_revision_plan(
    session: Session,
    project_id: str,
    request: dict[str, Any] | RevisionPlanRequest,
    plan_name: str = "current",
) -> dict[str, Any]:
    """Synthesize a revision plan for the requested mode and store it."""
    if not isinstance(request, RevisionPlanRequest):
        request = parse_model(RevisionPlanRequest, request, "revision plan request")

    plan = build_revision_plan(request)
    result = upsert_artifact(
        session,
        project_id,
        ArtifactType.REVISION_PLAN,
        plan_name,
        plan["schema_version"],
        plan,
    )
    return {**result, "plan": plan}
