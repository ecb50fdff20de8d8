"""ProWriter - versioned writing artifacts and deterministic prose diagnostics.

Usage:
    from prowriter import analyze, scan, apply_ops

    metrics = analyze(text)
    report = scan(text)
    result = apply_ops(text, report.suggested_ops)
    print(result.text)

Persisted artifacts go through ``prowriter.services`` inside ``get_session()``.
"""

from prowriter.analysis import (
    ApplyResult,
    EditOp,
    Flag,
    ScanReport,
    TextMetrics,
    TextSpan,
    analyze,
    apply_ops,
    apply_suggested,
    build_quality_report,
    build_revision_plan,
    scan,
    synthesize,
)
from prowriter.config import Settings, get_settings
from prowriter.core.errors import ConflictError, NotFoundError, ProWriterError, ValidationError
from prowriter.db.engine import get_session, init_database
from prowriter.schemas import ArtifactType, RevisionMode

__version__ = "0.1.0"

__all__ = [
    "ApplyResult",
    "ArtifactType",
    "ConflictError",
    "EditOp",
    "Flag",
    "NotFoundError",
    "ProWriterError",
    "RevisionMode",
    "ScanReport",
    "Settings",
    "TextMetrics",
    "TextSpan",
    "ValidationError",
    "analyze",
    "apply_ops",
    "apply_suggested",
    "build_quality_report",
    "build_revision_plan",
    "get_session",
    "get_settings",
    "init_database",
    "scan",
    "synthesize",
]
