"""Deterministic prose analysis.

- text.analyze: word/sentence counts, readability, ratios
- detectors.scan: categorized heuristic flags and conservative edit ops
- edits.apply_ops: offset-stable application of edit ops
- revision.synthesize: fixed rubric per revision mode

Everything here is pure: no I/O, no shared state.
"""

from prowriter.analysis.detectors import DETECTORS, Detector, scan
from prowriter.analysis.edits import apply_ops, apply_suggested
from prowriter.analysis.models import ApplyResult, EditOp, Flag, ScanReport, TextSpan
from prowriter.analysis.quality import build_quality_report, derive_issues
from prowriter.analysis.revision import build_revision_plan, synthesize
from prowriter.analysis.text import TextMetrics, analyze

__all__ = [
    "DETECTORS",
    "ApplyResult",
    "Detector",
    "EditOp",
    "Flag",
    "ScanReport",
    "TextMetrics",
    "TextSpan",
    "analyze",
    "apply_ops",
    "apply_suggested",
    "build_quality_report",
    "build_revision_plan",
    "derive_issues",
    "scan",
    "synthesize",
]
