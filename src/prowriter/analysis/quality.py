"""Quality report assembly: metrics, threshold issues and the heuristic scan."""

from __future__ import annotations

from typing import Any

from prowriter.analysis.detectors import scan
from prowriter.analysis.edits import apply_ops
from prowriter.analysis.text import TextMetrics, analyze

LONG_SENTENCE_WORDS = 30
DIALOGUE_HEAVY_RATIO = 0.6


def derive_issues(metrics: TextMetrics) -> list[dict[str, str]]:
    """Issues raised by fixed thresholds on the metrics."""
    issues: list[dict[str, str]] = []

    if metrics.word_count > 0 and metrics.avg_sentence_words > LONG_SENTENCE_WORDS:
        issues.append({
            "severity": "warn",
            "category": "rhythm",
            "message": "Sentences run long; tighten and vary cadence",
        })

    if metrics.filler_phrase_count > 0:
        issues.append({
            "severity": "warn",
            "category": "filler",
            "message": "Filler detected; cut throat-clearing and replace generic reactions with specific action",
        })

    if metrics.vague_word_count > 0:
        issues.append({
            "severity": "warn",
            "category": "clarity",
            "message": "Abstract/vague language detected; replace with concrete behavior and specific detail",
        })

    adverb_threshold = max(3, metrics.word_count // 250)
    if metrics.adverb_like_count > adverb_threshold:
        issues.append({
            "severity": "info",
            "category": "clarity",
            "message": "Adverb density may be high; consider stronger verbs and cleaner clauses",
        })

    if metrics.dialogue_ratio > DIALOGUE_HEAVY_RATIO:
        issues.append({
            "severity": "info",
            "category": "dialogue",
            "message": "Dialogue-heavy passage; check that action and setting stay grounded",
        })

    return issues


def build_quality_report(
    text: str,
    schema_version: int = 1,
    directive_name: str | None = None,
    style_profile_name: str | None = None,
    include_scan: bool = True,
    apply: bool = False,
) -> dict[str, Any]:
    """Build a quality_report payload for ``text``.

    Args:
        text: Prose to diagnose.
        schema_version: Payload schema version.
        directive_name: Draft directive the text was written against, if any.
        style_profile_name: Style profile the text should follow, if any.
        include_scan: Attach the heuristic scan under ``deai``.
        apply: Also apply the suggested ops and attach ``cleaned_text``.
    """
    metrics = analyze(text)
    report: dict[str, Any] = {
        "schema_version": schema_version,
        "metrics": metrics.to_dict(),
        "issues": derive_issues(metrics),
        "meta": {
            "directive_name": directive_name,
            "style_profile_name": style_profile_name,
        },
    }

    if include_scan or apply:
        scan_report = scan(text)
        if include_scan:
            report["deai"] = scan_report.to_dict()
        if apply:
            result = apply_ops(text, scan_report.suggested_ops)
            report["cleaned_text"] = result.text
            if include_scan:
                report["deai"]["applied_ops"] = [op.to_dict() for op in result.applied]

    return report
