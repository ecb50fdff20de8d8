"""Apply proposed edit ops to the text they were computed against.

Ops are applied from the highest start offset down, so each slice happens
before any edit at a lower offset can shift it. Overlapping ops are not
applied twice: the first op (in input order) wins and later overlapping ops
are reported as skipped.
"""

from __future__ import annotations

from collections.abc import Iterable

from prowriter.analysis.models import EDIT_OPS, ApplyResult, EditOp, ScanReport

MAX_APPLY_OPS = 80


def _is_applicable(text: str, op: EditOp) -> bool:
    if op.op not in EDIT_OPS:
        return False
    if op.op == "replace" and op.replacement is None:
        return False
    return 0 <= op.span.start <= op.span.end <= len(text)


def _conflicts(op: EditOp, accepted: list[EditOp]) -> bool:
    for other in accepted:
        if op.span.overlaps(other.span):
            return True
        # Two ops on the same empty span would race for the same position
        if op.span.start == op.span.end == other.span.start == other.span.end:
            return True
    return False


def apply_ops(text: str, ops: Iterable[EditOp], max_ops: int = MAX_APPLY_OPS) -> ApplyResult:
    """Apply delete/replace ops to ``text``.

    Args:
        text: The original text the op spans refer to.
        ops: Proposed ops, e.g. ``scan(text).suggested_ops``.
        max_ops: At most this many ops are applied.

    Returns:
        ApplyResult with the rewritten text, the ops applied in application
        order, and the ops skipped (malformed, out of range, overlapping or
        over the cap).
    """
    accepted: list[EditOp] = []
    skipped: list[EditOp] = []
    for op in ops:
        if (
            len(accepted) >= max_ops
            or not _is_applicable(text, op)
            or _conflicts(op, accepted)
        ):
            skipped.append(op)
            continue
        accepted.append(op)

    ordered = sorted(accepted, key=lambda o: (o.span.start, o.span.end), reverse=True)

    out = text
    for op in ordered:
        replacement = op.replacement if op.op == "replace" else ""
        out = out[: op.span.start] + (replacement or "") + out[op.span.end :]

    return ApplyResult(text=out, applied=ordered, skipped=skipped)


def apply_suggested(
    text: str,
    report: ScanReport | None = None,
    kinds: Iterable[str] | None = None,
) -> ApplyResult:
    """Apply the ops a scan suggests for ``text``.

    Args:
        text: Text to clean.
        report: A ScanReport for this exact text; computed when omitted.
        kinds: Restrict to ops whose span belongs to a flag of these kinds.
    """
    if report is None:
        from prowriter.analysis.detectors import scan

        report = scan(text)

    ops = report.suggested_ops
    if kinds is not None:
        wanted = set(kinds)
        allowed = {
            (span.start, span.end)
            for flag in report.flags
            if flag.kind in wanted
            for span in flag.spans
        }
        ops = [
            op
            for op in ops
            if any(s <= op.span.start and op.span.end <= e for s, e in allowed)
        ]
    return apply_ops(text, ops)
