"""Data types shared by the analyzers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

FLAG_KINDS = (
    "personification",
    "vague_language",
    "abstract_simile",
    "cliche",
    "rhetorical_frame",
    "filler",
)
SEVERITIES = ("info", "warn", "error")
EDIT_OPS = ("delete", "replace")


@dataclass(frozen=True)
class TextSpan:
    """Half-open ``[start, end)`` range into one specific text.

    ``snippet`` is the substring at capture time, kept for display only.
    """

    start: int
    end: int
    snippet: str = ""

    @classmethod
    def of(cls, text: str, start: int, end: int) -> TextSpan:
        """Build a span whose snippet is the clamped slice of ``text``."""
        return cls(start, end, text[max(0, start) : min(len(text), end)])

    def overlaps(self, other: TextSpan) -> bool:
        return self.start < other.end and other.start < self.end

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start, "end": self.end, "snippet": self.snippet}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TextSpan:
        return cls(int(data["start"]), int(data["end"]), data.get("snippet", ""))


@dataclass
class Flag:
    """One detected pattern occurrence group."""

    kind: str
    severity: str
    message: str
    spans: list[TextSpan] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "severity": self.severity,
            "message": self.message,
            "spans": [s.to_dict() for s in self.spans],
        }


@dataclass(frozen=True)
class EditOp:
    """A proposed delete or replace against the original text."""

    op: str  # "delete" | "replace"
    span: TextSpan
    replacement: str | None = None
    note: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": self.op,
            "span": self.span.to_dict(),
            "replacement": self.replacement,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EditOp:
        return cls(
            op=data["op"],
            span=TextSpan.from_dict(data["span"]),
            replacement=data.get("replacement"),
            note=data.get("note", ""),
        )


@dataclass
class ScanReport:
    """Output of the heuristic flag engine."""

    counts: dict[str, int]
    flags: list[Flag] = field(default_factory=list)
    suggested_ops: list[EditOp] = field(default_factory=list)
    schema_version: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "counts": dict(self.counts),
            "flags": [f.to_dict() for f in self.flags],
            "suggested_ops": [o.to_dict() for o in self.suggested_ops],
        }


@dataclass
class ApplyResult:
    """Rewritten text plus the ops applied (in application order) and skipped."""

    text: str
    applied: list[EditOp] = field(default_factory=list)
    skipped: list[EditOp] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "applied": [o.to_dict() for o in self.applied],
            "skipped": [o.to_dict() for o in self.skipped],
        }
