"""Heuristic flag engine for machine-sounding prose.

``DETECTORS`` is a fixed, ordered tuple. Each entry is a ``Detector`` tagged
with a matching ``Strategy`` and an ``OpPolicy``; ``scan`` walks them in order
so a given text always yields the same flags and ops.

Only meaning-preserving edits are ever proposed: deleting clichés and filler
words, and swapping a personified sound word for a neutral one. Vague
language, abstract similes and rhetorical frames are flagged only.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from prowriter.analysis.lexicons import (
    ABSTRACT_SIMILE_TARGETS,
    BANNED_PHRASES,
    FILLER_WORDS,
    MORALIZING_VERBS,
    PERSONIFICATION_VERBS,
    SOUND_ADJECTIVES,
    SOUND_NOUNS,
    VAGUE_WORDS,
)
from prowriter.analysis.models import FLAG_KINDS, EditOp, Flag, ScanReport, TextSpan


class Strategy(Enum):
    """How a detector turns its patterns into matches."""

    REGEX = "regex"  # patterns are regex sources; optional (?P<target>...) group
    WORDS = "words"  # patterns are terms matched as whole words
    PHRASES = "phrases"  # patterns are literal substrings


class OpPolicy(Enum):
    NONE = "none"
    DELETE = "delete"  # delete the whole match
    REPLACE_TARGET = "replace_target"  # replace the target group with a fixed word


class Hit(NamedTuple):
    span: TextSpan
    target: TextSpan


@functools.lru_cache(maxsize=None)
def _compile(source: str) -> re.Pattern[str]:
    return re.compile(source, re.IGNORECASE | re.ASCII)


def _alternation(terms: tuple[str, ...]) -> str:
    return "|".join(re.escape(t).replace(r"\ ", r"\s+") for t in terms)


def _match_form(word: str, base: str) -> str:
    """Carry plural -s and capitalisation of ``word`` over to ``base``."""
    out = base
    if word.lower().endswith("s") and not base.endswith("s"):
        out += "s"
    if len(word) > 1 and word.isupper():
        return out.upper()
    if word[:1].isupper():
        return out[:1].upper() + out[1:]
    return out


@dataclass(frozen=True)
class Detector:
    name: str
    kind: str
    severity: str
    message: str
    strategy: Strategy
    patterns: tuple[str, ...]
    max_spans: int = 50
    op_policy: OpPolicy = OpPolicy.NONE
    max_ops: int = 0
    replacement: str | None = None
    note: str = ""

    def _regexes(self) -> list[re.Pattern[str]]:
        if self.strategy is Strategy.REGEX:
            return [_compile(p) for p in self.patterns]
        if self.strategy is Strategy.WORDS:
            return [_compile(rf"\b{_alternation((p,))}\b") for p in self.patterns]
        return [_compile(re.escape(p)) for p in self.patterns]

    def find(self, text: str) -> list[Hit]:
        """All matches in position order, capped at ``max_spans``."""
        seen: dict[tuple[int, int], Hit] = {}
        for regex in self._regexes():
            has_target = "target" in regex.groupindex
            for m in regex.finditer(text):
                start, end = m.span()
                if start == end or (start, end) in seen:
                    continue
                t_start, t_end = m.span("target") if has_target else (start, end)
                seen[(start, end)] = Hit(
                    TextSpan.of(text, start, end),
                    TextSpan.of(text, t_start, t_end),
                )
        return [seen[key] for key in sorted(seen)][: self.max_spans]

    def propose(self, hits: list[Hit]) -> list[EditOp]:
        """Edit ops for the first ``max_ops`` hits, per the op policy."""
        if self.op_policy is OpPolicy.NONE:
            return []
        ops: list[EditOp] = []
        for hit in hits[: self.max_ops]:
            if self.op_policy is OpPolicy.DELETE:
                ops.append(EditOp("delete", hit.span, None, self.note))
            else:
                replacement = _match_form(hit.target.snippet, self.replacement or "")
                ops.append(EditOp("replace", hit.target, replacement, self.note))
        return ops


_NEGATED_BE_DO = r"(?:did|does|do|was|is|were|are)(?:n['’]t|\s+not)"
_PRONOUN = r"(?:it|they|he|she|this|that|we|you|i)"

DETECTORS: tuple[Detector, ...] = (
    Detector(
        name="rhetorical_flourish",
        kind="rhetorical_frame",
        severity="info",
        message=(
            "Rhetorical framing detected (\"didn't just ... it ...\", \"you could ...\"). "
            "Prefer direct statements without the intensifying frame."
        ),
        strategy=Strategy.REGEX,
        patterns=(
            rf"\b{_NEGATED_BE_DO}\s+just\s+[^.!?;:\n]{{1,80}}?\s*(?:—|–|--|,|;)\s*{_PRONOUN}\s+[a-z']+",
            r"\byou\s+could\s+(?:taste|feel|hear|see|smell)\s+it\b\s*:?",
        ),
    ),
    Detector(
        name="personification",
        kind="personification",
        severity="warn",
        message=(
            "Personification detected. Replace with literal physical behavior (what actually "
            "happens) rather than giving objects human intent."
        ),
        strategy=Strategy.REGEX,
        patterns=(
            rf"\b(?:the|a|an)\s+(?:[a-z][\w-]*\s+){{1,3}}?(?:{_alternation(PERSONIFICATION_VERBS)})\b",
        ),
    ),
    Detector(
        name="anthropomorphic_sound",
        kind="personification",
        severity="warn",
        message=(
            "Sound described with human feeling. Name the literal sound or its physical cause."
        ),
        strategy=Strategy.REGEX,
        patterns=(
            rf"\b(?:{_alternation(SOUND_ADJECTIVES)})\s+(?P<target>{_alternation(SOUND_NOUNS)})\b",
            rf"\b(?:the|a|an)\s+(?P<target>{_alternation(SOUND_NOUNS)})\s+of\b",
        ),
        op_policy=OpPolicy.REPLACE_TARGET,
        max_ops=20,
        replacement="sound",
        note="Replace personified sound with neutral noun",
    ),
    Detector(
        name="whisper_of",
        kind="personification",
        severity="warn",
        message="\"Whisper of ...\" idiom detected. State the quantity or trace literally.",
        strategy=Strategy.REGEX,
        patterns=(r"\b(?P<target>whispers?)\s+of\s+(?:(?:the|a|an)\s+)?[a-z][\w-]*",),
        op_policy=OpPolicy.REPLACE_TARGET,
        max_ops=20,
        replacement="trace",
        note="Replace 'whisper' with 'trace'",
    ),
    Detector(
        name="vague_language",
        kind="vague_language",
        severity="warn",
        message=(
            "Vague language detected. Replace with specific nouns/verbs or remove the word "
            "entirely if it adds no meaning."
        ),
        strategy=Strategy.WORDS,
        patterns=VAGUE_WORDS,
        max_spans=80,
    ),
    Detector(
        name="abstract_simile",
        kind="abstract_simile",
        severity="warn",
        message=(
            "Abstract simile detected. Replace with a concrete comparison anchored to the POV "
            "character's world (physical, practical, specific)."
        ),
        strategy=Strategy.REGEX,
        patterns=(rf"\blike\s+(?:{_alternation(ABSTRACT_SIMILE_TARGETS)})\b",),
    ),
    Detector(
        name="moralizing_tagline",
        kind="rhetorical_frame",
        severity="info",
        message="Moralizing tagline detected. Let the consequence land without the verdict.",
        strategy=Strategy.REGEX,
        patterns=(rf"\benough\s+to\s+(?:{_alternation(MORALIZING_VERBS)})\s+you\b",),
    ),
    Detector(
        name="cliche",
        kind="cliche",
        severity="error",
        message="Cliché phrase detected. Remove or replace with specific, original detail.",
        strategy=Strategy.PHRASES,
        patterns=BANNED_PHRASES,
        op_policy=OpPolicy.DELETE,
        max_ops=20,
        note="Remove cliché phrase",
    ),
    Detector(
        name="filler",
        kind="filler",
        severity="info",
        message="Filler detected. Remove unless it changes literal meaning.",
        strategy=Strategy.WORDS,
        patterns=FILLER_WORDS,
        max_spans=80,
        op_policy=OpPolicy.DELETE,
        max_ops=40,
        note="Remove filler word",
    ),
)


def scan(text: str) -> ScanReport:
    """Run every detector over ``text`` in order.

    Returns:
        ScanReport with per-kind span counts, one flag per detector that
        matched, and the conservative edit ops those detectors propose.
    """
    counts = {kind: 0 for kind in FLAG_KINDS}
    flags: list[Flag] = []
    suggested_ops: list[EditOp] = []

    for detector in DETECTORS:
        hits = detector.find(text)
        if not hits:
            continue
        spans = [h.span for h in hits]
        counts[detector.kind] += len(spans)
        flags.append(Flag(detector.kind, detector.severity, detector.message, spans))
        suggested_ops.extend(detector.propose(hits))

    return ScanReport(counts=counts, flags=flags, suggested_ops=suggested_ops)
