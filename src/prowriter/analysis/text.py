"""Deterministic prose metrics: counts, readability and ratios.

All regexes use ASCII semantics for ``\\w`` and ``\\b`` so counts do not shift
with the Unicode tables of the running interpreter.
"""

from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass
from typing import Any

from prowriter.analysis.lexicons import METRIC_FILLER_PHRASES, METRIC_VAGUE_WORDS

_WORD_RE = re.compile(r"[A-Za-z0-9']+")
_SENTENCE_BREAK_RE = re.compile(r"(?<=[.!?])\s+(?=[A-Z0-9\"“‘])")
_VOWEL_RUN_RE = re.compile(r"[aeiouy]+")
_NON_LETTER_RE = re.compile(r"[^a-z]")
_QUOTED_RE = re.compile(r'"[^"]*"')
_ADVERB_RE = re.compile(r"\b\w+ly\b", re.IGNORECASE | re.ASCII)
_SIMILE_MARKER_RE = re.compile(r"\b(?:like|as if|as though)\b", re.IGNORECASE | re.ASCII)
_WAS_A_RE = re.compile(r"\bwas a\b", re.IGNORECASE | re.ASCII)


def _whole_term_re(terms: tuple[str, ...]) -> list[re.Pattern[str]]:
    return [re.compile(rf"\b{re.escape(t)}\b", re.IGNORECASE | re.ASCII) for t in terms]


_METRIC_VAGUE_RES = _whole_term_re(METRIC_VAGUE_WORDS)
_METRIC_FILLER_RES = _whole_term_re(METRIC_FILLER_PHRASES)


@dataclass(frozen=True)
class TextMetrics:
    word_count: int
    sentence_count: int
    avg_sentence_words: float
    adverb_like_count: int
    vague_word_count: int
    filler_phrase_count: int
    metaphor_marker_count: int
    dialogue_ratio: float
    readability_flesch: float | None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def tokenize_words(text: str) -> list[str]:
    """Maximal runs of ASCII letters, digits and apostrophes."""
    return _WORD_RE.findall(text)


def split_sentences(text: str) -> list[str]:
    """Split only after . ! ? followed by whitespace and a capital, digit or quote.

    Empty or blank text has no sentences; text without a break is one sentence.
    """
    normalized = text.replace("\r\n", "\n")
    parts = [p.strip() for p in _SENTENCE_BREAK_RE.split(normalized)]
    parts = [p for p in parts if p]
    if parts:
        return parts
    trimmed = text.strip()
    return [trimmed] if trimmed else []


def count_syllables(word: str) -> int:
    """Vowel-run estimate with a silent-e adjustment; 0 for words without letters."""
    letters = _NON_LETTER_RE.sub("", word.lower())
    if not letters:
        return 0
    runs = _VOWEL_RUN_RE.findall(letters)
    syllables = len(runs) if runs else 1
    if letters.endswith("e") and syllables > 1:
        syllables -= 1
    return max(1, syllables)


def flesch_reading_ease(text: str) -> float | None:
    """Flesch Reading Ease over the whole text.

    Zero word or sentence counts are treated as 1 in the denominators. Text
    with no words has no defined score.
    """
    words = tokenize_words(text)
    if not words:
        return None
    sentence_count = len(split_sentences(text)) or 1
    word_count = len(words) or 1
    syllables = sum(count_syllables(w) for w in words)
    score = 206.835 - 1.015 * (word_count / sentence_count) - 84.6 * (syllables / word_count)
    return score if math.isfinite(score) else None


def dialogue_ratio(text: str) -> float:
    """Share of characters inside double-quoted runs, clamped to [0, 1]."""
    total = len(text) or 1
    quoted = sum(len(m) for m in _QUOTED_RE.findall(text))
    return max(0.0, min(1.0, quoted / total))


def _count_terms(text: str, patterns: list[re.Pattern[str]]) -> int:
    return sum(len(p.findall(text)) for p in patterns)


def analyze(text: str) -> TextMetrics:
    """Compute the metrics bundle for ``text``. Pure and deterministic."""
    words = tokenize_words(text)
    sentences = split_sentences(text)

    word_count = len(words)
    sentence_count = len(sentences)
    avg_sentence_words = word_count / sentence_count if sentence_count else 0.0

    metaphor_markers = len(_SIMILE_MARKER_RE.findall(text)) + len(_WAS_A_RE.findall(text))

    return TextMetrics(
        word_count=word_count,
        sentence_count=sentence_count,
        avg_sentence_words=avg_sentence_words,
        adverb_like_count=len(_ADVERB_RE.findall(text)),
        vague_word_count=_count_terms(text, _METRIC_VAGUE_RES),
        filler_phrase_count=_count_terms(text, _METRIC_FILLER_RES),
        metaphor_marker_count=metaphor_markers,
        dialogue_ratio=dialogue_ratio(text),
        readability_flesch=flesch_reading_ease(text),
    )
