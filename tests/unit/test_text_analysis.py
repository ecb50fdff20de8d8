"""Tests for the deterministic text analyzer."""

from __future__ import annotations

import pytest

from prowriter.analysis.text import (
    analyze,
    count_syllables,
    dialogue_ratio,
    flesch_reading_ease,
    split_sentences,
    tokenize_words,
)


class TestTokenize:
    def test_words_and_apostrophes(self):
        assert tokenize_words("Don't stop, Mara's 3rd try!") == ["Don't", "stop", "Mara's", "3rd", "try"]

    def test_empty(self):
        assert tokenize_words("") == []
        assert tokenize_words("  --  ") == []


class TestSplitSentences:
    def test_break_requires_capital_or_digit_after(self):
        assert split_sentences("The cat sat. The dog ran!") == ["The cat sat.", "The dog ran!"]
        assert split_sentences("It was 5 p.m. and late.") == ["It was 5 p.m. and late."]

    def test_quote_opens_next_sentence(self):
        assert split_sentences('He left. "Wait," she said.') == ["He left.", '"Wait," she said.']

    def test_no_terminal_punctuation_is_one_sentence(self):
        assert split_sentences("just a fragment") == ["just a fragment"]

    def test_blank_text_has_no_sentences(self):
        assert split_sentences("") == []
        assert split_sentences("   \n  ") == []


class TestSyllables:
    @pytest.mark.parametrize(
        "word,expected",
        [
            ("cat", 1),
            ("the", 1),
            ("make", 1),
            ("beautiful", 3),
            ("rhythm", 1),
            ("Window", 2),
        ],
    )
    def test_estimates(self, word, expected):
        assert count_syllables(word) == expected

    def test_digits_have_no_syllables(self):
        assert count_syllables("123") == 0


class TestReadability:
    def test_simple_sentence(self):
        # 3 words, 1 sentence, 3 syllables
        assert flesch_reading_ease("The cat sat.") == pytest.approx(206.835 - 1.015 * 3 - 84.6)

    def test_undefined_without_words(self):
        assert flesch_reading_ease("") is None
        assert flesch_reading_ease("?!") is None
        assert flesch_reading_ease("...") is None


class TestDialogueRatio:
    def test_quoted_share(self):
        text = '"Hi," she said.'
        assert dialogue_ratio(text) == pytest.approx(5 / len(text))

    def test_unclosed_quote_does_not_count(self):
        assert dialogue_ratio('She said "never') == 0.0

    def test_all_dialogue_is_clamped(self):
        assert dialogue_ratio('"Go."') == 1.0


class TestAnalyze:
    def test_empty_text(self):
        metrics = analyze("")
        assert metrics.word_count == 0
        assert metrics.sentence_count == 0
        assert metrics.avg_sentence_words == 0.0
        assert metrics.adverb_like_count == 0
        assert metrics.vague_word_count == 0
        assert metrics.filler_phrase_count == 0
        assert metrics.metaphor_marker_count == 0
        assert metrics.dialogue_ratio == 0.0
        assert metrics.readability_flesch is None

    def test_counts(self):
        metrics = analyze("The cat sat. The dog ran!")
        assert metrics.word_count == 6
        assert metrics.sentence_count == 2
        assert metrics.avg_sentence_words == 3.0

    def test_repeated_vague_word(self):
        assert analyze("It was very, very strange.").vague_word_count >= 2

    def test_vague_words_match_whole_words_only(self):
        assert analyze("The stuffing was stuffy and kind offered nothing.").vague_word_count == 0

    def test_filler_phrases(self):
        metrics = analyze("For a moment, her heart pounded.")
        assert metrics.filler_phrase_count == 2

    def test_adverbs(self):
        assert analyze("She quickly and quietly left.").adverb_like_count == 2

    def test_metaphor_markers(self):
        text = "He ran like a deer. It was as if time stopped. It was a trap."
        assert analyze(text).metaphor_marker_count == 3

    def test_to_dict_has_every_metric(self):
        data = analyze("Short text.").to_dict()
        assert set(data) == {
            "word_count",
            "sentence_count",
            "avg_sentence_words",
            "adverb_like_count",
            "vague_word_count",
            "filler_phrase_count",
            "metaphor_marker_count",
            "dialogue_ratio",
            "readability_flesch",
        }

    def test_deterministic(self):
        text = "The rain fell. Somehow, it was kind of beautiful."
        assert analyze(text) == analyze(text)
