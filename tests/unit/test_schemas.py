"""Tests for artifact payload schemas."""

from __future__ import annotations

import pytest

from prowriter.core.errors import ValidationError
from prowriter.schemas import (
    ArtifactType,
    parse_artifact_type,
    validate_payload,
)


class TestParseArtifactType:
    def test_known_types(self):
        assert parse_artifact_type("style_profile") is ArtifactType.STYLE_PROFILE
        assert parse_artifact_type(ArtifactType.FREEFORM_NOTE) is ArtifactType.FREEFORM_NOTE

    def test_unknown_type(self):
        with pytest.raises(ValidationError, match="Invalid artifact type 'poem'"):
            parse_artifact_type("poem")


class TestStyleProfile:
    def test_valid(self, style_profile_payload):
        stored = validate_payload("style_profile", style_profile_payload)
        assert stored["label"] == "Spare and concrete"
        assert stored["diction"] == {"register": "plain", "verb_energy": "high"}

    def test_unknown_keys_are_dropped(self, style_profile_payload):
        stored = validate_payload("style_profile", {**style_profile_payload, "mood": "grim"})
        assert "mood" not in stored

    def test_missing_label(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload("style_profile", {"schema_version": 1})
        assert any(e["loc"] == ("label",) for e in exc_info.value.errors)

    def test_label_too_long(self):
        with pytest.raises(ValidationError):
            validate_payload("style_profile", {"schema_version": 1, "label": "x" * 201})

    def test_schema_version_must_be_positive(self):
        with pytest.raises(ValidationError):
            validate_payload("style_profile", {"schema_version": 0, "label": "ok"})

    @pytest.mark.parametrize("schema_version", [True, "2", 1.5])
    def test_schema_version_must_be_a_json_integer(self, schema_version):
        with pytest.raises(ValidationError):
            validate_payload("style_profile", {"schema_version": schema_version, "label": "ok"})


class TestCharacterSheet:
    def test_valid(self, character_payload):
        stored = validate_payload("character_sheet", character_payload)
        assert stored["relationships"][0]["other_name"] == "Eli"

    def test_age_bounds(self, character_payload):
        with pytest.raises(ValidationError):
            validate_payload("character_sheet", {**character_payload, "age": 131})

    def test_age_must_be_an_integer(self, character_payload):
        with pytest.raises(ValidationError):
            validate_payload("character_sheet", {**character_payload, "age": "40"})


class TestDraftDirective:
    def test_valid(self, directive_payload):
        stored = validate_payload("draft_directive", directive_payload)
        assert stored["deliverable"] == "scene"
        assert len(stored["beats"]) == 2

    def test_length_bounds_ordered(self, directive_payload):
        bad = {**directive_payload, "target_length_min": 2000, "target_length_max": 100}
        with pytest.raises(ValidationError):
            validate_payload("draft_directive", bad)

    def test_needs_a_beat(self, directive_payload):
        with pytest.raises(ValidationError):
            validate_payload("draft_directive", {**directive_payload, "beats": []})

    def test_unknown_deliverable(self, directive_payload):
        with pytest.raises(ValidationError):
            validate_payload("draft_directive", {**directive_payload, "deliverable": "sonnet"})


class TestRevisionPlan:
    def test_rubric_required(self):
        with pytest.raises(ValidationError):
            validate_payload("revision_plan", {"schema_version": 1, "mode": "tighten", "rubric": []})

    def test_valid(self):
        stored = validate_payload(
            "revision_plan",
            {"schema_version": 1, "mode": "tighten", "rubric": ["Cut filler"]},
        )
        assert stored == {"schema_version": 1, "mode": "tighten", "rubric": ["Cut filler"]}


class TestQualityReport:
    def test_dialogue_ratio_bounds(self):
        payload = {
            "schema_version": 1,
            "metrics": {
                "word_count": 1,
                "sentence_count": 1,
                "avg_sentence_words": 1.0,
                "adverb_like_count": 0,
                "vague_word_count": 0,
                "filler_phrase_count": 0,
                "metaphor_marker_count": 0,
                "dialogue_ratio": 1.5,
            },
            "issues": [],
        }
        with pytest.raises(ValidationError):
            validate_payload("quality_report", payload)


class TestFreeformNote:
    def test_extra_keys_kept(self):
        stored = validate_payload("freeform_note", {"schema_version": 1, "body": "notes", "tags": ["a"]})
        assert stored == {"schema_version": 1, "body": "notes", "tags": ["a"]}

    def test_null_values_kept(self):
        payload = {"schema_version": 1, "x": None, "y": [None, 1]}
        assert validate_payload("freeform_note", payload) == payload

    def test_needs_schema_version(self):
        with pytest.raises(ValidationError):
            validate_payload("freeform_note", {"body": "notes"})

    def test_payload_must_be_an_object(self):
        with pytest.raises(ValidationError):
            validate_payload("freeform_note", ["not", "an", "object"])
