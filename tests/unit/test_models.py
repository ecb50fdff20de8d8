"""Tests for analyzer data types and the revision payload column."""

from __future__ import annotations

from prowriter.analysis.models import EditOp, TextSpan
from prowriter.db.models import ArtifactRevision


class TestTextSpan:
    def test_of_clamps_snippet(self):
        span = TextSpan.of("hello", 3, 10)
        assert span == TextSpan(3, 10, "lo")

    def test_overlaps_is_half_open(self):
        assert TextSpan(0, 5).overlaps(TextSpan(4, 6))
        assert not TextSpan(0, 5).overlaps(TextSpan(5, 6))
        # An insertion point strictly inside another span still collides with it
        assert TextSpan(3, 3).overlaps(TextSpan(0, 5))
        assert not TextSpan(5, 5).overlaps(TextSpan(0, 5))

    def test_dict_round_trip(self):
        span = TextSpan(1, 4, "ell")
        assert TextSpan.from_dict(span.to_dict()) == span


class TestEditOp:
    def test_from_dict_defaults(self):
        op = EditOp.from_dict({"op": "delete", "span": {"start": 0, "end": 2}})
        assert op == EditOp("delete", TextSpan(0, 2, ""), None, "")

    def test_to_dict(self):
        op = EditOp("replace", TextSpan(2, 7, "groan"), "sound", "note")
        assert op.to_dict() == {
            "op": "replace",
            "span": {"start": 2, "end": 7, "snippet": "groan"},
            "replacement": "sound",
            "note": "note",
        }


class TestArtifactRevisionPayload:
    def test_payload_serialized_with_sorted_keys(self):
        revision = ArtifactRevision(artifact_id="a", revision_number=1)
        revision.payload = {"b": 1, "a": {"d": 2, "c": 3}}
        assert revision.payload_json == '{"a": {"c": 3, "d": 2}, "b": 1}'
        assert revision.payload == {"a": {"c": 3, "d": 2}, "b": 1}
