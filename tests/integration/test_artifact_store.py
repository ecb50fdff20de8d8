"""Integration tests for the versioned artifact store."""

from __future__ import annotations

import pytest
from sqlalchemy import select

from prowriter.core.errors import NotFoundError, ValidationError
from prowriter.db.engine import get_session
from prowriter.db.models import Artifact, ArtifactRevision
from prowriter.services.artifacts import (
    get_artifact_latest,
    get_artifact_revision,
    list_artifact_revisions,
    list_artifacts,
    require_artifact_latest,
    require_artifact_revision,
    upsert_artifact,
)

pytestmark = pytest.mark.integration


def _note(body: str, schema_version: int = 1) -> dict:
    return {"schema_version": schema_version, "body": body}


class TestUpsert:
    def test_first_write_is_revision_one(self, initialized_db, project_id, style_profile_payload):
        with get_session(initialized_db) as session:
            result = upsert_artifact(session, project_id, "style_profile", "spare", 1, style_profile_payload)

        assert result["revision"] == 1
        assert result["type"] == "style_profile"
        assert result["name"] == "spare"
        assert result["schema_version"] == 1
        assert result["artifact_id"]

    def test_revisions_are_monotonic(self, initialized_db, project_id):
        results = []
        for i in range(4):
            with get_session(initialized_db) as session:
                results.append(upsert_artifact(session, project_id, "freeform_note", "log", 1, _note(f"entry {i}")))

        assert [r["revision"] for r in results] == [1, 2, 3, 4]
        assert len({r["artifact_id"] for r in results}) == 1

        with get_session(initialized_db) as session:
            history = list_artifact_revisions(session, project_id, "freeform_note", "log")
        assert [h["revision"] for h in history] == [1, 2, 3, 4]

    def test_pointer_moves_to_newest(self, initialized_db, project_id):
        with get_session(initialized_db) as session:
            upsert_artifact(session, project_id, "freeform_note", "n", 1, _note("old"))
            upsert_artifact(session, project_id, "freeform_note", "n", 2, _note("new", 2))

        with get_session(initialized_db) as session:
            latest = get_artifact_latest(session, project_id, "freeform_note", "n")
        assert latest["revision"] == 2
        assert latest["schema_version"] == 2
        assert latest["payload"]["body"] == "new"

    def test_old_revisions_are_unchanged(self, initialized_db, project_id):
        with get_session(initialized_db) as session:
            upsert_artifact(session, project_id, "freeform_note", "n", 1, _note("first"))
        with get_session(initialized_db) as session:
            before = get_artifact_revision(session, project_id, "freeform_note", "n", 1)

        with get_session(initialized_db) as session:
            upsert_artifact(session, project_id, "freeform_note", "n", 1, _note("second"))
        with get_session(initialized_db) as session:
            after = get_artifact_revision(session, project_id, "freeform_note", "n", 1)

        assert before == after
        assert after["payload"] == {"schema_version": 1, "body": "first"}

    def test_same_name_different_type_is_separate(self, initialized_db, project_id, character_payload):
        with get_session(initialized_db) as session:
            a = upsert_artifact(session, project_id, "freeform_note", "mara", 1, _note("x"))
            b = upsert_artifact(session, project_id, "character_sheet", "mara", 1, character_payload)
        assert a["artifact_id"] != b["artifact_id"]
        assert a["revision"] == b["revision"] == 1

    def test_invalid_payload_writes_nothing(self, initialized_db, project_id):
        with pytest.raises(ValidationError):
            with get_session(initialized_db) as session:
                upsert_artifact(session, project_id, "style_profile", "bad", 1, {"schema_version": 1})

        with get_session(initialized_db) as session:
            assert session.scalars(select(Artifact)).all() == []
            assert session.scalars(select(ArtifactRevision)).all() == []

    def test_failed_append_keeps_pointer(self, initialized_db, project_id, style_profile_payload):
        with get_session(initialized_db) as session:
            upsert_artifact(session, project_id, "style_profile", "spare", 1, style_profile_payload)

        with pytest.raises(ValidationError):
            with get_session(initialized_db) as session:
                upsert_artifact(session, project_id, "style_profile", "spare", 1, {"label": "no version"})

        with get_session(initialized_db) as session:
            latest = get_artifact_latest(session, project_id, "style_profile", "spare")
            history = list_artifact_revisions(session, project_id, "style_profile", "spare")
        assert latest["revision"] == 1
        assert [h["revision"] for h in history] == [1]

    @pytest.mark.parametrize(
        "name,schema_version",
        [("", 1), ("x" * 201, 1), ("ok", 0), ("ok", True), ("ok", "2")],
    )
    def test_rejects_bad_name_or_version(self, initialized_db, project_id, name, schema_version):
        with get_session(initialized_db) as session:
            with pytest.raises(ValidationError):
                upsert_artifact(session, project_id, "freeform_note", name, schema_version, _note("x"))

    def test_unknown_type(self, initialized_db, project_id):
        with get_session(initialized_db) as session:
            with pytest.raises(ValidationError):
                upsert_artifact(session, project_id, "poem", "x", 1, _note("x"))

    def test_unknown_project(self, initialized_db):
        with get_session(initialized_db) as session:
            with pytest.raises(NotFoundError):
                upsert_artifact(session, "no-such-project", "freeform_note", "x", 1, _note("x"))

    def test_stored_payload_is_normalised(self, initialized_db, project_id, style_profile_payload):
        with get_session(initialized_db) as session:
            upsert_artifact(
                session, project_id, "style_profile", "spare", 1, {**style_profile_payload, "mood": "grim"}
            )
            latest = get_artifact_latest(session, project_id, "style_profile", "spare")
        assert "mood" not in latest["payload"]
        assert latest["payload"]["diction"]["register"] == "plain"


class TestReads:
    def test_missing_artifact(self, initialized_db, project_id):
        with get_session(initialized_db) as session:
            assert get_artifact_latest(session, project_id, "freeform_note", "nope") is None
            assert get_artifact_revision(session, project_id, "freeform_note", "nope", 1) is None
            assert list_artifact_revisions(session, project_id, "freeform_note", "nope") is None
            with pytest.raises(NotFoundError):
                require_artifact_latest(session, project_id, "freeform_note", "nope")

    def test_missing_revision(self, initialized_db, project_id):
        with get_session(initialized_db) as session:
            upsert_artifact(session, project_id, "freeform_note", "n", 1, _note("x"))
            assert get_artifact_revision(session, project_id, "freeform_note", "n", 2) is None
            with pytest.raises(NotFoundError):
                require_artifact_revision(session, project_id, "freeform_note", "n", 2)

    def test_revision_must_be_positive(self, initialized_db, project_id):
        with get_session(initialized_db) as session:
            with pytest.raises(ValidationError):
                get_artifact_revision(session, project_id, "freeform_note", "n", 0)

    def test_reads_require_project(self, initialized_db):
        with get_session(initialized_db) as session:
            with pytest.raises(NotFoundError):
                list_artifacts(session, "no-such-project")
            with pytest.raises(NotFoundError):
                get_artifact_latest(session, "no-such-project", "freeform_note", "n")

    def test_list_ordered_by_type_then_name(self, initialized_db, project_id, character_payload):
        with get_session(initialized_db) as session:
            upsert_artifact(session, project_id, "freeform_note", "b", 1, _note("x"))
            upsert_artifact(session, project_id, "freeform_note", "a", 1, _note("x"))
            upsert_artifact(session, project_id, "character_sheet", "z", 1, character_payload)
            upsert_artifact(session, project_id, "freeform_note", "a", 1, _note("y"))

        with get_session(initialized_db) as session:
            items = list_artifacts(session, project_id)
            notes = list_artifacts(session, project_id, "freeform_note")

        assert [(i["type"], i["name"]) for i in items] == [
            ("character_sheet", "z"),
            ("freeform_note", "a"),
            ("freeform_note", "b"),
        ]
        assert [i["revision"] for i in items] == [1, 2, 1]
        assert [i["name"] for i in notes] == ["a", "b"]
        assert all(i["created_at"] and i["updated_at"] for i in items)

    def test_projects_are_isolated(self, initialized_db, project_id):
        from prowriter.services.projects import create_project

        with get_session(initialized_db) as session:
            other = create_project(session, "other").id
            upsert_artifact(session, project_id, "freeform_note", "n", 1, _note("mine"))

        with get_session(initialized_db) as session:
            assert list_artifacts(session, other) == []
            assert get_artifact_latest(session, other, "freeform_note", "n") is None
