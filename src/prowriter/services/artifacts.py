"""Artifact store operations: versioned upsert and revision reads.

Every function runs inside the caller's session. ``get_session()`` wraps the
block in one transaction, so an upsert either writes its revision and moves
the pointer or leaves nothing behind.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any
from uuid import uuid4

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from prowriter.core.errors import ConflictError, NotFoundError, ValidationError
from prowriter.db.models import Artifact, ArtifactRevision
from prowriter.schemas import (
    ArtifactType,
    ArtifactUpsert,
    parse_artifact_type,
    parse_model,
    validate_payload,
)
from prowriter.services.projects import require_project

logger = logging.getLogger(__name__)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _find_artifact(
    session: Session,
    project_id: str,
    artifact_type: ArtifactType,
    name: str,
) -> Artifact | None:
    stmt = select(Artifact).where(
        Artifact.project_id == project_id,
        Artifact.type == artifact_type.value,
        Artifact.name == name,
    )
    return session.scalar(stmt)


def _find_revision(session: Session, artifact_id: str, revision_number: int) -> ArtifactRevision | None:
    stmt = select(ArtifactRevision).where(
        ArtifactRevision.artifact_id == artifact_id,
        ArtifactRevision.revision_number == revision_number,
    )
    return session.scalar(stmt)


def _max_revision_number(session: Session, artifact_id: str) -> int:
    stmt = select(func.max(ArtifactRevision.revision_number)).where(
        ArtifactRevision.artifact_id == artifact_id
    )
    return session.scalar(stmt) or 0


def _revision_view(artifact: Artifact, revision: ArtifactRevision) -> dict[str, Any]:
    return {
        "artifact_id": artifact.id,
        "type": artifact.type,
        "name": artifact.name,
        "schema_version": artifact.schema_version,
        "revision": revision.revision_number,
        "payload": revision.payload,
    }


def upsert_artifact(
    session: Session,
    project_id: str,
    artifact_type: str | ArtifactType,
    name: str,
    schema_version: int,
    payload: Any,
) -> dict[str, Any]:
    """Create an artifact or append a revision to it.

    The first write creates the artifact with revision 1. Later writes add
    revision ``max + 1``, move the current pointer to it and record the new
    schema version.

    Args:
        session: Database session (one transaction).
        project_id: Owning project.
        artifact_type: One of the ArtifactType values.
        name: Artifact name, unique per type within the project.
        schema_version: Payload shape version, >= 1.
        payload: Raw payload; validated against the type's schema.

    Returns:
        {artifact_id, type, name, schema_version, revision}

    Raises:
        NotFoundError: the project does not exist.
        ValidationError: bad type, name, schema version or payload.
        ConflictError: a concurrent writer won a unique-constraint race.
    """
    artifact_type = parse_artifact_type(artifact_type)
    if not name or len(name) > 200:
        raise ValidationError("Artifact name must be 1-200 characters")
    request = parse_model(
        ArtifactUpsert,
        {"schema_version": schema_version, "payload": payload},
        "artifact upsert",
    )

    require_project(session, project_id)
    validated = validate_payload(artifact_type, request.payload)

    try:
        artifact = _find_artifact(session, project_id, artifact_type, name)
        if artifact is None:
            artifact = Artifact(
                id=str(uuid4()),
                project_id=project_id,
                type=artifact_type.value,
                name=name,
                schema_version=request.schema_version,
                current_revision_number=1,
            )
            session.add(artifact)
            session.flush()
            next_revision = 1
        else:
            next_revision = _max_revision_number(session, artifact.id) + 1

        revision = ArtifactRevision(
            id=str(uuid4()),
            artifact_id=artifact.id,
            revision_number=next_revision,
        )
        revision.payload = validated
        session.add(revision)

        artifact.schema_version = request.schema_version
        artifact.current_revision_number = next_revision
        session.flush()
    except IntegrityError as e:
        logger.warning(
            "Concurrent write to %s/%s in project %s", artifact_type.value, name, project_id
        )
        raise ConflictError(
            f"Concurrent write to {artifact_type.value}/{name}; retry the upsert"
        ) from e

    logger.info(
        "Wrote %s/%s revision %d (project %s)",
        artifact_type.value,
        name,
        next_revision,
        project_id,
    )
    return {
        "artifact_id": artifact.id,
        "type": artifact.type,
        "name": artifact.name,
        "schema_version": artifact.schema_version,
        "revision": next_revision,
    }


def get_artifact_latest(
    session: Session,
    project_id: str,
    artifact_type: str | ArtifactType,
    name: str,
) -> dict[str, Any] | None:
    """Get the current revision of an artifact.

    Returns:
        {artifact_id, type, name, schema_version, revision, payload} or None.
    """
    artifact_type = parse_artifact_type(artifact_type)
    require_project(session, project_id)

    artifact = _find_artifact(session, project_id, artifact_type, name)
    if artifact is None:
        return None

    revision = _find_revision(session, artifact.id, artifact.current_revision_number)
    if revision is None:
        return None
    return _revision_view(artifact, revision)


def list_artifacts(
    session: Session,
    project_id: str,
    artifact_type: str | ArtifactType | None = None,
) -> list[dict[str, Any]]:
    """List a project's artifacts ordered by (type, name)."""
    require_project(session, project_id)

    stmt = select(Artifact).where(Artifact.project_id == project_id)
    if artifact_type is not None:
        stmt = stmt.where(Artifact.type == parse_artifact_type(artifact_type).value)
    stmt = stmt.order_by(Artifact.type, Artifact.name)

    return [
        {
            "artifact_id": a.id,
            "type": a.type,
            "name": a.name,
            "schema_version": a.schema_version,
            "revision": a.current_revision_number,
            "created_at": _iso(a.created_at),
            "updated_at": _iso(a.updated_at),
        }
        for a in session.scalars(stmt)
    ]


def list_artifact_revisions(
    session: Session,
    project_id: str,
    artifact_type: str | ArtifactType,
    name: str,
) -> list[dict[str, Any]] | None:
    """List revision numbers and timestamps, ascending.

    Returns:
        [{revision, created_at}, ...] or None if the artifact does not exist.
    """
    artifact_type = parse_artifact_type(artifact_type)
    require_project(session, project_id)

    artifact = _find_artifact(session, project_id, artifact_type, name)
    if artifact is None:
        return None

    stmt = (
        select(ArtifactRevision)
        .where(ArtifactRevision.artifact_id == artifact.id)
        .order_by(ArtifactRevision.revision_number)
    )
    return [
        {"revision": r.revision_number, "created_at": _iso(r.created_at)}
        for r in session.scalars(stmt)
    ]


def get_artifact_revision(
    session: Session,
    project_id: str,
    artifact_type: str | ArtifactType,
    name: str,
    revision: int,
) -> dict[str, Any] | None:
    """Get one specific revision of an artifact, or None."""
    artifact_type = parse_artifact_type(artifact_type)
    if isinstance(revision, bool) or not isinstance(revision, int) or revision < 1:
        raise ValidationError("revision must be a positive integer")
    require_project(session, project_id)

    artifact = _find_artifact(session, project_id, artifact_type, name)
    if artifact is None:
        return None

    rev = _find_revision(session, artifact.id, revision)
    if rev is None:
        return None
    return _revision_view(artifact, rev)


def require_artifact_latest(
    session: Session,
    project_id: str,
    artifact_type: str | ArtifactType,
    name: str,
) -> dict[str, Any]:
    """Like get_artifact_latest, but raise NotFoundError when missing."""
    found = get_artifact_latest(session, project_id, artifact_type, name)
    if found is None:
        raise NotFoundError(f"Artifact {parse_artifact_type(artifact_type).value}/{name} not found")
    return found


def require_artifact_revision(
    session: Session,
    project_id: str,
    artifact_type: str | ArtifactType,
    name: str,
    revision: int,
) -> dict[str, Any]:
    """Like get_artifact_revision, but raise NotFoundError when missing."""
    found = get_artifact_revision(session, project_id, artifact_type, name, revision)
    if found is None:
        raise NotFoundError(
            f"Revision {revision} of {parse_artifact_type(artifact_type).value}/{name} not found"
        )
    return found
