"""Database models for ProWriter.

- Project: a named container for artifacts
- Artifact: a named, typed document, unique per (project, type, name)
- ArtifactRevision: an immutable numbered snapshot of an artifact payload

The current revision of an artifact is ``current_revision_number``. Revisions
are never deleted and (artifact_id, revision_number) is unique, so the pointer
always names an existing revision of the same artifact.
"""

import json
from datetime import datetime
from typing import Any, ClassVar
from uuid import uuid4

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for ProWriter models."""

    type_annotation_map: ClassVar[dict[type, Any]] = {}


class Project(Base):
    """A writing project; owns artifacts."""

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    artifacts: Mapped[list["Artifact"]] = relationship(
        "Artifact", back_populates="project", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("idx_projects_name", "name"),)


class Artifact(Base):
    """A named, typed, versioned document belonging to a project."""

    __tablename__ = "artifacts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    project_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    schema_version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    current_revision_number: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    project: Mapped[Project] = relationship("Project", back_populates="artifacts")
    revisions: Mapped[list["ArtifactRevision"]] = relationship(
        "ArtifactRevision",
        back_populates="artifact",
        cascade="all, delete-orphan",
        order_by="ArtifactRevision.revision_number",
    )

    __table_args__ = (
        UniqueConstraint("project_id", "type", "name", name="uq_artifact_project_type_name"),
        CheckConstraint("schema_version >= 1", name="ck_artifact_schema_version"),
        CheckConstraint("current_revision_number >= 1", name="ck_artifact_current_revision"),
        Index("idx_artifacts_project_type", "project_id", "type"),
    )


class ArtifactRevision(Base):
    """One immutable snapshot of an artifact payload."""

    __tablename__ = "artifact_revisions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    artifact_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("artifacts.id", ondelete="CASCADE"), nullable=False
    )
    revision_number: Mapped[int] = mapped_column(Integer, nullable=False)
    payload_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    # Relationships
    artifact: Mapped[Artifact] = relationship("Artifact", back_populates="revisions")

    @property
    def payload(self) -> dict[str, Any]:
        """Get deserialized payload."""
        return json.loads(self.payload_json)  # type: ignore[no-any-return]

    @payload.setter
    def payload(self, value: dict[str, Any]) -> None:
        """Set serialized payload."""
        self.payload_json = json.dumps(value, sort_keys=True)

    __table_args__ = (
        UniqueConstraint("artifact_id", "revision_number", name="uq_revision_artifact_number"),
        CheckConstraint("revision_number >= 1", name="ck_revision_number_positive"),
        Index("idx_artifact_revisions_artifact", "artifact_id"),
    )
