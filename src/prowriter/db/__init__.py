"""Database models and engine for ProWriter.

Storage layout (prowriter.db):
- projects
- artifacts: one row per (project, type, name), holds the current pointer
- artifact_revisions: append-only payload history
"""

from prowriter.db.engine import (
    get_engine,
    get_session,
    init_database,
    reset_engine,
)
from prowriter.db.models import Artifact, ArtifactRevision, Base, Project

__all__ = [
    "Artifact",
    "ArtifactRevision",
    "Base",
    "Project",
    "get_engine",
    "get_session",
    "init_database",
    "reset_engine",
]
