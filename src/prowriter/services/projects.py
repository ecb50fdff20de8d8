"""Project operations and default-project seeding."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from prowriter.core.errors import ConflictError, NotFoundError
from prowriter.db.models import Artifact, Project
from prowriter.schemas import ArtifactType, ProjectCreate, parse_model

if TYPE_CHECKING:
    from prowriter.config import Settings

logger = logging.getLogger(__name__)

# Seeded once per project so every project starts with a usable profile.
DEFAULT_STYLE_PROFILE: dict[str, Any] = {
    "schema_version": 1,
    "label": "ProWriter Default (clear, grounded, purposeful)",
    "influences": [],
    "rhythm": {
        "sentence_length_bias": (
            "Prefer short/medium sentences. Use a longer sentence only when it increases "
            "tension or delivers a deliberate thought-turn."
        ),
        "punctuation_habits": (
            "Clean punctuation. Avoid em-dash chains, rhetorical fragments, and breathless "
            "cadence unless the POV voice demands it."
        ),
        "paragraphing": (
            "Paragraphs are action units. Break on a turn: decision, reveal, escalation, or "
            "consequence. No static paragraphs."
        ),
    },
    "diction": {
        "register": (
            "Plainspoken, precise, concrete. Use simple language whenever possible. Avoid "
            "inflated literary phrasing."
        ),
        "concreteness_bias": (
            "Write what can be seen, heard, touched, done, decided. Replace abstract labels "
            "with observable behavior and specific objects."
        ),
        "verb_energy": (
            "Active voice by default. Strong verbs over adverbs. Make motion, intent, and "
            "cause-and-effect obvious."
        ),
        "adjective_policy": (
            "Minimal modifiers. Use one precise adjective only when it changes meaning. If "
            "it's decorative, cut it."
        ),
    },
    "imagery_and_metaphor": {
        "purpose": (
            "Metaphor is allowed only if it clarifies emotion, power dynamics, or sensory "
            "reality. Never decorative."
        ),
        "when_used": (
            "Use metaphor only at turning points (realization, escalation, reversal) and keep "
            "it brief and grounded."
        ),
        "how_used": (
            "Concrete, physical, anchored to the POV character's lived world. No cosmic "
            "abstraction. If it can't be stated literally, it doesn't belong."
        ),
        "metaphor_budget": (
            "Default 0 metaphors per paragraph. If used, max 1, and it must earn its place by "
            "increasing clarity or tension."
        ),
        "disallowed": [
            "cliché metaphors",
            "cosmic/generalized abstraction (universe, abyss, eternity, void, darkness-as-mood)",
            "dreamlike/fog/shattered/whispered-into-the-night phrasing",
            "metaphor that does not translate cleanly into literal meaning",
        ],
    },
    "constraints": {
        "must_avoid": [
            "clichés",
            "throat-clearing and filler",
            "generic emotion labels without behavior",
            "passive voice unless the agent is unknown/hidden on purpose",
            "abstract commentary that does not affect action or choice",
            "symmetrical AI cadence and over-balanced sentences",
            "decorative metaphor",
        ],
        "must_include": [
            "show-dont-tell via behavior + concrete detail + consequence",
            "active verbs and clear agents",
            "every sentence does work (action, tension, character, necessary info, or change)",
            "cause-and-effect clarity",
            "only relevant detail (no neutral description)",
        ],
        "rating_boundaries": (
            "Follow user boundaries. Default: grounded adult themes allowed; avoid explicit "
            "sexual content unless the user explicitly requests it."
        ),
    },
}


def _project_view(project: Project) -> dict[str, Any]:
    def iso(value: datetime | None) -> str | None:
        return value.isoformat() if value is not None else None

    return {
        "project_id": project.id,
        "name": project.name,
        "created_at": iso(project.created_at),
        "updated_at": iso(project.updated_at),
    }


def create_project(session: Session, name: str | None = None) -> Project:
    """Create a new project.

    Args:
        session: Database session.
        name: Optional label (1-200 characters).

    Returns:
        Created Project.

    Raises:
        ValidationError: name is empty or longer than 200 characters.
    """
    request = parse_model(ProjectCreate, {"name": name}, "project")

    project = Project(id=str(uuid4()), name=request.name)
    session.add(project)
    session.flush()
    logger.info("Created project %s (%s)", project.id, name or "unnamed")
    return project


def get_project(session: Session, project_id: str) -> Project | None:
    """Get a project by ID, or None."""
    return session.get(Project, project_id)


def require_project(session: Session, project_id: str) -> Project:
    """Get a project by ID.

    Raises:
        NotFoundError: no such project.
    """
    project = get_project(session, project_id)
    if project is None:
        raise NotFoundError(f"Project {project_id} not found")
    return project


def list_projects(session: Session) -> list[dict[str, Any]]:
    """List projects, most recently updated first."""
    stmt = select(Project).order_by(Project.updated_at.desc(), Project.id)
    return [_project_view(p) for p in session.scalars(stmt)]


def ensure_default_style_profile(session: Session, project_id: str, name: str) -> bool:
    """Seed the default style profile into a project if it is missing.

    Idempotent: the insert runs in a SAVEPOINT and a conflicting concurrent
    insert is tolerated, leaving whichever writer got there first.

    Returns:
        True if this call wrote the profile.
    """
    from prowriter.services.artifacts import upsert_artifact

    stmt = select(Artifact.id).where(
        Artifact.project_id == project_id,
        Artifact.type == ArtifactType.STYLE_PROFILE.value,
        Artifact.name == name,
    )
    if session.scalar(stmt) is not None:
        return False

    try:
        with session.begin_nested():
            upsert_artifact(
                session,
                project_id,
                ArtifactType.STYLE_PROFILE,
                name,
                DEFAULT_STYLE_PROFILE["schema_version"],
                DEFAULT_STYLE_PROFILE,
            )
    except ConflictError:
        logger.warning("Default style profile %s already seeded concurrently", name)
        return False
    return True


def get_or_create_default_project(session: Session, settings: "Settings | None" = None) -> str:
    """Return the default project's ID, creating and seeding it on first use."""
    if settings is None:
        from prowriter.config import get_settings

        settings = get_settings()

    stmt = (
        select(Project)
        .where(Project.name == settings.default_project_name)
        .order_by(Project.created_at, Project.id)
        .limit(1)
    )
    project = session.scalar(stmt)
    if project is None:
        project = create_project(session, settings.default_project_name)

    ensure_default_style_profile(session, project.id, settings.default_style_profile_name)
    return project.id


def canon_digest(session: Session, project_id: str) -> dict[str, Any]:
    """Summarize the names of the canon artifacts in a project."""
    from prowriter.services.artifacts import list_artifacts

    artifacts = list_artifacts(session, project_id)

    def names(artifact_type: ArtifactType) -> list[str]:
        return [a["name"] for a in artifacts if a["type"] == artifact_type.value]

    return {
        "project_id": project_id,
        "style_profiles": names(ArtifactType.STYLE_PROFILE),
        "characters": names(ArtifactType.CHARACTER_SHEET),
        "draft_directives": names(ArtifactType.DRAFT_DIRECTIVE),
    }
