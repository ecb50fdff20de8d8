"""Pytest fixtures for ProWriter tests."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from prowriter.config import Settings


@pytest.fixture
def test_storage_dir(tmp_path: Path) -> Path:
    """Create a temporary storage directory."""
    storage = tmp_path / ".prowriter"
    storage.mkdir(parents=True)
    return storage


@pytest.fixture
def test_settings(test_storage_dir: Path) -> "Settings":
    """Create test settings with temporary storage."""
    from prowriter.config import Settings, reset_settings

    reset_settings()
    return Settings(storage_dir=test_storage_dir, busy_timeout=10.0)


@pytest.fixture
def initialized_db(test_settings: "Settings") -> "Settings":
    """Initialize the database and return settings."""
    from prowriter.config import reset_settings
    from prowriter.db.engine import init_database, reset_engine

    reset_settings()
    reset_engine()
    init_database(test_settings)
    yield test_settings
    reset_engine()
    reset_settings()


@pytest.fixture
def project_id(initialized_db: "Settings") -> str:
    """Create an empty project and return its ID."""
    from prowriter.db.engine import get_session
    from prowriter.services.projects import create_project

    with get_session(initialized_db) as session:
        return create_project(session, "test-project").id


@pytest.fixture
def style_profile_payload() -> dict:
    return {
        "schema_version": 1,
        "label": "Spare and concrete",
        "influences": ["Hemingway"],
        "diction": {"register": "plain", "verb_energy": "high"},
        "constraints": {"must_avoid": ["clichés"]},
    }


@pytest.fixture
def character_payload() -> dict:
    return {
        "schema_version": 1,
        "name": "Mara Voss",
        "role_in_story": "protagonist",
        "age": 34,
        "wants": ["to sell the farm"],
        "relationships": [{"other_name": "Eli", "relationship": "estranged brother"}],
    }


@pytest.fixture
def directive_payload() -> dict:
    return {
        "schema_version": 1,
        "deliverable": "scene",
        "pov": "Mara",
        "tense": "past",
        "target_length_min": 800,
        "target_length_max": 1200,
        "objective": "Mara confronts Eli about the sale",
        "conflict": "Eli refuses to sign",
        "stakes": "The bank forecloses in a week",
        "beats": [
            {"purpose": "setup", "event": "Mara arrives at the barn"},
            {"purpose": "turn", "event": "Eli produces the old deed", "outcome": "Mara wavers"},
        ],
    }
