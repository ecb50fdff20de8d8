"""Service layer for ProWriter operations.

- projects: project CRUD, default project seeding, canon digest
- artifacts: versioned artifact upsert and revision reads
- diagnostics: prose diagnostics and revision plans persisted as artifacts
"""

from prowriter.services import artifacts, diagnostics, projects

__all__ = [
    "artifacts",
    "diagnostics",
    "projects",
]
