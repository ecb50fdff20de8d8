"""Configuration settings for ProWriter.

Everything lives in one SQLite file under the storage directory:
- projects, artifacts, artifact_revisions
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PROWRITER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage directory (default: .prowriter in current directory)
    storage_dir: Path = Field(default=Path(".prowriter"))

    # Full SQLAlchemy URL; overrides the SQLite file in storage_dir
    database_url: str | None = None

    # Seconds a writer waits for the SQLite write lock before failing
    busy_timeout: float = 30.0

    default_project_name: str = "default"
    default_style_profile_name: str = "prowriter_default"

    @property
    def db_path(self) -> Path:
        """Path to the SQLite database file."""
        return self.storage_dir / "prowriter.db"

    @property
    def db_url(self) -> str:
        """SQLAlchemy URL for the artifact database."""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.db_path}"

    def ensure_storage_dir(self) -> None:
        """Create storage directory if it doesn't exist."""
        self.storage_dir.mkdir(parents=True, exist_ok=True)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings cache (useful for testing)."""
    global _settings
    _settings = None
