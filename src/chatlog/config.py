"""Configuration settings for chatlog.

Two pieces of persisted state live under the storage directory:
- library.db: Document records (SQLite, versioned schema)
- prefs.json: Folder registry and per-document view state
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CHATLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage directory (default: .chatlog in current directory)
    storage_dir: Path = Field(default=Path(".chatlog"))

    # Display budgets for derived summaries
    preview_chars: int = Field(default=50, ge=1)
    outline_chars: int = Field(default=60, ge=1)

    @property
    def db_path(self) -> Path:
        """Path to the document database."""
        return self.storage_dir / "library.db"

    @property
    def prefs_path(self) -> Path:
        """Path to the preferences file."""
        return self.storage_dir / "prefs.json"

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
