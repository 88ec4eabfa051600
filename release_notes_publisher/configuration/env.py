"""Pydantic Settings model for application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from release_notes_publisher.utils.constants import (
    DEFAULT_DOCS_REPO,
    DEFAULT_DOCS_TOC_PATH,
    DEFAULT_DOCS_TOPICS_DIR,
    DEFAULT_VERSION_BUNDLE_ID,
    DEFAULT_YOUTRACK_PROJECT,
    DEFAULT_YOUTRACK_URL,
)


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False
    OUTPUT_DIR: Path = Path(".")

    # YouTrack settings
    YOUTRACK_URL: str = DEFAULT_YOUTRACK_URL
    YOUTRACK_TOKEN: str | None = None
    YOUTRACK_PROJECT: str = DEFAULT_YOUTRACK_PROJECT
    YOUTRACK_VERSION_BUNDLE_ID: str = DEFAULT_VERSION_BUNDLE_ID

    # Documentation repository settings
    DOCS_REPO: str = DEFAULT_DOCS_REPO
    DOCS_SOURCE_BRANCH: str | None = None
    DOCS_TARGET_BRANCH: str | None = None
    DOCS_TOPICS_DIR: str = DEFAULT_DOCS_TOPICS_DIR
    DOCS_TOC_PATH: str = DEFAULT_DOCS_TOC_PATH

    # GitHub API settings
    GITHUB_API_URL: str = "https://api.github.com"

    # GitHub PAT settings
    GITHUB_PAT_TOKEN: str | None = None

    # GitHub App settings
    GITHUB_APP_ID: int | None = None
    GITHUB_APP_PRIVATE_KEY_PATH: Path | None = None
    GITHUB_APP_INSTALLATION_ID: int | None = None


def get_settings() -> Settings:
    """Load settings from the environment and the .env file."""
    return Settings()
