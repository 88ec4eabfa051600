"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class GitHubAuthenticationType(str, Enum):
    """Enum for GitHub authentication types."""

    PAT = "pat"
    APP = "app"


@dataclass(frozen=True)
class ReleaseNotesConfig:
    """Configuration of a single release notes run."""

    version: str
    build_number: str | None
    release_date: str | None
    file_name: str | None
    youtrack_url: str
    youtrack_token: str
    youtrack_project: str
    docs_repo: str
    source_branch: str
    target_branch: str | None
    topics_dir: str
    toc_path: str
    github_api_url: str
    github_authentication_type: GitHubAuthenticationType
    github_pat_token: str | None
    github_app_id: int | None
    github_app_private_key_path: Path | None
    github_app_installation_id: int | None
    output_dir: Path
    update_toc: bool = True
    debug: bool = False
