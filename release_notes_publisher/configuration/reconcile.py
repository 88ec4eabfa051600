"""Reconciles configuration between CLI arguments and environment variables."""

from pathlib import Path
from typing import TypeVar

import structlog

from release_notes_publisher.configuration.env import Settings
from release_notes_publisher.configuration.exceptions import (
    GitHubAuthenticationConfigurationError,
    MissingConfigurationError,
)
from release_notes_publisher.configuration.models import GitHubAuthenticationType, ReleaseNotesConfig

logger = structlog.get_logger(__name__)

T = TypeVar("T")


async def validate_github_authentication_configuration(
    github_pat_token: str | None,
    github_app_id: int | None,
    github_app_private_key_path: Path | None,
    github_app_installation_id: int | None,
) -> GitHubAuthenticationType:
    """Validates the GitHub authentication configuration.

    Args:
        github_pat_token (str | None): The GitHub PAT token.
        github_app_id (int | None): The GitHub App ID.
        github_app_private_key_path (Path | None): The path to the GitHub App private key.
        github_app_installation_id (int | None): The GitHub App installation ID.

    Raises:
        GitHubAuthenticationConfigurationError: If both or neither of PAT and App configurations are defined.

    Returns:
        GitHubAuthenticationType: The type of GitHub authentication used.
    """
    app_settings = {
        ("GitHub App ID", "--github-app-id", "GITHUB_APP_ID"): github_app_id,
        ("GitHub App private key path", "--github-app-private-key-path", "GITHUB_APP_PRIVATE_KEY_PATH"): github_app_private_key_path,
        ("GitHub App installation ID", "--github-app-installation-id", "GITHUB_APP_INSTALLATION_ID"): github_app_installation_id,
    }
    any_app_setting = any(app_settings.values())

    if github_pat_token and any_app_setting:
        raise GitHubAuthenticationConfigurationError("Both PAT and GitHub App configurations are defined. Please use one or the other.")

    if github_pat_token:
        return GitHubAuthenticationType.PAT

    if all(app_settings.values()):
        return GitHubAuthenticationType.APP

    if any_app_setting:
        msg = "Incomplete GitHub App configuration - missing settings include " + ", ".join(
            f"{name} (command line option {cli_name}, environment variable {env_name})"
            for (name, cli_name, env_name), value in app_settings.items()
            if not value
        )
        raise GitHubAuthenticationConfigurationError(msg)

    raise GitHubAuthenticationConfigurationError(
        "No GitHub authentication configuration provided. Please provide either a PAT or a GitHub App configuration."
    )


def _pick(cli_value: T | None, env_value: T) -> T:
    """Prefer a value given on the command line over the environment."""
    return cli_value if cli_value not in (None, "") else env_value


async def reconcile_release_notes_configuration(
    settings: Settings,
    version: str,
    cli_build_number: str | None = None,
    cli_release_date: str | None = None,
    cli_file_name: str | None = None,
    cli_youtrack_url: str | None = None,
    cli_youtrack_token: str | None = None,
    cli_docs_repo: str | None = None,
    cli_source_branch: str | None = None,
    cli_target_branch: str | None = None,
    cli_github_api_url: str | None = None,
    cli_github_pat_token: str | None = None,
    cli_github_app_id: int | None = None,
    cli_github_app_private_key_path: Path | None = None,
    cli_github_app_installation_id: int | None = None,
    cli_output_dir: Path | None = None,
    cli_update_toc: bool = True,
    cli_debug: bool = False,
    require_github: bool = True,
) -> ReleaseNotesConfig:
    """Merge command line values over settings and check required elements are present.

    Raises:
        MissingConfigurationError: If the tracker token or source branch is missing.
        GitHubAuthenticationConfigurationError: If GitHub authentication is ambiguous or missing.
    """
    youtrack_token = _pick(cli_youtrack_token, settings.YOUTRACK_TOKEN)
    if not youtrack_token:
        raise MissingConfigurationError("YouTrack token", "--youtrack-token", "YOUTRACK_TOKEN")

    source_branch = _pick(cli_source_branch, settings.DOCS_SOURCE_BRANCH)
    if require_github and not source_branch:
        raise MissingConfigurationError("Documentation source branch", "--source-branch", "DOCS_SOURCE_BRANCH")

    github_pat_token = _pick(cli_github_pat_token, settings.GITHUB_PAT_TOKEN)
    github_app_id = _pick(cli_github_app_id, settings.GITHUB_APP_ID)
    github_app_private_key_path = _pick(cli_github_app_private_key_path, settings.GITHUB_APP_PRIVATE_KEY_PATH)
    github_app_installation_id = _pick(cli_github_app_installation_id, settings.GITHUB_APP_INSTALLATION_ID)
    if require_github:
        github_auth_type = await validate_github_authentication_configuration(
            github_pat_token=github_pat_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_app_installation_id=github_app_installation_id,
        )
    else:
        github_auth_type = GitHubAuthenticationType.APP if github_app_id else GitHubAuthenticationType.PAT

    config = ReleaseNotesConfig(
        version=version,
        build_number=cli_build_number,
        release_date=cli_release_date,
        file_name=cli_file_name,
        youtrack_url=_pick(cli_youtrack_url, settings.YOUTRACK_URL),
        youtrack_token=youtrack_token,
        youtrack_project=settings.YOUTRACK_PROJECT,
        docs_repo=_pick(cli_docs_repo, settings.DOCS_REPO),
        source_branch=source_branch or "",
        target_branch=_pick(cli_target_branch, settings.DOCS_TARGET_BRANCH),
        topics_dir=settings.DOCS_TOPICS_DIR,
        toc_path=settings.DOCS_TOC_PATH,
        github_api_url=_pick(cli_github_api_url, settings.GITHUB_API_URL),
        github_authentication_type=github_auth_type,
        github_pat_token=github_pat_token,
        github_app_id=github_app_id,
        github_app_private_key_path=github_app_private_key_path,
        github_app_installation_id=github_app_installation_id,
        output_dir=_pick(cli_output_dir, settings.OUTPUT_DIR),
        update_toc=cli_update_toc,
        debug=cli_debug or settings.DEBUG,
    )
    logger.debug("Reconciled release notes configuration", version=version, docs_repo=config.docs_repo, source_branch=config.source_branch)
    return config
