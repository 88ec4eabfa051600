"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from release_notes_publisher.configuration.env import get_settings
from release_notes_publisher.configuration.exceptions import ConfigurationError
from release_notes_publisher.configuration.reconcile import reconcile_release_notes_configuration
from release_notes_publisher.release_notes.exceptions import ReleaseNotesError
from release_notes_publisher.release_notes.generator import ReleaseNotesGenerator, render_from_artifact
from release_notes_publisher.release_notes.models import ReleaseNotesStatus
from release_notes_publisher.release_notes.version import resolve_release_identity
from release_notes_publisher.utils.logging import configure_logging
from release_notes_publisher.youtrack.client import YouTrackClient

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Generate TeamCity release notes from YouTrack and publish them.")


@typer_app.command(name="publish")
def publish_cli(
    version: Annotated[str, Argument(envvar="VERSION", help='TeamCity version, e.g. "2025.03", "2025.03.1" or "2025.03 (124153)".')],
    build_number: Annotated[
        str | None, Option(envvar="BUILD_NUMBER", help='Build number, used when the version carries none. Leave empty or "0" if not yet assigned.')
    ] = None,
    release_date: Annotated[str | None, Option(envvar="RELEASE_DATE", help='Release date such as "5 April 2025". Defaults to today.')] = None,
    file_name: Annotated[str | None, Option(envvar="FILE_NAME", help="Release notes article name. Defaults to teamcity-<version>-release-notes.md.")] = None,
    source_branch: Annotated[str | None, Option(envvar="DOCS_SOURCE_BRANCH", help="Documentation branch to fork from and merge into.")] = None,
    target_branch: Annotated[
        str | None, Option(envvar="DOCS_TARGET_BRANCH", help="Branch to create. Defaults to auto-release-notes/<version>.")
    ] = None,
    docs_repo: Annotated[str | None, Option(envvar="DOCS_REPO", help="Documentation repository (owner/repo).")] = None,
    youtrack_url: Annotated[str | None, Option(envvar="YOUTRACK_URL", help="YouTrack base URL.")] = None,
    youtrack_token: Annotated[str | None, Option(envvar="YOUTRACK_TOKEN", help="YouTrack permanent token.")] = None,
    github_api_url: Annotated[str | None, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = None,
    github_pat_token: Annotated[str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")] = None,
    github_app_id: Annotated[int | None, Option(envvar="GITHUB_APP_ID", help="GitHub App ID.")] = None,
    github_app_private_key_path: Annotated[Path | None, Option(envvar="GITHUB_APP_PRIVATE_KEY_PATH", help="Path to GitHub App private key.")] = None,
    github_app_installation_id: Annotated[int | None, Option(envvar="GITHUB_APP_INSTALLATION_ID", help="GitHub App Installation ID.")] = None,
    output_dir: Annotated[Path | None, Option(envvar="OUTPUT_DIR", help="Directory receiving the run artifacts.")] = None,
    skip_toc: Annotated[bool, Option("--skip-toc", help="Do not touch the table of contents.")] = False,
    dry_run: Annotated[bool, Option("--dry-run", help="Generate artifacts only, without creating a pull request.")] = False,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Generate release notes for a version and open a pull request against the documentation repository."""
    configure_logging(debug)
    try:
        config = asyncio.run(
            reconcile_release_notes_configuration(
                settings=get_settings(),
                version=version,
                cli_build_number=build_number,
                cli_release_date=release_date,
                cli_file_name=file_name,
                cli_youtrack_url=youtrack_url,
                cli_youtrack_token=youtrack_token,
                cli_docs_repo=docs_repo,
                cli_source_branch=source_branch,
                cli_target_branch=target_branch,
                cli_github_api_url=github_api_url,
                cli_github_pat_token=github_pat_token,
                cli_github_app_id=github_app_id,
                cli_github_app_private_key_path=github_app_private_key_path,
                cli_github_app_installation_id=github_app_installation_id,
                cli_output_dir=output_dir,
                cli_update_toc=not skip_toc,
                cli_debug=debug,
                require_github=not dry_run,
            )
        )
    except ConfigurationError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(1) from exc

    result = asyncio.run(ReleaseNotesGenerator(config).generate(dry_run=dry_run))

    if result.status == ReleaseNotesStatus.ERROR:
        typer.echo(f"Failed to generate release notes for {version}: {result.error}", err=True)
        sys.exit(1)

    typer.echo(f"Release notes for {result.version}: {result.issue_count} issues, security count {result.security_count}")
    typer.echo(f"Artifacts written to {config.output_dir.absolute()}")
    if result.status == ReleaseNotesStatus.DRY_RUN:
        typer.echo("Dry run - no pull request created")
        return
    typer.echo(f"Table of contents modified: {result.toc_modified}")
    typer.echo(f"Pull request: {result.pr_url}")


@typer_app.command(name="render")
def render_cli(
    response_file: Annotated[Path, Argument(help="Saved YouTrack issues response (response.txt).")],
    version: Annotated[str, Argument(help="TeamCity version the response belongs to.")],
    security_count: Annotated[int, Option(help="Number of fixed security problems, -1 if unknown.")] = 0,
    build_number: Annotated[str | None, Option(help="Build number, used when the version carries none.")] = None,
    release_date: Annotated[str | None, Option(help='Release date such as "5 April 2025". Defaults to today.')] = None,
    youtrack_url: Annotated[str | None, Option(envvar="YOUTRACK_URL", help="YouTrack base URL used for issue links.")] = None,
    output_dir: Annotated[Path, Option(help="Directory receiving the artifacts.")] = Path("."),
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Render release notes from a saved YouTrack response, without network access."""
    configure_logging(debug)
    try:
        identity = resolve_release_identity(version, build_number)
        render_from_artifact(
            response_path=response_file,
            identity=identity,
            security_count=security_count,
            output_dir=output_dir,
            tracker_url=youtrack_url or get_settings().YOUTRACK_URL,
            release_date=release_date,
        )
    except ReleaseNotesError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    typer.echo(f"Release notes written to {(output_dir / 'markdown.md').absolute()}")


@typer_app.command(name="resolve-version")
def resolve_version_cli(
    version: Annotated[str, Argument(help="TeamCity version to resolve.")],
    build_number: Annotated[str | None, Option(help="Build number, used when the version carries none.")] = None,
    file_name: Annotated[str | None, Option(help="Release notes article name override.")] = None,
) -> None:
    """Print what a version string resolves to."""
    try:
        identity = resolve_release_identity(version, build_number, file_name)
    except ReleaseNotesError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    for key, value in identity.model_dump(mode="json").items():
        typer.echo(f"{key}: {value}")


@typer_app.command(name="list-versions")
def list_versions_cli(
    youtrack_url: Annotated[str | None, Option(envvar="YOUTRACK_URL", help="YouTrack base URL.")] = None,
    youtrack_token: Annotated[str | None, Option(envvar="YOUTRACK_TOKEN", help="YouTrack permanent token.")] = None,
    bundle_id: Annotated[str | None, Option(envvar="YOUTRACK_VERSION_BUNDLE_ID", help="ID of the version bundle to list.")] = None,
) -> None:
    """List the versions known to YouTrack."""
    settings = get_settings()
    token = youtrack_token or settings.YOUTRACK_TOKEN
    if not token:
        typer.echo("A YouTrack token must be provided via --youtrack-token or the YOUTRACK_TOKEN env var.", err=True)
        raise typer.Exit(1)

    async def list_versions() -> list[str]:
        async with YouTrackClient(youtrack_url or settings.YOUTRACK_URL, token, settings.YOUTRACK_PROJECT) as client:
            return await client.list_versions(bundle_id or settings.YOUTRACK_VERSION_BUNDLE_ID)

    try:
        versions = asyncio.run(list_versions())
    except ReleaseNotesError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    for name in versions:
        typer.echo(name)


if __name__ == "__main__":
    typer_app()
