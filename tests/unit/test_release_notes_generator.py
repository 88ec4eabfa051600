"""Unit tests for the release notes generation pipeline."""

import dataclasses
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from pytest import MonkeyPatch

from release_notes_publisher.configuration.models import ReleaseNotesConfig
from release_notes_publisher.release_notes import generator as generator_module
from release_notes_publisher.release_notes.exceptions import FetchFailureError, MissingInputFileError
from release_notes_publisher.release_notes.generator import (
    ReleaseNotesGenerator,
    process_raw_response,
    render_from_artifact,
    update_toc,
)
from release_notes_publisher.release_notes.models import IssueType, ReleaseNotesStatus
from release_notes_publisher.release_notes.version import resolve_release_identity

TOC = '<toc-element topic="teamcity-2025-03-1-release-notes.md"/>\n'


@pytest.fixture
def youtrack(monkeypatch: MonkeyPatch, raw_issues_response: str) -> MagicMock:
    """Replace the YouTrack client used by the generator with a mock."""
    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    client.fetch_issues_raw = AsyncMock(return_value=raw_issues_response)
    client.count_security_issues = AsyncMock(return_value=3)
    factory = MagicMock(return_value=client)
    monkeypatch.setattr(generator_module, "YouTrackClient", factory)
    return client


@pytest.fixture
def adapter() -> MagicMock:
    """A documentation repository adapter with every call mocked."""
    adapter = MagicMock()
    adapter.get_file_content = AsyncMock(return_value=TOC)
    adapter.branch_exists = AsyncMock(return_value=False)
    adapter.create_branch = AsyncMock()
    adapter.commit_files_to_branch = AsyncMock()
    pr = MagicMock()
    pr.number = 5
    pr.html_url = "https://github.com/JetBrains/teamcity-documentation/pull/5"
    adapter.create_pull_request = AsyncMock(return_value=pr)
    return adapter


def test_process_raw_response_writes_line_artifacts(tmp_path: Path, raw_issues_response: str) -> None:
    """Test that split and filtered views are written next to the parsed issues."""
    issues = process_raw_response(raw_issues_response, tmp_path)
    assert [issue.type for issue in issues] == [IssueType.BUG, IssueType.FEATURE, IssueType.PERFORMANCE_PROBLEM]
    assert (tmp_path / "formatted_response.txt").read_text().count("\n") > 3
    assert (tmp_path / "filtered_response.txt").read_text().splitlines()[:3] == ["Summary A", "TW-1", "Bug"]


def test_update_toc_missing_anchor_leaves_tree() -> None:
    """Test that a missing anchor is reported and the TOC is left unmodified."""
    identity = resolve_release_identity("2025.03.2")
    update = update_toc("<empty/>\n", identity)
    assert update.modified is False
    assert update.text == "<empty/>\n"


def test_render_from_artifact(tmp_path: Path, raw_issues_response: str) -> None:
    """Test rendering release notes from a saved response without the network."""
    response_path = tmp_path / "response.txt"
    response_path.write_text(raw_issues_response)
    markdown = render_from_artifact(
        response_path,
        resolve_release_identity("2025.03 (124153)"),
        security_count=42,
        output_dir=tmp_path / "out",
        tracker_url="https://youtrack.example.com",
        release_date="5 April 2025",
    )
    assert "**Build 124153, 5 April 2025**" in markdown
    assert "42 security problems have been fixed." in markdown
    assert (tmp_path / "out" / "markdown.md").read_text() == markdown


def test_render_from_artifact_missing_input(tmp_path: Path) -> None:
    """Test that a missing response file raises MissingInputFileError and writes nothing."""
    with pytest.raises(MissingInputFileError):
        render_from_artifact(tmp_path / "absent.txt", resolve_release_identity("2025.03"), 0, tmp_path / "out", "https://yt")
    assert not (tmp_path / "out").exists()


@pytest.mark.asyncio
async def test_generate_dry_run(youtrack: MagicMock, release_notes_config: ReleaseNotesConfig) -> None:
    """Test that a dry run writes all artifacts without touching the documentation repository."""
    generator = ReleaseNotesGenerator(release_notes_config)
    result = await generator.generate(dry_run=True)

    assert result.status == ReleaseNotesStatus.DRY_RUN
    assert result.issue_count == 3
    assert result.security_count == 3
    assert result.generated_content is not None
    assert "Three security problems have been fixed." in result.generated_content
    assert generator.adapter is None
    output_dir = release_notes_config.output_dir
    for name in ("response.txt", "formatted_response.txt", "filtered_response.txt", "markdown.md"):
        assert (output_dir / name).is_file()
    identity = youtrack.fetch_issues_raw.await_args.args[0]
    assert identity.short_version == "2025.03.2"


@pytest.mark.asyncio
async def test_generate_publishes(youtrack: MagicMock, adapter: MagicMock, release_notes_config: ReleaseNotesConfig) -> None:
    """Test a full run that updates the TOC and opens a pull request."""
    generator = ReleaseNotesGenerator(release_notes_config)
    generator.adapter = adapter
    result = await generator.generate()

    assert result.status == ReleaseNotesStatus.SUCCESS
    assert result.pr_url == "https://github.com/JetBrains/teamcity-documentation/pull/5"
    assert result.toc_modified is True
    adapter.create_branch.assert_awaited_once_with("auto-release-notes/2025-03-2", "main")
    files = adapter.commit_files_to_branch.await_args.args[1]
    assert [path for path, _ in files] == ["topics/teamcity-2025-03-2-release-notes.md", "tc.tree"]
    assert (release_notes_config.output_dir / "tc.tree").read_text() == files[1][1]


@pytest.mark.asyncio
async def test_generate_continues_without_toc_anchor(
    youtrack: MagicMock, adapter: MagicMock, release_notes_config: ReleaseNotesConfig
) -> None:
    """Test that a missing TOC anchor still publishes the release notes."""
    adapter.get_file_content = AsyncMock(return_value="<nothing/>\n")
    generator = ReleaseNotesGenerator(dataclasses.replace(release_notes_config, target_branch="custom-branch"))
    generator.adapter = adapter
    result = await generator.generate()

    assert result.status == ReleaseNotesStatus.SUCCESS
    assert result.toc_modified is False
    files = adapter.commit_files_to_branch.await_args.args[1]
    assert [path for path, _ in files] == ["topics/teamcity-2025-03-2-release-notes.md"]
    adapter.create_branch.assert_awaited_once_with("custom-branch", "main")
    assert not (release_notes_config.output_dir / "tc.tree").exists()


@pytest.mark.asyncio
async def test_generate_skip_toc(youtrack: MagicMock, adapter: MagicMock, release_notes_config: ReleaseNotesConfig) -> None:
    """Test that the TOC is not fetched when TOC updates are disabled."""
    generator = ReleaseNotesGenerator(dataclasses.replace(release_notes_config, update_toc=False))
    generator.adapter = adapter
    result = await generator.generate()
    assert result.status == ReleaseNotesStatus.SUCCESS
    adapter.get_file_content.assert_not_awaited()


@pytest.mark.asyncio
async def test_generate_malformed_version_makes_no_calls(youtrack: MagicMock, release_notes_config: ReleaseNotesConfig) -> None:
    """Test that a malformed version aborts before any network call."""
    result = await ReleaseNotesGenerator(dataclasses.replace(release_notes_config, version="2025")).generate()
    assert result.status == ReleaseNotesStatus.ERROR
    assert "Malformed version" in (result.error or "")
    youtrack.fetch_issues_raw.assert_not_awaited()


@pytest.mark.asyncio
async def test_generate_fetch_failure_aborts(youtrack: MagicMock, release_notes_config: ReleaseNotesConfig) -> None:
    """Test that a tracker failure ends the run with an error and no markdown."""
    youtrack.fetch_issues_raw = AsyncMock(side_effect=FetchFailureError("YouTrack request failed", status_code=401))
    result = await ReleaseNotesGenerator(release_notes_config).generate(dry_run=True)
    assert result.status == ReleaseNotesStatus.ERROR
    assert "401" in (result.error or "")
    assert not (release_notes_config.output_dir / "markdown.md").exists()


@pytest.mark.asyncio
async def test_generate_initializes_adapter_on_demand(
    monkeypatch: MonkeyPatch, youtrack: MagicMock, adapter: MagicMock, release_notes_config: ReleaseNotesConfig
) -> None:
    """Test that a publishing run creates the documentation repository adapter itself."""
    create = AsyncMock(return_value=adapter)
    monkeypatch.setattr(generator_module.DocsRepositoryAdapter, "create", create)
    generator = ReleaseNotesGenerator(release_notes_config)
    result = await generator.generate()

    assert result.status == ReleaseNotesStatus.SUCCESS
    assert generator.adapter is adapter
    create.assert_awaited_once()
    assert create.await_args.kwargs["repo"] == "JetBrains/teamcity-documentation"
    adapter.create_pull_request.assert_awaited_once()
