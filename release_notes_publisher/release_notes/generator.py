"""Main release notes generation orchestration."""

from pathlib import Path

import structlog

from ..configuration.models import ReleaseNotesConfig
from ..github.adapter import DocsRepositoryAdapter
from ..utils.constants import (
    DEFAULT_TARGET_BRANCH,
    FILTERED_RESPONSE_ARTIFACT,
    FORMATTED_RESPONSE_ARTIFACT,
    MARKDOWN_ARTIFACT,
    RAW_RESPONSE_ARTIFACT,
    TOC_ARTIFACT,
)
from ..utils.helpers import generate_branch_name
from ..youtrack.client import YouTrackClient
from .artifacts import read_artifact, write_artifact
from .exceptions import AnchorNotFoundError, ReleaseNotesError
from .extractor import parse_issue_records
from .filter import filter_lines, records_from_filtered_lines
from .markdown import ReleaseNotesRenderer
from .models import IssueRecord, IssueType, ReleaseIdentity, ReleaseNotesFileConfig, ReleaseNotesResult, ReleaseNotesStatus
from .publisher import ReleaseNotesPublisher
from .splitter import split_on_markers
from .toc import TocUpdate, insert_toc_entry
from .version import resolve_release_identity

logger = structlog.get_logger(__name__)


def process_raw_response(raw_response: str, output_dir: Path) -> list[IssueRecord]:
    """Write the split and filtered views of a raw response and return its issues.

    The split/filter line views are kept as audit artifacts. Issues themselves
    come from a JSON parse of the response; a disagreement between the two is
    logged.
    """
    formatted = split_on_markers(raw_response)
    write_artifact(output_dir, FORMATTED_RESPONSE_ARTIFACT, formatted)

    filtered = filter_lines(formatted.split("\n"))
    write_artifact(output_dir, FILTERED_RESPONSE_ARTIFACT, "\n".join(filtered) + ("\n" if filtered else ""))

    issues = parse_issue_records(raw_response)
    line_records = records_from_filtered_lines(filtered)
    typed_issues = [issue for issue in issues if issue.type is not IssueType.OTHER]
    if typed_issues != line_records:
        logger.warning(
            "Line view of the response disagrees with the parsed issues",
            parsed=len(issues),
            from_lines=len(line_records),
        )
    return issues


def update_toc(toc_text: str, identity: ReleaseIdentity) -> TocUpdate:
    """Insert the release notes link into the TOC, leaving it unchanged if the anchor is missing."""
    try:
        return insert_toc_entry(toc_text, identity.toc_anchor_line, identity.toc_insert_line)
    except AnchorNotFoundError as exc:
        logger.error("Table of contents left unmodified", error=str(exc))
        return TocUpdate(toc_text, False)


def render_from_artifact(
    response_path: Path,
    identity: ReleaseIdentity,
    security_count: int,
    output_dir: Path,
    tracker_url: str,
    release_date: str | None = None,
) -> str:
    """Render release notes from a saved tracker response without any network access.

    Raises:
        MissingInputFileError: If the response file does not exist
    """
    raw_response = read_artifact(response_path)
    issues = process_raw_response(raw_response, output_dir)
    markdown = ReleaseNotesRenderer(tracker_url).render(
        issues,
        build_number=identity.build_number,
        short_version=identity.short_version,
        security_count=security_count,
        release_date=release_date,
    )
    write_artifact(output_dir, MARKDOWN_ARTIFACT, markdown)
    return markdown


class ReleaseNotesGenerator:
    """Runs the release notes pipeline for a single version.

    Stages run strictly in order: resolve the version, fetch issues and the
    security count from YouTrack, split/filter/parse the response, render the
    Markdown, update the TOC and publish a pull request. Every failure except
    a missing TOC anchor aborts the run.
    """

    def __init__(self, config: ReleaseNotesConfig, file_config: ReleaseNotesFileConfig | None = None) -> None:
        """Initialize with the run configuration.

        Args:
            config: Reconciled configuration of this run
            file_config: Documentation repository layout; derived from config when omitted
        """
        self.config = config
        self.file_config = file_config or ReleaseNotesFileConfig(topics_dir=config.topics_dir, toc_path=config.toc_path)
        self.adapter: DocsRepositoryAdapter | None = None

    async def initialize(self) -> DocsRepositoryAdapter:
        """Initialize and return the documentation repository adapter."""
        self.adapter = await DocsRepositoryAdapter.create(
            repo=self.config.docs_repo,
            github_auth_type=self.config.github_authentication_type,
            github_pat_token=self.config.github_pat_token,
            github_app_id=self.config.github_app_id,
            github_app_private_key_path=self.config.github_app_private_key_path,
            github_app_installation_id=self.config.github_app_installation_id,
            github_api_url=self.config.github_api_url,
        )
        logger.info("GitHub adapter initialized", repo=self.config.docs_repo)
        return self.adapter

    def target_branch(self, identity: ReleaseIdentity) -> str:
        """Return the branch that will hold the generated changes."""
        return self.config.target_branch or generate_branch_name(identity.short_version, DEFAULT_TARGET_BRANCH)

    async def generate(self, dry_run: bool = False) -> ReleaseNotesResult:
        """Generate release notes.

        Args:
            dry_run: If True, generate content and artifacts but don't touch the documentation repository

        Returns:
            Result of the generation process
        """
        output_dir = self.config.output_dir
        try:
            identity = resolve_release_identity(self.config.version, self.config.build_number, self.config.file_name)

            async with YouTrackClient(self.config.youtrack_url, self.config.youtrack_token, self.config.youtrack_project) as youtrack:
                raw_response = await youtrack.fetch_issues_raw(identity)
                write_artifact(output_dir, RAW_RESPONSE_ARTIFACT, raw_response)
                security_count = await youtrack.count_security_issues(identity)

            issues = process_raw_response(raw_response, output_dir)
            markdown = ReleaseNotesRenderer(self.config.youtrack_url).render(
                issues,
                build_number=identity.build_number,
                short_version=identity.short_version,
                security_count=security_count,
                release_date=self.config.release_date,
            )
            write_artifact(output_dir, MARKDOWN_ARTIFACT, markdown)

            if dry_run:
                logger.info("Dry run mode - not touching the documentation repository")
                logger.debug("DRY RUN - RELEASE NOTES FILE WOULD CONTAIN:\n" + markdown)
                return ReleaseNotesResult(
                    status=ReleaseNotesStatus.DRY_RUN,
                    version=identity.short_version,
                    generated_content=markdown,
                    issue_count=len(issues),
                    security_count=security_count,
                )

            adapter = self.adapter or await self.initialize()
            publisher = ReleaseNotesPublisher(adapter, self.file_config)

            toc_update = TocUpdate("", False)
            if self.config.update_toc:
                toc_text = await publisher.fetch_toc(self.config.source_branch)
                toc_update = update_toc(toc_text, identity)
                if toc_update.modified:
                    write_artifact(output_dir, TOC_ARTIFACT, toc_update.text)

            pr_url = await publisher.publish(
                identity,
                markdown,
                toc_text=toc_update.text if toc_update.modified else None,
                toc_modified=toc_update.modified,
                source_branch=self.config.source_branch,
                target_branch=self.target_branch(identity),
            )
            return ReleaseNotesResult(
                status=ReleaseNotesStatus.SUCCESS,
                pr_url=pr_url,
                version=identity.short_version,
                generated_content=markdown,
                toc_modified=toc_update.modified,
                issue_count=len(issues),
                security_count=security_count,
            )

        except ReleaseNotesError as e:
            logger.error("Failed to generate release notes", error=str(e), error_type=type(e).__name__)
            return ReleaseNotesResult(status=ReleaseNotesStatus.ERROR, version=self.config.version, error=str(e))
        except Exception as e:
            logger.exception("Unexpected failure while generating release notes")
            return ReleaseNotesResult(status=ReleaseNotesStatus.ERROR, version=self.config.version, error=str(e))
