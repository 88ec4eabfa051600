"""Publishes generated release notes to the documentation repository."""

import structlog

from ..github.abc import DocsRepositoryClientBase
from ..utils.templates import TEMPLATES_DIR, construct_jinja2_template_from_file, render_template_with_model
from .exceptions import FetchFailureError
from .models import ReleaseIdentity, ReleaseNotesFileConfig

logger = structlog.get_logger(__name__)


class ReleaseNotesPublisher:
    """Commits release notes to a new branch and opens a pull request."""

    def __init__(self, adapter: DocsRepositoryClientBase, file_config: ReleaseNotesFileConfig) -> None:
        """Initialize with a documentation repository adapter and file layout."""
        self.adapter = adapter
        self.file_config = file_config
        self.body_template = construct_jinja2_template_from_file(TEMPLATES_DIR / "pull_request_body.j2")

    async def fetch_toc(self, branch: str) -> str:
        """Fetch the table of contents file from a branch."""
        logger.info("Fetching table of contents", path=self.file_config.toc_path, branch=branch)
        return await self.adapter.get_file_content(self.file_config.toc_path, branch)

    def render_pull_request_body(self, identity: ReleaseIdentity, toc_modified: bool) -> str:
        """Render the pull request description."""
        return render_template_with_model(
            identity,
            self.body_template,
            doc_path=self.file_config.doc_path(identity.doc_file_name),
            toc_modified=toc_modified,
        )

    async def publish(
        self,
        identity: ReleaseIdentity,
        markdown: str,
        toc_text: str | None,
        toc_modified: bool,
        source_branch: str,
        target_branch: str,
    ) -> str:
        """Commit the release notes (and the TOC when modified) and open a pull request.

        Args:
            identity: The resolved release
            markdown: Rendered release notes document
            toc_text: Table of contents content, committed only when modified
            toc_modified: Whether the table of contents gained a line
            source_branch: Branch to fork from and to merge into
            target_branch: New branch holding the changes

        Returns:
            URL of the created pull request

        Raises:
            FetchFailureError: If the target branch already exists or any GitHub call fails
        """
        if await self.adapter.branch_exists(target_branch):
            logger.error("Target branch already exists", branch=target_branch)
            raise FetchFailureError(f"Branch '{target_branch}' already exists; remove it or choose another target branch")

        logger.info("Creating branch", branch=target_branch, base_branch=source_branch)
        await self.adapter.create_branch(target_branch, source_branch)

        files = [(self.file_config.doc_path(identity.doc_file_name), markdown)]
        if toc_modified and toc_text is not None:
            files.append((self.file_config.toc_path, toc_text))
        else:
            logger.info("Table of contents was not modified, skipping it")

        commit_message = self.file_config.commit_message_template.format(short_version=identity.short_version)
        await self.adapter.commit_files_to_branch(target_branch, files, commit_message)

        pr = await self.adapter.create_pull_request(
            title=self.file_config.pr_title,
            head=target_branch,
            base=source_branch,
            body=self.render_pull_request_body(identity, toc_modified),
        )
        logger.info("Created release notes PR", pr_number=pr.number, pr_url=pr.html_url)
        return pr.html_url
