"""Markdown rendering for release notes."""

from collections.abc import Sequence
from datetime import date

import structlog

from ..utils.constants import (
    AUXILIARY_ID_LINE_TEMPLATE,
    BUILD_LINE_TEMPLATE,
    DEFAULT_YOUTRACK_URL,
    ISSUE_BULLET_TEMPLATE,
    SECURITY_BULLETIN_TEMPLATE,
    SECURITY_DETAILS,
    SECURITY_SENTENCE_FALLBACK,
    SECURITY_SENTENCES,
    TITLE_LINE_TEMPLATE,
)
from ..utils.helpers import format_release_date
from .filter import records_from_filtered_lines
from .models import RENDERED_ISSUE_TYPES, IssueRecord, IssueType

logger = structlog.get_logger(__name__)


def security_sentence(count: int) -> str:
    """Return the worded sentence for a number of fixed security problems."""
    return SECURITY_SENTENCES.get(count, SECURITY_SENTENCE_FALLBACK.format(count=count))


class ReleaseNotesRenderer:
    """Renders issue records into a release notes Markdown document."""

    def __init__(self, tracker_url: str = DEFAULT_YOUTRACK_URL) -> None:
        """Initialize with the tracker base URL used for issue links."""
        self.tracker_url = tracker_url.rstrip("/")

    def render_header(self, short_version: str, build_number: str, release_date: str) -> list[str]:
        """Render the metadata comments and the build line."""
        return [
            TITLE_LINE_TEMPLATE.format(short_version=short_version),
            AUXILIARY_ID_LINE_TEMPLATE.format(short_version=short_version),
            "",
            "",
            BUILD_LINE_TEMPLATE.format(build_number=build_number, release_date=release_date),
        ]

    def render_issue(self, issue: IssueRecord) -> str:
        """Render a single issue bullet."""
        return ISSUE_BULLET_TEMPLATE.format(issue_id=issue.id, tracker_url=self.tracker_url, summary=issue.summary)

    def render_sections(self, issues: Sequence[IssueRecord]) -> list[str]:
        """Render one section per non-empty issue type, in fixed type order."""
        lines: list[str] = []
        for issue_type in RENDERED_ISSUE_TYPES:
            section_issues = [issue for issue in issues if issue.type is issue_type]
            logger.debug("Counted issues", type=issue_type.value, count=len(section_issues))
            if not section_issues:
                continue
            lines.extend(["", f"### {issue_type.value}", ""])
            lines.extend(self.render_issue(issue) for issue in section_issues)
        return lines

    def render_security(self, short_version: str, security_count: int) -> list[str]:
        """Render the security section."""
        return [
            "",
            "### Security",
            "",
            f"{security_sentence(security_count)} {SECURITY_DETAILS}",
            "",
            SECURITY_BULLETIN_TEMPLATE.format(short_version=short_version),
        ]

    def render(
        self,
        issues: Sequence[IssueRecord],
        build_number: str,
        short_version: str,
        security_count: int,
        release_date: str | None = None,
    ) -> str:
        """Render the complete release notes document.

        Args:
            issues: Issues fixed in the release, in tracker order
            build_number: Build number shown in the build line
            short_version: Human-readable version, e.g. `2025.03.1`
            security_count: Number of fixed security problems, -1 if unknown
            release_date: Release date text; today's date when omitted

        Returns:
            Markdown lines joined with a newline
        """
        if not release_date:
            release_date = format_release_date(date.today())

        skipped = sum(1 for issue in issues if issue.type is IssueType.OTHER)
        if skipped:
            logger.info("Issues without a rendered type are left out", count=skipped)

        lines = self.render_header(short_version, build_number, release_date)
        lines.extend(self.render_sections(issues))
        lines.extend(self.render_security(short_version, security_count))
        logger.info("Rendered release notes", short_version=short_version, line_count=len(lines))
        return "\n".join(lines)

    def render_from_filtered_lines(
        self,
        lines: Sequence[str],
        build_number: str,
        short_version: str,
        security_count: int,
        release_date: str | None = None,
    ) -> str:
        """Render release notes from the filtered summary, id, type line sequence."""
        return self.render(records_from_filtered_lines(lines), build_number, short_version, security_count, release_date)
