"""Fixtures for unit tests."""

import json
from pathlib import Path
from typing import Any, Generator

import pytest
import structlog

from release_notes_publisher.configuration.models import GitHubAuthenticationType, ReleaseNotesConfig


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


def make_issue(issue_id: str, summary: str, type_name: str) -> dict[str, Any]:
    """Build an issue object shaped like the YouTrack issues endpoint returns it."""
    return {
        "summary": summary,
        "idReadable": issue_id,
        "customFields": [
            {
                "value": {"name": type_name, "$type": "EnumBundleElement"},
                "name": "Type",
                "$type": "SingleEnumIssueCustomField",
            },
            {
                "value": {"name": "Major", "$type": "EnumBundleElement"},
                "name": "Priority",
                "$type": "SingleEnumIssueCustomField",
            },
        ],
        "$type": "Issue",
    }


@pytest.fixture
def issue_factory() -> Any:
    """Factory for YouTrack-shaped issue objects."""
    return make_issue


@pytest.fixture
def raw_issues_response() -> str:
    """Compact JSON response with three issues of distinct types."""
    issues = [
        make_issue("TW-1", "Summary A", "Bug"),
        make_issue("TW-2", "Summary B", "Feature"),
        make_issue("TW-3", "Summary C", "Performance Problem"),
    ]
    return json.dumps(issues, separators=(",", ":"))


@pytest.fixture
def release_notes_config(tmp_path: Path) -> ReleaseNotesConfig:
    """A reconciled configuration writing artifacts to a temporary directory."""
    return ReleaseNotesConfig(
        version="2025.03.2",
        build_number=None,
        release_date="5 April 2025",
        file_name=None,
        youtrack_url="https://youtrack.example.com",
        youtrack_token="yt-token",
        youtrack_project="TeamCity",
        docs_repo="JetBrains/teamcity-documentation",
        source_branch="main",
        target_branch=None,
        topics_dir="topics",
        toc_path="tc.tree",
        github_api_url="https://api.github.com",
        github_authentication_type=GitHubAuthenticationType.PAT,
        github_pat_token="gh-token",
        github_app_id=None,
        github_app_private_key_path=None,
        github_app_installation_id=None,
        output_dir=tmp_path / "out",
    )
