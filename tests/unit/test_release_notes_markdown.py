"""Unit tests for the release notes Markdown renderer."""

from datetime import date

import pytest

from release_notes_publisher.release_notes.markdown import ReleaseNotesRenderer, security_sentence
from release_notes_publisher.release_notes.models import IssueRecord, IssueType
from release_notes_publisher.utils.constants import SECURITY_SENTENCES

TRACKER_URL = "https://youtrack.example.com"


@pytest.fixture
def renderer() -> ReleaseNotesRenderer:
    """Renderer linking issues to a test tracker."""
    return ReleaseNotesRenderer(TRACKER_URL)


@pytest.mark.parametrize(
    "count,expected",
    [
        (1, "One security problem has been fixed."),
        (3, "Three security problems have been fixed."),
        (9, "Nine security problems have been fixed."),
        (0, "0 security problems have been fixed."),
        (10, "10 security problems have been fixed."),
        (42, "42 security problems have been fixed."),
    ],
)
def test_security_sentence(count: int, expected: str) -> None:
    """Test the worded security sentence for known and fallback counts."""
    assert security_sentence(count) == expected


def test_security_sentence_unknown_count() -> None:
    """Test that an unknown count renders the apology sentence."""
    assert security_sentence(-1) == SECURITY_SENTENCES[-1]
    assert security_sentence(-1).startswith("Sorry, we could not determine")


def test_render_from_filtered_lines_groups_by_type(renderer: ReleaseNotesRenderer) -> None:
    """Test that filtered triples render into Feature and Bug sections only."""
    markdown = renderer.render_from_filtered_lines(
        ["Summary A", "ID-1", "Bug", "Summary B", "ID-2", "Feature"],
        build_number="124153",
        short_version="2025.03",
        security_count=3,
        release_date="5 April 2025",
    )
    lines = markdown.split("\n")
    assert "### Feature" in lines
    assert "### Bug" in lines
    assert "### Task" not in lines
    assert "### Performance Problem" not in lines
    assert f"* [**ID-2**]({TRACKER_URL}/issue/ID-2) — Summary B" in lines
    assert f"* [**ID-1**]({TRACKER_URL}/issue/ID-1) — Summary A" in lines
    assert lines.index("### Feature") < lines.index(f"* [**ID-2**]({TRACKER_URL}/issue/ID-2) — Summary B") < lines.index("### Bug")


def test_render_full_document(renderer: ReleaseNotesRenderer) -> None:
    """Test the exact layout of a rendered document."""
    issues = [
        IssueRecord(id="TW-3", summary="Slow agent startup", type=IssueType.PERFORMANCE_PROBLEM),
        IssueRecord(id="TW-1", summary="Crash on save", type=IssueType.BUG),
        IssueRecord(id="TW-2", summary="New runner", type=IssueType.FEATURE),
        IssueRecord(id="TW-4", summary="Crash on load", type=IssueType.BUG),
    ]
    markdown = renderer.render(issues, build_number="124200", short_version="2025.03.1", security_count=2, release_date="5 April 2025")
    lines = markdown.split("\n")
    assert lines[:5] == [
        "[//]: # (title: TeamCity 2025.03.1 Release Notes)",
        "[//]: # (auxiliary-id: TeamCity 2025.03.1 Release Notes)",
        "",
        "",
        "**Build 124200, 5 April 2025**",
    ]
    assert lines[5:17] == [
        "",
        "### Feature",
        "",
        f"* [**TW-2**]({TRACKER_URL}/issue/TW-2) — New runner",
        "",
        "### Bug",
        "",
        f"* [**TW-1**]({TRACKER_URL}/issue/TW-1) — Crash on save",
        f"* [**TW-4**]({TRACKER_URL}/issue/TW-4) — Crash on load",
        "",
        "### Performance Problem",
        "",
    ]
    assert lines[17] == f"* [**TW-3**]({TRACKER_URL}/issue/TW-3) — Slow agent startup"
    assert lines[18:21] == ["", "### Security", ""]
    assert lines[21].startswith("Two security problems have been fixed. This number includes")
    assert lines[22] == ""
    assert "version=2025.03.1" in lines[23]
    assert len(lines) == 24
    assert not markdown.endswith("\n")


def test_render_skips_other_issue_types(renderer: ReleaseNotesRenderer) -> None:
    """Test that issues without a rendered type produce no section."""
    issues = [IssueRecord(id="TW-9", summary="Docs tweak", type=IssueType.OTHER)]
    markdown = renderer.render(issues, build_number="0", short_version="2025.03", security_count=-1, release_date="1 March 2025")
    assert "TW-9" not in markdown
    assert "###" in markdown
    assert "### Security" in markdown
    assert SECURITY_SENTENCES[-1] in markdown


def test_render_defaults_release_date_to_today(renderer: ReleaseNotesRenderer) -> None:
    """Test that the build line carries today's date when none is given."""
    today = date.today()
    markdown = renderer.render([], build_number="1", short_version="2025.03", security_count=0)
    assert f"**Build 1, {today.day} {today.strftime('%B')} {today.year}**" in markdown


def test_tracker_url_trailing_slash_is_trimmed() -> None:
    """Test that issue links never contain a double slash."""
    issue = IssueRecord(id="TW-1", summary="S", type=IssueType.BUG)
    assert ReleaseNotesRenderer(TRACKER_URL + "/").render_issue(issue) == f"* [**TW-1**]({TRACKER_URL}/issue/TW-1) — S"
