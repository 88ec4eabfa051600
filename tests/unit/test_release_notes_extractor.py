"""Unit tests for parsing tracker responses into issue records."""

import json
from typing import Any, Callable

import pytest

from release_notes_publisher.release_notes.exceptions import IssueParsingError
from release_notes_publisher.release_notes.extractor import parse_issue_records
from release_notes_publisher.release_notes.models import IssueRecord, IssueType


def test_parse_preserves_response_order(raw_issues_response: str) -> None:
    """Test that issues are returned in response order with their types."""
    assert parse_issue_records(raw_issues_response) == [
        IssueRecord(id="TW-1", summary="Summary A", type=IssueType.BUG),
        IssueRecord(id="TW-2", summary="Summary B", type=IssueType.FEATURE),
        IssueRecord(id="TW-3", summary="Summary C", type=IssueType.PERFORMANCE_PROBLEM),
    ]


def test_parse_tolerates_field_order_and_formatting(issue_factory: Callable[..., dict[str, Any]]) -> None:
    """Test that key order and whitespace do not affect parsing."""
    issue = issue_factory("TW-7", 'Quote "inside", comma', "Task")
    reordered = {"customFields": issue["customFields"], "idReadable": issue["idReadable"], "summary": issue["summary"]}
    records = parse_issue_records(json.dumps([reordered], indent=2))
    assert records == [IssueRecord(id="TW-7", summary='Quote "inside", comma', type=IssueType.TASK)]


def test_parse_unknown_or_missing_type_is_other(issue_factory: Callable[..., dict[str, Any]]) -> None:
    """Test that issues without a known Type value map to OTHER."""
    unknown = issue_factory("TW-8", "Usability", "Usability Problem")
    untyped = {"idReadable": "TW-9", "summary": "No type", "customFields": [{"name": "Type", "value": None}]}
    records = parse_issue_records(json.dumps([unknown, untyped]))
    assert [record.type for record in records] == [IssueType.OTHER, IssueType.OTHER]


def test_parse_empty_list() -> None:
    """Test that an empty issue list parses to no records."""
    assert parse_issue_records("[]") == []


@pytest.mark.parametrize("raw", ["", "not json", '{"error":"bad"}', '[{"summary":"no id"}]'])
def test_parse_invalid_response_raises(raw: str) -> None:
    """Test that malformed responses raise IssueParsingError."""
    with pytest.raises(IssueParsingError):
        parse_issue_records(raw)
