"""Parse the tracker response into issue records."""

from collections import Counter

import structlog
from pydantic import TypeAdapter, ValidationError

from .exceptions import IssueParsingError
from .models import IssueRecord, IssueType, YouTrackIssue

logger = structlog.get_logger(__name__)

_ISSUE_LIST_ADAPTER = TypeAdapter(list[YouTrackIssue])


def parse_issue_records(raw_json: str) -> list[IssueRecord]:
    """Parse the raw issues response into IssueRecords, preserving response order.

    Args:
        raw_json: Body of the tracker issues endpoint (a JSON array of issues)

    Returns:
        One IssueRecord per issue

    Raises:
        IssueParsingError: If the response is not a valid issue list
    """
    try:
        issues = _ISSUE_LIST_ADAPTER.validate_json(raw_json)
    except ValidationError as exc:
        logger.error("Failed to parse tracker response", error_count=exc.error_count())
        raise IssueParsingError(f"Tracker response is not a valid issue list: {exc}") from exc

    records = [
        IssueRecord(
            id=issue.id_readable,
            summary=issue.summary,
            type=IssueType.from_label(issue.type_label()),
        )
        for issue in issues
    ]
    counts = Counter(record.type.value for record in records)
    logger.info("Parsed issues from tracker response", total=len(records), types=dict(counts))
    return records
