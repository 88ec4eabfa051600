"""Filters split tracker output down to bare summary, id and type values."""

from collections.abc import Iterable, Sequence

import structlog

from ..utils.constants import FILTER_REMOVALS, ID_MARKER, SUMMARY_MARKER, TYPE_FIELD_MARKER
from .models import IssueRecord, IssueType

logger = structlog.get_logger(__name__)


def is_relevant_line(line: str) -> bool:
    """Return True for summary, id and Type custom field lines."""
    trimmed = line.strip()
    return trimmed.startswith(SUMMARY_MARKER) or trimmed.startswith(ID_MARKER) or TYPE_FIELD_MARKER in line


def strip_json_fragments(line: str, removals: Sequence[str] = FILTER_REMOVALS) -> str:
    """Remove the known key and punctuation fragments from a kept line."""
    for fragment in removals:
        line = line.replace(fragment, "")
    return line.strip()


def filter_lines(lines: Iterable[str]) -> list[str]:
    """Keep the relevant lines of split tracker output and reduce them to bare values."""
    filtered = [strip_json_fragments(line) for line in lines if is_relevant_line(line)]
    logger.debug("Filtered tracker response lines", kept=len(filtered))
    return filtered


def records_from_filtered_lines(lines: Sequence[str]) -> list[IssueRecord]:
    """Rebuild issue records from summary, id, type triples.

    Each line equal to a known type label is paired with the id on the line
    before it and the summary two lines before it.
    """
    records: list[IssueRecord] = []
    for index, line in enumerate(lines):
        issue_type = IssueType.from_label(line)
        if issue_type is IssueType.OTHER:
            continue
        if index < 2:
            logger.warning("Type line without a preceding summary and id", line=line, position=index)
            continue
        records.append(IssueRecord(id=lines[index - 1], summary=lines[index - 2], type=issue_type))
    return records
