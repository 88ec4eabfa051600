"""Release notes generation module.

The generator and publisher are imported from their modules directly, as they
depend on the YouTrack and GitHub clients.
"""

from .exceptions import (
    AnchorNotFoundError,
    FetchFailureError,
    IssueParsingError,
    MalformedVersionError,
    MissingInputFileError,
    ReleaseNotesError,
)
from .extractor import parse_issue_records
from .filter import filter_lines, records_from_filtered_lines
from .markdown import ReleaseNotesRenderer, security_sentence
from .models import (
    IssueRecord,
    IssueType,
    ReleaseIdentity,
    ReleaseNotesFileConfig,
    ReleaseNotesResult,
    ReleaseNotesStatus,
    ReleaseType,
)
from .splitter import split_on_markers
from .toc import TocUpdate, insert_toc_entry
from .version import resolve_release_identity

__all__ = [
    "ReleaseNotesError",
    "MalformedVersionError",
    "FetchFailureError",
    "AnchorNotFoundError",
    "MissingInputFileError",
    "IssueParsingError",
    "ReleaseType",
    "IssueType",
    "ReleaseIdentity",
    "IssueRecord",
    "ReleaseNotesStatus",
    "ReleaseNotesFileConfig",
    "ReleaseNotesResult",
    "resolve_release_identity",
    "split_on_markers",
    "filter_lines",
    "records_from_filtered_lines",
    "parse_issue_records",
    "ReleaseNotesRenderer",
    "security_sentence",
    "TocUpdate",
    "insert_toc_entry",
]
