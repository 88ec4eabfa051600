"""Data models for release notes generation."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..utils.constants import (
    DEFAULT_COMMIT_MESSAGE_TEMPLATE,
    DEFAULT_DOCS_TOC_PATH,
    DEFAULT_DOCS_TOPICS_DIR,
    DEFAULT_PULL_REQUEST_TITLE,
)


class ReleaseType(str, Enum):
    """Kind of release, derived from the number of version components."""

    MAJOR = "major"
    FIRST_BUGFIX = "firstBugfix"
    BUGFIX = "bugfix"


class IssueType(str, Enum):
    """Value of the tracker's Type custom field."""

    FEATURE = "Feature"
    TASK = "Task"
    BUG = "Bug"
    PERFORMANCE_PROBLEM = "Performance Problem"
    OTHER = "other"

    @classmethod
    def from_label(cls, label: str | None) -> "IssueType":
        """Map a tracker type label to an IssueType, defaulting to OTHER."""
        for issue_type in cls:
            if issue_type is not cls.OTHER and issue_type.value == label:
                return issue_type
        return cls.OTHER


RENDERED_ISSUE_TYPES = (IssueType.FEATURE, IssueType.TASK, IssueType.BUG, IssueType.PERFORMANCE_PROBLEM)
"""Issue types that get a release notes section, in section order."""


class ReleaseIdentity(BaseModel):
    """Everything derived from the version string of a single run."""

    model_config = ConfigDict(frozen=True)

    raw_version_input: str
    short_version: str
    build_number: str
    full_version: str
    full_version_escaped: str
    release_type: ReleaseType
    toc_anchor_line: str
    toc_insert_line: str
    doc_file_name: str


class IssueRecord(BaseModel):
    """An issue fixed in the release."""

    model_config = ConfigDict(frozen=True)

    id: str
    summary: str
    type: IssueType


class YouTrackFieldValue(BaseModel):
    """Value of an enum custom field as returned by YouTrack."""

    name: str | None = None


class YouTrackCustomField(BaseModel):
    """Custom field entry of a YouTrack issue."""

    name: str | None = None
    value: Any = None

    def value_name(self) -> str | None:
        """Return the enum value name, if the field holds a single enum value."""
        if isinstance(self.value, dict):
            return YouTrackFieldValue.model_validate(self.value).name
        return None


class YouTrackIssue(BaseModel):
    """Issue object from the YouTrack issues endpoint."""

    id_readable: str = Field(alias="idReadable")
    summary: str = ""
    custom_fields: list[YouTrackCustomField] = Field(default_factory=list, alias="customFields")

    def type_label(self) -> str | None:
        """Return the value of the Type custom field."""
        for field in self.custom_fields:
            if field.name == "Type":
                return field.value_name()
        return None


class ReleaseNotesStatus(str, Enum):
    """Status of release notes generation."""

    SUCCESS = "success"
    ERROR = "error"
    DRY_RUN = "dry_run"


@dataclass
class ReleaseNotesFileConfig:
    """Configuration for documentation repository file handling."""

    topics_dir: str = DEFAULT_DOCS_TOPICS_DIR
    toc_path: str = DEFAULT_DOCS_TOC_PATH
    commit_message_template: str = DEFAULT_COMMIT_MESSAGE_TEMPLATE
    pr_title: str = DEFAULT_PULL_REQUEST_TITLE

    def doc_path(self, doc_file_name: str) -> str:
        """Return the repository path of a release notes article."""
        return f"{self.topics_dir.rstrip('/')}/{doc_file_name}"


class ReleaseNotesResult(BaseModel):
    """Result of release notes generation."""

    status: ReleaseNotesStatus
    pr_url: str | None = None
    version: str | None = None
    error: str | None = None
    generated_content: str | None = None
    toc_modified: bool = False
    issue_count: int = 0
    security_count: int | None = None
