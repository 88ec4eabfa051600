"""Shared constants used across the application."""

# This file is intended to hold shared constants.

# Issue Tracker Constants
# -----------------------

DEFAULT_YOUTRACK_URL = "https://youtrack.jetbrains.com"
"""Base URL of the YouTrack instance; issue links are rendered relative to it."""

DEFAULT_YOUTRACK_PROJECT = "TeamCity"
"""YouTrack project queried for fixed issues."""

DEFAULT_VERSION_BUNDLE_ID = "128-1"
"""ID of the YouTrack version bundle that lists product versions."""

ISSUE_FIELDS = "idReadable,summary,customFields(value(name),name)"
"""Fields requested for every issue in the fix-version query."""

FIX_VERSION_QUERY_TEMPLATE = "Project: {project} Fix versions: {version} visible to: {{All Users}} #Fixed #Testing -{{Trunk issue}}"
"""Issue query for issues fixed in a version. `{version}` receives the escaped full version."""

SECURITY_COUNT_QUERY_TEMPLATE = "project: {project} Fix versions: {version}  #Testing #Fixed -{{Trunk issue}} #{{Security Problem}}"
"""Count query for security problems fixed in a version."""

DEFAULT_HTTP_TIMEOUT = 30.0
"""Timeout in seconds applied to every tracker request."""

# Line Pipeline Constants
# -----------------------

FIELD_MARKERS = ('"summary"', '"idReadable"', '"customFields"', '"value"')
"""Markers that start a new line when the raw tracker response is split."""

SUMMARY_MARKER = '"summary"'
ID_MARKER = '"idReadable"'

TYPE_FIELD_MARKER = '"name":"Type","$type":"SingleEnumIssueCustomField"'
"""Literal that identifies the line carrying the value of the Type custom field."""

FILTER_REMOVALS = (
    '"summary":"',
    '",',
    '"idReadable":"',
    '"value":{"name":"',
    '"$type":"EnumBundleElement"},"name":"Type"$type":"SingleEnumIssueCustomField"},{',
)
"""Substrings stripped, in this order, from each kept line to leave the bare value."""

# Release Notes Constants
# -----------------------

RELEASE_DATE_FORMAT = "{day} {month} {year}"
"""Release date layout, e.g. `5 April 2025`."""

TITLE_LINE_TEMPLATE = "[//]: # (title: TeamCity {short_version} Release Notes)"
AUXILIARY_ID_LINE_TEMPLATE = "[//]: # (auxiliary-id: TeamCity {short_version} Release Notes)"
BUILD_LINE_TEMPLATE = "**Build {build_number}, {release_date}**"
ISSUE_BULLET_TEMPLATE = "* [**{issue_id}**]({tracker_url}/issue/{issue_id}) — {summary}"

SECURITY_SENTENCES: dict[int, str] = {
    -1: "Sorry, we could not determine how many security problems have been fixed in this release.",
    1: "One security problem has been fixed.",
    2: "Two security problems have been fixed.",
    3: "Three security problems have been fixed.",
    4: "Four security problems have been fixed.",
    5: "Five security problems have been fixed.",
    6: "Six security problems have been fixed.",
    7: "Seven security problems have been fixed.",
    8: "Eight security problems have been fixed.",
    9: "Nine security problems have been fixed.",
}
"""Worded security sentences. Counts missing from the table fall back to SECURITY_SENTENCE_FALLBACK."""

SECURITY_SENTENCE_FALLBACK = "{count} security problems have been fixed."

SECURITY_DETAILS = (
    "This number includes both native TeamCity issues and vulnerabilities found in 3rd-party libraries TeamCity depends on. "
    "Upstream library issues usually make up the majority of this total number, "
    "and are promptly resolved by updating these libraries to their newest versions."
)

SECURITY_BULLETIN_TEMPLATE = (
    "To learn more about fixed vulnerabilities directly related to TeamCity, check out our "
    "[Security Bulletin](https://www.jetbrains.com/privacy-security/issues-fixed/?product=TeamCity&version={short_version}). "
    "Security bulletins for new versions are typically published within the next few days after the release date."
)

# Table of Contents Constants
# ---------------------------

WHATS_NEW_TOC_ANCHOR = '<toc-element topic="what-s-new-in-teamcity.md">'
"""TOC line under which major release notes are inserted."""

TOC_ELEMENT_TEMPLATE = '<toc-element topic="{topic}"/>'

RELEASE_NOTES_TOPIC_TEMPLATE = "teamcity-{slug}-release-notes.md"

# Documentation Repository Constants
# ----------------------------------

DEFAULT_DOCS_REPO = "JetBrains/teamcity-documentation"
DEFAULT_DOCS_TOPICS_DIR = "topics"
DEFAULT_DOCS_TOC_PATH = "tc.tree"
DEFAULT_TARGET_BRANCH = "auto-release-notes"
DEFAULT_PULL_REQUEST_TITLE = "Autogenerated Release Notes"
DEFAULT_COMMIT_MESSAGE_TEMPLATE = "Add release notes for TeamCity {short_version}"

# Artifact names
RAW_RESPONSE_ARTIFACT = "response.txt"
FORMATTED_RESPONSE_ARTIFACT = "formatted_response.txt"
FILTERED_RESPONSE_ARTIFACT = "filtered_response.txt"
MARKDOWN_ARTIFACT = "markdown.md"
TOC_ARTIFACT = "tc.tree"
