"""Exceptions raised by the release notes pipeline."""


class ReleaseNotesError(Exception):
    """Base class for release notes pipeline errors."""

    pass


class MalformedVersionError(ReleaseNotesError):
    """Raised when a version string cannot be classified into a release type."""

    def __init__(self, version_input: str, reason: str) -> None:
        """Initializes the exception with the offending version string."""
        super().__init__(f"Malformed version '{version_input}': {reason}")
        self.version_input = version_input
        self.reason = reason


class FetchFailureError(ReleaseNotesError):
    """Raised when the issue tracker or documentation host returns a non-success response."""

    def __init__(self, message: str, status_code: int | None = None, url: str | None = None) -> None:
        """Initializes the exception with response details, when known."""
        details = message
        if status_code is not None:
            details += f" (status {status_code})"
        if url is not None:
            details += f" [{url}]"
        super().__init__(details)
        self.status_code = status_code
        self.url = url


class AnchorNotFoundError(ReleaseNotesError):
    """Raised when the table of contents does not contain the anchor line."""

    def __init__(self, anchor_line: str) -> None:
        """Initializes the exception with the missing anchor."""
        super().__init__(f"The anchor '{anchor_line}' was not found in the table of contents")
        self.anchor_line = anchor_line


class MissingInputFileError(ReleaseNotesError):
    """Raised when an expected pipeline input file is absent."""

    def __init__(self, path: str) -> None:
        """Initializes the exception with the missing path."""
        super().__init__(f"Input file not found: {path}")
        self.path = path


class IssueParsingError(ReleaseNotesError):
    """Raised when the tracker response cannot be parsed into issues."""

    pass
