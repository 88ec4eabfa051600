"""Generate release notes from YouTrack and publish them to a GitHub documentation repository."""

__version__ = "0.1.0"
