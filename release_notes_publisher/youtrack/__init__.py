"""YouTrack issue tracker access."""
