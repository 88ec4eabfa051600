"""GitHub access for the documentation repository."""
