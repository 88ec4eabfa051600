"""Contains utility functions for GitHub interactions."""

import base64


async def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Splits the documentation repository in the configuration into owner and repository."""
    if repo is None:
        raise ValueError("A documentation repository (owner/repo) is required.")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository


def encode_file_content(content: str) -> str:
    """Base64-encode file content for the GitHub Contents API."""
    return base64.b64encode(content.encode("utf-8")).decode("utf-8")


def decode_file_content(content: str) -> str:
    """Decode base64 file content returned by the GitHub Contents API."""
    return base64.b64decode(content).decode("utf-8")
