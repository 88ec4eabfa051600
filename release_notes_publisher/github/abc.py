"""Base ABC for documentation repository clients."""

from abc import ABC, abstractmethod
from typing import Any


class DocsRepositoryClientBase(ABC):
    """Operations the release notes publisher needs from a documentation host."""

    @abstractmethod
    async def get_file_content(self, file_path: str, branch: str) -> str:
        """Get the decoded content of a file on a branch."""
        pass

    @abstractmethod
    async def get_file_sha(self, file_path: str, branch: str) -> str | None:
        """Get the blob SHA of a file on a branch, or None if it does not exist."""
        pass

    @abstractmethod
    async def get_branch_head_sha(self, branch: str) -> str:
        """Get the SHA of the head commit of a branch."""
        pass

    @abstractmethod
    async def branch_exists(self, branch_name: str) -> bool:
        """Check if a branch exists."""
        pass

    @abstractmethod
    async def create_branch(self, branch_name: str, base_branch: str) -> None:
        """Create a branch from the head of the base branch."""
        pass

    @abstractmethod
    async def commit_files_to_branch(self, branch_name: str, files: list[tuple[str, str]], commit_message: str) -> None:
        """Create or update files on a branch."""
        pass

    @abstractmethod
    async def create_pull_request(self, title: str, head: str, base: str, body: str | None = None, **kwargs: Any) -> Any:
        """Open a pull request."""
        pass
