"""GitHub client adapter for the documentation repository, built on githubkit."""

from functools import wraps
from pathlib import Path
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import GitHubException, RequestFailed
from githubkit.versions.latest.models import PullRequest

from release_notes_publisher.configuration.models import GitHubAuthenticationType
from release_notes_publisher.release_notes.exceptions import FetchFailureError
from release_notes_publisher.utils.github import decode_file_content, encode_file_content, split_repository_in_configuration
from release_notes_publisher.utils.retry import retry_idempotent_request

from .abc import DocsRepositoryClientBase
from .client import GitHubClient, get_github_client

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_github_errors(func: F) -> F:
    """Decorator turning failed GitHub API calls into FetchFailureError, logging the details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            try:
                error_data = exc.response.json()
            except Exception:
                error_data = {}
            message = error_data.get("message", "Request failed") if isinstance(error_data, dict) else "Request failed"
            raw_url = getattr(exc.response, "url", None)
            url = str(raw_url) if raw_url is not None else None
            logger.error(
                "GitHub request failed",
                function=func.__name__,
                message=message,
                url=url,
                status_code=exc.response.status_code,
            )
            raise FetchFailureError(f"GitHub error in {func.__name__}: {message}", status_code=exc.response.status_code, url=url) from exc
        except GitHubException as exc:
            logger.error("GitHub request could not be completed", function=func.__name__, error=str(exc))
            raise FetchFailureError(f"GitHub error in {func.__name__}: {exc}") from exc

    return wrapper  # type: ignore


class DocsRepositoryAdapter(DocsRepositoryClientBase):
    """Documentation repository adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @classmethod
    async def create(
        cls,
        repo: str,
        github_auth_type: GitHubAuthenticationType,
        github_pat_token: str | None = None,
        github_app_id: int | None = None,
        github_app_private_key_path: Path | None = None,
        github_app_installation_id: int | None = None,
        github_api_url: str = "https://api.github.com",
    ) -> Self:
        """Create a new documentation repository adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_auth_type: Type of authentication (PAT or APP)
            github_pat_token: Personal access token (required for PAT auth)
            github_app_id: GitHub App ID (required for APP auth)
            github_app_private_key_path: Path to private key file (required for APP auth)
            github_app_installation_id: Installation ID (required for APP auth)
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured DocsRepositoryAdapter instance
        """
        owner, repo_name = await split_repository_in_configuration(repo=repo)
        logger.info(
            "Creating client for documentation repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        client = await get_github_client(
            github_auth_type=github_auth_type,
            github_pat_token=github_pat_token,
            github_app_id=github_app_id,
            github_app_private_key_path=github_app_private_key_path,
            github_app_installation_id=github_app_installation_id,
            github_api_url=github_api_url,
        )
        return cls(client, owner, repo_name)

    # File contents
    @handle_github_errors
    @retry_idempotent_request()
    async def get_file_content(self, file_path: str, branch: str) -> str:
        """Get the content of a file from a specific branch."""
        response = await self.client.rest.repos.async_get_content(
            owner=self.owner,
            repo=self.repo_name,
            path=file_path,
            ref=branch,
        )
        content = getattr(response.parsed_data, "content", None)
        if content is None:
            raise FetchFailureError(f"'{file_path}' on branch '{branch}' is not a file")
        return decode_file_content(content)

    @handle_github_errors
    @retry_idempotent_request()
    async def get_file_sha(self, file_path: str, branch: str) -> str | None:
        """Get the SHA of a file on a branch (required to update it), or None for a new file."""
        try:
            response = await self.client.rest.repos.async_get_content(
                owner=self.owner,
                repo=self.repo_name,
                path=file_path,
                ref=branch,
            )
        except RequestFailed as exc:
            if exc.response.status_code == 404:
                return None
            raise
        return getattr(response.parsed_data, "sha", None)

    # Branches
    @handle_github_errors
    @retry_idempotent_request()
    async def get_branch_head_sha(self, branch: str) -> str:
        """Get the SHA of the latest commit on a branch."""
        response = await self.client.rest.git.async_get_ref(owner=self.owner, repo=self.repo_name, ref=f"heads/{branch}")
        return response.parsed_data.object_.sha

    @handle_github_errors
    @retry_idempotent_request()
    async def branch_exists(self, branch_name: str) -> bool:
        """Check if a branch exists in the repository."""
        try:
            await self.client.rest.repos.async_get_branch(owner=self.owner, repo=self.repo_name, branch=branch_name)
        except RequestFailed as exc:
            if exc.response.status_code == 404:
                return False
            raise
        return True

    @handle_github_errors
    async def create_branch(self, branch_name: str, base_branch: str) -> None:
        """Create a new branch from the head commit of the base branch."""
        sha = await self.get_branch_head_sha(base_branch)
        logger.info("Fetched base branch head", base_branch=base_branch, sha=sha)
        await self.client.rest.git.async_create_ref(
            owner=self.owner,
            repo=self.repo_name,
            ref=f"refs/heads/{branch_name}",
            sha=sha,
        )
        logger.info("Created branch", branch=branch_name, base_branch=base_branch)

    # Commits
    @handle_github_errors
    async def commit_files_to_branch(
        self,
        branch_name: str,
        files: list[tuple[str, str]],  # (file_path, file_content)
        commit_message: str,
    ) -> None:
        """Commit or update files on a branch using the GitHub Contents API."""
        for file_path, file_content in files:
            file_sha = await self.get_file_sha(file_path, branch_name)
            params: dict[str, Any] = {
                "owner": self.owner,
                "repo": self.repo_name,
                "path": file_path,
                "message": commit_message,
                "content": encode_file_content(file_content),
                "branch": branch_name,
            }
            if file_sha:
                params["sha"] = file_sha
            await self.client.rest.repos.async_create_or_update_file_contents(**params)
            logger.info("Committed file to branch", file=file_path, branch=branch_name, updated=bool(file_sha))

    # Pull requests
    @handle_github_errors
    async def create_pull_request(self, title: str, head: str, base: str, body: str | None = None, **kwargs: Any) -> PullRequest:
        """Create a pull request for the documentation repository."""
        params = {k: v for k, v in {"body": body, **kwargs}.items() if v is not None}
        response: Response[PullRequest] = await self.client.rest.pulls.async_create(
            owner=self.owner,
            repo=self.repo_name,
            title=title,
            head=head,
            base=base,
            **params,
        )
        logger.info("Created pull request", number=response.parsed_data.number, head=head, base=base)
        return response.parsed_data
