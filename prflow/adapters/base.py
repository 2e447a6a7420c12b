"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod
from typing import List

from prflow.models import Comment, CreatePullRequest, PullRequest, Repository


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitPlatformNotFoundError(GitPlatformError):
    """Raised when the platform answers 404 (missing or inaccessible)."""

    pass


class GitPlatformAdapter(ABC):
    """Hosting API capabilities used by the pull request workflows."""

    @abstractmethod
    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequest:
        """Fetch one pull request, including its size metrics."""
        ...

    @abstractmethod
    def list_pull_requests(
        self,
        owner: str,
        repo: str,
        state: str = "open",
        sort: str = "created",
        direction: str = "desc",
    ) -> List[PullRequest]:
        """List all pull requests matching the state, sorted remotely."""
        ...

    @abstractmethod
    def create_pull_request(self, owner: str, repo: str, request: CreatePullRequest) -> PullRequest:
        """Create a pull request (or convert an issue into one)."""
        ...

    @abstractmethod
    def update_pull_request(
        self,
        owner: str,
        repo: str,
        number: int,
        title: str,
        body: str | None,
        state: str,
    ) -> PullRequest:
        """Update title, body and state of a pull request."""
        ...

    @abstractmethod
    def get_combined_status(self, owner: str, repo: str, sha: str) -> str | None:
        """Return the combined CI state of a commit (success, failure, pending)."""
        ...

    @abstractmethod
    def list_repositories(self, user: str | None = None, org: str | None = None) -> List[Repository]:
        """List all repositories of an organization, or else of a user."""
        ...

    @abstractmethod
    def create_comment(self, owner: str, repo: str, number: int, body: str) -> Comment:
        """Post a comment on a pull request."""
        ...

    def get_authenticated_login(self) -> str:
        """Login of the token owner. Override if needed."""
        raise NotImplementedError("get_authenticated_login")
