"""Git hosting platform adapters."""

from prflow.adapters.base import GitPlatformAdapter, GitPlatformError, GitPlatformNotFoundError
from prflow.adapters.github import GitHubAdapter

__all__ = ["GitPlatformAdapter", "GitPlatformError", "GitPlatformNotFoundError", "GitHubAdapter"]
