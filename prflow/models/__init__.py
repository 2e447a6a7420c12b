"""Data models for pull requests, listings and workflow options (Pydantic)."""

from prflow.models.comment import Comment
from prflow.models.listing import BranchGroup, RepositoryListing
from prflow.models.options import WorkflowOptions
from prflow.models.outcome import ActionOutcome, WorkflowResult
from prflow.models.payloads import CreatePullRequest, ListRequest
from prflow.models.pull_request import ComplexityMetrics, PullRequest, PullRequestRef
from prflow.models.repository import Repository

__all__ = [
    "ActionOutcome",
    "BranchGroup",
    "Comment",
    "ComplexityMetrics",
    "CreatePullRequest",
    "ListRequest",
    "PullRequest",
    "PullRequestRef",
    "Repository",
    "RepositoryListing",
    "WorkflowOptions",
    "WorkflowResult",
]
