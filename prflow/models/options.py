"""Resolved per-invocation options of a pull request workflow.

One WorkflowOptions instance is threaded through a single run. Pipelines
write run-time fields (submitted_pull, current_sha, ...) so post hooks can
reference them.
"""

from pydantic import BaseModel, Field


class WorkflowOptions(BaseModel):
    """Options of one workflow run, with defaults for everything optional."""

    # Repository context
    user: str | None = Field(default=None, description="Owner of the repository")
    repo: str | None = None
    org: str | None = None
    logged_user: str | None = Field(default=None, description="Login of the authenticated user")
    branch: str | None = Field(default=None, description="Base branch")
    current_branch: str | None = Field(default=None, description="Checked-out local branch")

    # Derived by the orchestrator when not given
    number: int | None = None
    pull_branch: str | None = None

    # Listing
    state: str | None = None
    sort: str | None = None
    direction: str | None = None
    all: bool = False
    me: bool = False
    link: bool = False
    detailed: bool = False

    # Actions; an empty string target means "use the configured default"
    browser: bool = False
    close: bool = False
    comment: str | None = None
    fetch: bool = False
    merge: bool = False
    rebase: bool = False
    forward: str | None = None
    info: bool = False
    list: bool = False
    open: bool = False
    submit: str | None = None

    # Submit inputs
    title: str | None = None
    description: str | None = None
    issue: int | None = None

    # Written while running
    submitted_user: str | None = None
    submitted_pull: int | None = None
    forwarded_pull: int | None = None
    current_sha: str | None = None
    changes: int | None = None
    pull_head_sha: str | None = None
