"""Pull request model and the size metrics used for complexity scoring."""

from datetime import datetime

from pydantic import BaseModel, Field


class PullRequestRef(BaseModel):
    """One side (base or head) of a pull request."""

    ref: str
    sha: str
    owner: str
    # Clone URL of the head repository; None when the fork was deleted
    remote_url: str | None = None


class ComplexityMetrics(BaseModel):
    """Change-size metrics of one pull request."""

    additions: int = Field(default=0, ge=0)
    changed_files: int = Field(default=0, ge=0)
    comments: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)
    review_comments: int = Field(default=0, ge=0)


class PullRequest(BaseModel):
    """Pull request as read from the hosting service.

    Size metrics are only filled by the single pull request endpoint;
    listings leave them None. combined_status and complexity are set
    client side while listing.
    """

    number: int
    title: str
    body: str = ""
    state: str
    base: PullRequestRef
    head: PullRequestRef
    author: str
    html_url: str | None = None
    created_at: datetime | None = None
    mergeable_state: str | None = None
    combined_status: str | None = None
    complexity: int | None = None

    additions: int | None = None
    changed_files: int | None = None
    comments: int | None = None
    deletions: int | None = None
    review_comments: int | None = None

    def metrics(self) -> ComplexityMetrics:
        """Size metrics with absent values read as 0."""
        return ComplexityMetrics(
            additions=self.additions or 0,
            changed_files=self.changed_files or 0,
            comments=self.comments or 0,
            deletions=self.deletions or 0,
            review_comments=self.review_comments or 0,
        )
