"""Request structures passed to the hosting adapter and the lister."""

from pydantic import BaseModel, model_validator


class CreatePullRequest(BaseModel):
    """Create a pull request from title/body, or convert an existing issue."""

    base: str
    head: str
    title: str | None = None
    body: str | None = None
    issue: int | None = None

    @model_validator(mode="after")
    def _title_or_issue(self) -> "CreatePullRequest":
        if self.issue is None and not self.title:
            raise ValueError("either title or issue is required")
        return self


class ListRequest(BaseModel):
    """What to list and how to order it."""

    state: str = "open"
    sort: str = "created"
    direction: str = "desc"
    mine: bool = False
    logged_user: str | None = None
    # Keep only pull requests against this base branch
    branch: str | None = None
