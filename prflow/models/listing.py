"""Pull request listing grouped by base branch."""

from typing import List

from pydantic import BaseModel, Field

from prflow.models.pull_request import PullRequest


class BranchGroup(BaseModel):
    """Pull requests sharing one base branch."""

    name: str
    pulls: List[PullRequest] = Field(default_factory=list)
    total: int = 0


class RepositoryListing(BaseModel):
    """Listing of one repository; error is set when listing it failed."""

    owner: str
    repo: str
    branches: List[BranchGroup] = Field(default_factory=list)
    error: str | None = None

    @property
    def pulls(self) -> List[PullRequest]:
        return [pull for group in self.branches for pull in group.pulls]
