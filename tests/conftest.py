"""Shared fixtures: pull request factory and an in-memory hosting adapter."""

from datetime import datetime, timezone
from typing import Callable, Dict, List

import pytest

from prflow.adapters.base import GitPlatformAdapter, GitPlatformNotFoundError
from prflow.models import Comment, CreatePullRequest, PullRequest, PullRequestRef, Repository


def build_pull(
    number: int,
    state: str = "open",
    base_ref: str = "main",
    head_ref: str | None = None,
    base_sha: str = "base-sha",
    head_sha: str | None = None,
    base_owner: str = "octo",
    head_owner: str = "alice",
    author: str = "alice",
    **extra,
) -> PullRequest:
    """PullRequest with sensible defaults; extra fields override."""
    fields = dict(
        number=number,
        title=f"Pull {number}",
        body=f"Body {number}",
        state=state,
        base=PullRequestRef(ref=base_ref, sha=base_sha, owner=base_owner),
        head=PullRequestRef(
            ref=head_ref or f"feature-{number}",
            sha=head_sha or f"head-sha-{number}",
            owner=head_owner,
            remote_url=f"git@github.com:{head_owner}/repo.git",
        ),
        author=author,
        html_url=f"https://github.com/octo/repo/pull/{number}",
        created_at=datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc),
    )
    fields.update(extra)
    return PullRequest(**fields)


@pytest.fixture
def make_pull() -> Callable[..., PullRequest]:
    return build_pull


class FakeAdapter(GitPlatformAdapter):
    """In-memory adapter: pull requests per "owner/repo", filtered by state."""

    def __init__(self) -> None:
        self.pulls: Dict[str, List[PullRequest]] = {}
        self.details: Dict[int, PullRequest] = {}
        self.statuses: Dict[str, str] = {}
        self.repositories: List[Repository] = []
        self.not_found: set[str] = set()
        self.calls: List[tuple] = []

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequest:
        self.calls.append(("get_pull_request", owner, repo, number))
        if number in self.details:
            return self.details[number]
        for pull in self.pulls.get(f"{owner}/{repo}", []):
            if pull.number == number:
                return pull
        raise GitPlatformNotFoundError("404: Not Found", status_code=404)

    def list_pull_requests(
        self,
        owner: str,
        repo: str,
        state: str = "open",
        sort: str = "created",
        direction: str = "desc",
    ) -> List[PullRequest]:
        self.calls.append(("list_pull_requests", owner, repo, state, sort, direction))
        if f"{owner}/{repo}" in self.not_found:
            raise GitPlatformNotFoundError("404: Not Found", status_code=404)
        return [p.model_copy() for p in self.pulls.get(f"{owner}/{repo}", []) if p.state == state]

    def create_pull_request(self, owner: str, repo: str, request: CreatePullRequest) -> PullRequest:
        self.calls.append(("create_pull_request", owner, repo, request))
        return build_pull(100, title=request.title or "", base_owner=owner)

    def update_pull_request(self, owner, repo, number, title, body, state) -> PullRequest:
        self.calls.append(("update_pull_request", owner, repo, number, title, body, state))
        return build_pull(number, state=state, title=title, body=body or "")

    def get_combined_status(self, owner: str, repo: str, sha: str) -> str | None:
        self.calls.append(("get_combined_status", owner, repo, sha))
        return self.statuses.get(sha)

    def list_repositories(self, user: str | None = None, org: str | None = None) -> List[Repository]:
        self.calls.append(("list_repositories", user, org))
        return list(self.repositories)

    def create_comment(self, owner: str, repo: str, number: int, body: str) -> Comment:
        self.calls.append(("create_comment", owner, repo, number, body))
        return Comment(id=1, body=body, author="alice")


@pytest.fixture
def fake_adapter() -> FakeAdapter:
    return FakeAdapter()
