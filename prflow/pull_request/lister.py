"""Assemble pull request listings: fetch, filter, annotate, score, group.

Presentation lives in prflow.pull_request.render; nothing here prints.
All remote calls run one at a time, in list order.
"""

import logging
from typing import Dict, List

from prflow.adapters.base import GitPlatformAdapter, GitPlatformError, GitPlatformNotFoundError
from prflow.models import BranchGroup, ListRequest, PullRequest, RepositoryListing
from prflow.pull_request.complexity import score, sort_by_complexity

SORT_COMPLEXITY = "complexity"
SORT_CREATED = "created"


def group_by_base_branch(pulls: List[PullRequest], branch: str | None = None) -> List[BranchGroup]:
    """Group pulls by base branch in first-seen order, optionally keeping only
    one branch."""
    groups: Dict[str, List[PullRequest]] = {}
    for pull in pulls:
        name = pull.base.ref
        if branch and branch != name:
            continue
        groups.setdefault(name, []).append(pull)
    return [BranchGroup(name=name, pulls=members, total=len(members)) for name, members in groups.items()]


class PullRequestLister:
    """Lists pull requests of one repository or of every repository of a user
    or organization."""

    def __init__(self, adapter: GitPlatformAdapter, log: logging.Logger | None = None) -> None:
        self._adapter = adapter
        self._log = log or logging.getLogger("prflow.pull_request.lister")

    def list(self, owner: str, repo: str, request: ListRequest) -> RepositoryListing:
        """Listing of owner/repo grouped by base branch.

        A 404 while listing yields an empty listing: a repository can be
        visible but have its pull requests unavailable (e.g. disabled).
        """
        remote_sort = SORT_CREATED if request.sort == SORT_COMPLEXITY else request.sort
        try:
            pulls = self._adapter.list_pull_requests(
                owner,
                repo,
                state=request.state,
                sort=remote_sort,
                direction=request.direction,
            )
        except GitPlatformNotFoundError:
            self._log.warning("Can't list pull requests for %s/%s", owner, repo)
            return RepositoryListing(owner=owner, repo=repo)

        if request.mine:
            pulls = [pull for pull in pulls if pull.author == request.logged_user]

        for pull in pulls:
            pull.combined_status = self._adapter.get_combined_status(owner, repo, pull.head.sha)

        if request.sort == SORT_COMPLEXITY:
            self._add_complexity(owner, repo, pulls)
            pulls = sort_by_complexity(pulls, request.direction)

        return RepositoryListing(
            owner=owner,
            repo=repo,
            branches=group_by_base_branch(pulls, request.branch),
        )

    def _add_complexity(self, owner: str, repo: str, pulls: List[PullRequest]) -> None:
        # Size metrics are only returned by the single pull request endpoint
        for pull in pulls:
            detail = self._adapter.get_pull_request(owner, repo, pull.number)
            pull.complexity = score(detail.metrics())

    def list_from_all_repositories(
        self,
        request: ListRequest,
        user: str | None = None,
        org: str | None = None,
    ) -> List[RepositoryListing]:
        """One listing per repository of org (or of user when org is None).

        A failing repository is logged and reported through its listing's
        error; the remaining repositories are still listed.
        """
        repositories = self._adapter.list_repositories(user=user, org=org)
        listings: List[RepositoryListing] = []
        for repository in repositories:
            try:
                listing = self.list(repository.owner, repository.name, request)
            except GitPlatformError as e:
                self._log.error("Can't list pull requests for %s: %s", repository.full_name, e)
                listing = RepositoryListing(owner=repository.owner, repo=repository.name, error=str(e))
            listings.append(listing)
        return listings
