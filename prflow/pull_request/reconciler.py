"""Recover from a failed pull request creation.

GitHub may reject a create call although an equivalent pull request is
already open (a race, or a partial earlier submit). In that case the
existing pull request is the result of the submit.
"""

import logging
from typing import List

from prflow.adapters.base import GitPlatformAdapter, GitPlatformError
from prflow.models import PullRequest

STATE_OPEN = "open"


def _matches(
    pull: PullRequest,
    target_user: str,
    base_branch: str | None,
    current_branch: str | None,
    local_user: str | None,
) -> bool:
    return (
        pull.base.ref == base_branch
        and pull.head.ref == current_branch
        and pull.base.sha == pull.head.sha
        and pull.base.owner == target_user
        and pull.head.owner == local_user
    )


def reconcile_submit(
    adapter: GitPlatformAdapter,
    original_error: Exception,
    target_user: str,
    repo: str,
    base_branch: str | None,
    current_branch: str | None,
    local_user: str | None,
    log: logging.Logger | None = None,
) -> PullRequest:
    """Return the open pull request equivalent to the failed submit.

    Raises original_error unchanged unless exactly one open pull request
    of target_user/repo matches, or when they cannot be listed.
    """
    logger = log or logging.getLogger("prflow.pull_request.reconciler")
    pulls: List[PullRequest] = []
    try:
        pulls = adapter.list_pull_requests(target_user, repo, state=STATE_OPEN)
    except GitPlatformError as e:
        logger.debug("Can't list open pull requests of %s/%s: %s", target_user, repo, e)

    matches = [p for p in pulls if _matches(p, target_user, base_branch, current_branch, local_user)]
    if len(matches) > 1:
        logger.debug(
            "%s open pull requests match the submit: %s",
            len(matches),
            ", ".join(f"#{p.number}" for p in matches),
        )
    if len(matches) != 1:
        raise original_error
    logger.info("Pull request #%s already exists, using it", matches[0].number)
    return matches[0]
