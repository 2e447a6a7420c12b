"""Local branch operations: fetch into, checkout, delete, current branch."""

import logging
from pathlib import Path

from prflow.services.git._run import GitRunnerError, _run_git


def current_branch(repo_dir: Path | None = None, log: logging.Logger | None = None) -> str:
    """Return the name of the checked-out branch ("HEAD" when detached)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    return _run_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=cwd, log=log)


def fetch_into_branch(
    remote_url: str,
    remote_branch: str,
    local_branch: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Fetch remote_branch from remote_url into local_branch (created or
    updated)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["fetch", remote_url, f"{remote_branch}:{local_branch}"], cwd=cwd, log=log)
    if log:
        log.info("Fetched %s from %s into %s", remote_branch, remote_url, local_branch)


def checkout_branch(
    branch_name: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Checkout the given local branch."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["checkout", branch_name], cwd=cwd, log=log)
    if log:
        log.info("Checked out branch %s", branch_name)


def delete_branch(
    branch_name: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Force-delete a local branch (it may not be merged upstream)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["branch", "-D", branch_name], cwd=cwd, log=log)
    if log:
        log.info("Deleted branch %s", branch_name)


def branch_exists(
    branch_name: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> bool:
    """Return True if a local branch with this name exists."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    try:
        _run_git(["rev-parse", "--verify", "--quiet", f"refs/heads/{branch_name}"], cwd=cwd)
    except GitRunnerError:
        return False
    return True
