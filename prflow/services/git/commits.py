"""Read commit information: last sha, last message, adjacent commits."""

import logging
from pathlib import Path

from prflow.services.git._run import GitRunnerError, _run_git

# Upper bound of history scanned when counting adjacent commits
MAX_ADJACENT_SCAN = 500


def last_commit_sha(repo_dir: Path | None = None, log: logging.Logger | None = None) -> str:
    """Return the sha of HEAD."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    return _run_git(["rev-parse", "HEAD"], cwd=cwd, log=log)


def last_commit_message(
    branch_name: str | None = None,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> str:
    """Return the subject line of the last commit on branch_name (HEAD if
    None)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    args = ["log", "-1", "--format=%s"]
    if branch_name:
        args.append(branch_name)
    return _run_git(args, cwd=cwd, log=log)


def count_user_adjacent_commits(repo_dir: Path | None = None, log: logging.Logger | None = None) -> int:
    """Count the commits on top of HEAD authored by the configured git user.

    Stops at the first commit by someone else. Returns 0 when no user.name
    is configured.
    """
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    try:
        user_name = _run_git(["config", "user.name"], cwd=cwd, log=log)
    except GitRunnerError:
        return 0
    authors = _run_git(["log", f"--max-count={MAX_ADJACENT_SCAN}", "--format=%an"], cwd=cwd, log=log)
    count = 0
    for author in authors.splitlines():
        if author.strip() != user_name:
            break
        count += 1
    return count
