"""Push to a remote."""

import logging
from pathlib import Path

from prflow.services.git._run import _run_git


def push_branch(
    branch_name: str,
    remote: str = "origin",
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Push the given branch to remote."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["push", remote, branch_name], cwd=cwd, log=log)
    if log:
        log.info("Pushed branch %s to %s", branch_name, remote)
