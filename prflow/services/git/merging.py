"""Merge or rebase a branch into the checked-out branch."""

import logging
from pathlib import Path

from prflow.services.git._run import _run_git


def merge_branch(
    branch_name: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Merge branch_name into the current branch."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["merge", branch_name], cwd=cwd, log=log)
    if log:
        log.info("Merged %s", branch_name)


def rebase_branch(
    branch_name: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Rebase the current branch onto branch_name."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["rebase", branch_name], cwd=cwd, log=log)
    if log:
        log.info("Rebased onto %s", branch_name)
