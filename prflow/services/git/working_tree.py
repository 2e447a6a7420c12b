"""WorkingTree: the git operations of the workflows bound to one repository
directory and logger, so the orchestrator can take a test double instead."""

import logging
from pathlib import Path

from prflow.services.git import branches, commits, merging, push_pull


class WorkingTree:
    """Git working tree at repo_dir (current directory if None)."""

    def __init__(self, repo_dir: Path | None = None, log: logging.Logger | None = None) -> None:
        self.repo_dir = Path(repo_dir) if repo_dir is not None else None
        self.log = log or logging.getLogger("prflow.services.git")

    def current_branch(self) -> str:
        return branches.current_branch(repo_dir=self.repo_dir, log=self.log)

    def fetch(self, remote_url: str, remote_branch: str, local_branch: str) -> None:
        branches.fetch_into_branch(remote_url, remote_branch, local_branch, repo_dir=self.repo_dir, log=self.log)

    def checkout(self, branch_name: str) -> None:
        branches.checkout_branch(branch_name, repo_dir=self.repo_dir, log=self.log)

    def delete_branch(self, branch_name: str) -> None:
        branches.delete_branch(branch_name, repo_dir=self.repo_dir, log=self.log)

    def branch_exists(self, branch_name: str) -> bool:
        return branches.branch_exists(branch_name, repo_dir=self.repo_dir, log=self.log)

    def merge(self, branch_name: str) -> None:
        merging.merge_branch(branch_name, repo_dir=self.repo_dir, log=self.log)

    def rebase(self, branch_name: str) -> None:
        merging.rebase_branch(branch_name, repo_dir=self.repo_dir, log=self.log)

    def push(self, remote: str, branch_name: str) -> None:
        push_pull.push_branch(branch_name, remote=remote, repo_dir=self.repo_dir, log=self.log)

    def last_commit_sha(self) -> str:
        return commits.last_commit_sha(repo_dir=self.repo_dir, log=self.log)

    def last_commit_message(self, branch_name: str | None = None) -> str:
        return commits.last_commit_message(branch_name, repo_dir=self.repo_dir, log=self.log)

    def count_user_adjacent_commits(self) -> int:
        return commits.count_user_adjacent_commits(repo_dir=self.repo_dir, log=self.log)
