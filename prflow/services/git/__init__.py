"""Git operations: branches, merging, commits, push."""

from prflow.services.git._run import GitRunnerError
from prflow.services.git.branches import (
    branch_exists,
    checkout_branch,
    current_branch,
    delete_branch,
    fetch_into_branch,
)
from prflow.services.git.commits import count_user_adjacent_commits, last_commit_message, last_commit_sha
from prflow.services.git.merging import merge_branch, rebase_branch
from prflow.services.git.push_pull import push_branch
from prflow.services.git.working_tree import WorkingTree

__all__ = [
    "GitRunnerError",
    "WorkingTree",
    "branch_exists",
    "checkout_branch",
    "count_user_adjacent_commits",
    "current_branch",
    "delete_branch",
    "fetch_into_branch",
    "last_commit_message",
    "last_commit_sha",
    "merge_branch",
    "push_branch",
    "rebase_branch",
]
