"""Tests for prflow.services.git (branches, merging, commits, push, WorkingTree)."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from prflow.services.git import (
    GitRunnerError,
    WorkingTree,
    branch_exists,
    checkout_branch,
    count_user_adjacent_commits,
    current_branch,
    delete_branch,
    fetch_into_branch,
    last_commit_message,
    last_commit_sha,
    merge_branch,
    push_branch,
    rebase_branch,
)
from prflow.services.git._run import _run_git

REPO = Path("/tmp/repo")


class TestRunGit:
    """_run_git: stdout on success, GitRunnerError on failure."""

    def test_returns_stripped_stdout(self) -> None:
        done = subprocess.CompletedProcess(["git"], 0, stdout="main\n", stderr="")
        with patch("prflow.services.git._run.subprocess.run", return_value=done) as run:
            assert _run_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=REPO) == "main"
        assert run.call_args[0][0] == ["git", "rev-parse", "--abbrev-ref", "HEAD"]
        assert run.call_args[1]["cwd"] == REPO

    def test_failure_raises(self) -> None:
        error = subprocess.CalledProcessError(1, ["git", "push"], output="", stderr="rejected")
        with patch("prflow.services.git._run.subprocess.run", side_effect=error):
            with pytest.raises(GitRunnerError, match="git push origin main: rejected"):
                _run_git(["push", "origin", "main"], cwd=REPO)

    def test_git_missing(self) -> None:
        with patch("prflow.services.git._run.subprocess.run", side_effect=FileNotFoundError()):
            with pytest.raises(GitRunnerError, match="git not found"):
                _run_git(["status"], cwd=REPO)


class TestBranches:
    """prflow.services.git.branches."""

    def test_current_branch(self) -> None:
        with patch("prflow.services.git.branches._run_git", return_value="pr-42") as mock_run:
            assert current_branch(repo_dir=REPO) == "pr-42"
        mock_run.assert_called_once_with(["rev-parse", "--abbrev-ref", "HEAD"], cwd=REPO, log=None)

    def test_fetch_into_branch(self) -> None:
        with patch("prflow.services.git.branches._run_git") as mock_run:
            fetch_into_branch("git@github.com:bob/repo.git", "feature", "pr-42", repo_dir=REPO)
        mock_run.assert_called_once_with(
            ["fetch", "git@github.com:bob/repo.git", "feature:pr-42"], cwd=REPO, log=None
        )

    def test_checkout_branch(self) -> None:
        with patch("prflow.services.git.branches._run_git") as mock_run:
            checkout_branch("main", repo_dir=REPO)
        mock_run.assert_called_once_with(["checkout", "main"], cwd=REPO, log=None)

    def test_checkout_uses_cwd_when_no_repo_dir(self) -> None:
        with patch("prflow.services.git.branches._run_git") as mock_run:
            checkout_branch("main")
        assert mock_run.call_args[1]["cwd"] == Path.cwd()

    def test_delete_branch(self) -> None:
        with patch("prflow.services.git.branches._run_git") as mock_run:
            delete_branch("pr-42", repo_dir=REPO)
        mock_run.assert_called_once_with(["branch", "-D", "pr-42"], cwd=REPO, log=None)

    def test_branch_exists(self) -> None:
        with patch("prflow.services.git.branches._run_git", return_value="abc"):
            assert branch_exists("pr-42", repo_dir=REPO) is True
        with patch("prflow.services.git.branches._run_git", side_effect=GitRunnerError("missing")):
            assert branch_exists("pr-42", repo_dir=REPO) is False


class TestMergingAndPush:
    """merge_branch, rebase_branch, push_branch."""

    def test_merge_branch(self) -> None:
        with patch("prflow.services.git.merging._run_git") as mock_run:
            merge_branch("pr-42", repo_dir=REPO)
        mock_run.assert_called_once_with(["merge", "pr-42"], cwd=REPO, log=None)

    def test_rebase_branch(self) -> None:
        with patch("prflow.services.git.merging._run_git") as mock_run:
            rebase_branch("pr-42", repo_dir=REPO)
        mock_run.assert_called_once_with(["rebase", "pr-42"], cwd=REPO, log=None)

    def test_push_branch(self) -> None:
        with patch("prflow.services.git.push_pull._run_git") as mock_run:
            push_branch("main", remote="upstream", repo_dir=REPO)
        mock_run.assert_called_once_with(["push", "upstream", "main"], cwd=REPO, log=None)

    def test_push_failure_propagates(self) -> None:
        with patch("prflow.services.git.push_pull._run_git", side_effect=GitRunnerError("push failed")):
            with pytest.raises(GitRunnerError, match="push failed"):
                push_branch("main", repo_dir=REPO)


class TestCommits:
    """last_commit_sha, last_commit_message, count_user_adjacent_commits."""

    def test_last_commit_sha(self) -> None:
        with patch("prflow.services.git.commits._run_git", return_value="cafe") as mock_run:
            assert last_commit_sha(repo_dir=REPO) == "cafe"
        mock_run.assert_called_once_with(["rev-parse", "HEAD"], cwd=REPO, log=None)

    def test_last_commit_message_of_branch(self) -> None:
        with patch("prflow.services.git.commits._run_git", return_value="Add feature") as mock_run:
            assert last_commit_message("feature", repo_dir=REPO) == "Add feature"
        mock_run.assert_called_once_with(["log", "-1", "--format=%s", "feature"], cwd=REPO, log=None)

    def test_count_user_adjacent_commits(self) -> None:
        outputs = ["Alice", "Alice\nAlice\nBob\nAlice"]
        with patch("prflow.services.git.commits._run_git", side_effect=outputs):
            assert count_user_adjacent_commits(repo_dir=REPO) == 2

    def test_count_without_user_name(self) -> None:
        with patch("prflow.services.git.commits._run_git", side_effect=GitRunnerError("no user.name")):
            assert count_user_adjacent_commits(repo_dir=REPO) == 0


class TestWorkingTree:
    """WorkingTree delegates to the module functions with its repo_dir."""

    def test_delegates_with_repo_dir(self) -> None:
        tree = WorkingTree(repo_dir=REPO)
        with patch("prflow.services.git.branches._run_git") as mock_run:
            tree.checkout("main")
        assert mock_run.call_args[0][0] == ["checkout", "main"]
        assert mock_run.call_args[1]["cwd"] == REPO

    def test_push_argument_order(self) -> None:
        tree = WorkingTree(repo_dir=REPO)
        with patch("prflow.services.git.push_pull._run_git") as mock_run:
            tree.push("origin", "main")
        assert mock_run.call_args[0][0] == ["push", "origin", "main"]
