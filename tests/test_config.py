"""Tests for prflow.config (YAML + env loading)."""

from pathlib import Path

import pytest

from prflow.config import AppConfig, load_config


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "missing.yaml")
    assert isinstance(config, AppConfig)
    assert config.pull_request.pull_branch_name_prefix == "pr-"
    assert config.pull_request.default_branch == "main"
    assert config.pull_request.default_remote == "origin"
    assert config.hooks == {}


def test_loads_sections(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        """
github:
  repository: node-gh/gh
pull_request:
  pull_branch_name_prefix: pull-
  default_branch: master
  default_pr_reviewer: zeno
  replace:
    WIP: done
hooks:
  pull-request.merge:
    after: ["echo {number}"]
logging:
  level: DEBUG
"""
    )
    config = load_config(path)
    assert config.github.repository == "node-gh/gh"
    assert config.pull_request.pull_branch_name_prefix == "pull-"
    assert config.pull_request.default_branch == "master"
    assert config.pull_request.default_pr_reviewer == "zeno"
    assert config.pull_request.replace == {"WIP": "done"}
    assert config.hooks["pull-request.merge"].after == ["echo {number}"]
    assert config.hooks["pull-request.merge"].before == []
    assert config.logging.level == "DEBUG"


def test_env_substitution_in_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MY_TOKEN", "secret")
    path = tmp_path / "config.yaml"
    path.write_text("github:\n  token: ${MY_TOKEN}\n")
    config = load_config(path)
    assert config.github_token_resolved == "secret"


def test_token_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "from-env")
    path = tmp_path / "config.yaml"
    path.write_text("github:\n  token: ${UNSET_TOKEN_VAR}\n")
    monkeypatch.delenv("UNSET_TOKEN_VAR", raising=False)
    config = load_config(path)
    assert config.github_token_resolved == "from-env"


def test_token_from_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    secret = tmp_path / "token"
    secret.write_text("from-file\n")
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.setenv("GITHUB_TOKEN_FILE", str(secret))
    config = load_config(tmp_path / "missing.yaml")
    assert config.github_token_resolved == "from-file"


def test_env_prefix_overrides_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PR_PULL_BRANCH_NAME_PREFIX", "review/")
    assert AppConfig().pull_request.pull_branch_name_prefix == "review/"
