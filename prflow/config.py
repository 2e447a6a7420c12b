"""Configuration loading from YAML and environment.

The GitHub token is taken from the environment or from a file named by
GITHUB_TOKEN_FILE (Docker secrets). Never put real tokens in config files
committed to the repo.
"""

import os
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


# Injected by load_config so properties can read env/file
_current_env: dict[str, str] = {}


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="PAT; use env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    host: str = Field(default="https://github.com/", description="Web URL used to open pull requests")
    username: str | None = Field(
        default=None, description="Logged user login; asked from the API when not set"
    )
    repository: str | None = Field(default=None, description="Default owner/repo, e.g. node-gh/gh")


class PullRequestConfig(BaseSettings):
    """Pull request workflow settings."""

    model_config = SettingsConfigDict(env_prefix="PR_", extra="ignore")

    pull_branch_name_prefix: str = Field(default="pr-", description="Prefix of local pull branches")
    default_branch: str = Field(default="main", description="Base branch for merge and submit")
    default_remote: str = Field(default="origin", description="Remote that merge and submit push to")
    default_pr_forwarder: str | None = Field(default=None, description="Target of --fwd without a user")
    default_pr_reviewer: str | None = Field(default=None, description="Target of --submit without a user")
    replace: Dict[str, str] = Field(
        default_factory=dict, description="Text substitutions applied to the body when closing"
    )


class HookCommands(BaseModel):
    """Commands run before and after one hooked action."""

    before: List[str] = Field(default_factory=list)
    after: List[str] = Field(default_factory=list)


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(levelname)s %(name)s: %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    pull_request: PullRequestConfig = Field(default_factory=PullRequestConfig)
    hooks: Dict[str, HookCommands] = Field(default_factory=dict)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env or Docker secret file."""
        t = self.github.token
        if t and not t.startswith("${"):
            return t
        return _read_secret("GITHUB_TOKEN", "GITHUB_TOKEN_FILE")


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Secrets: GITHUB_TOKEN or GITHUB_TOKEN_FILE.
    """
    global _current_env

    _current_env = dict(os.environ)

    path = config_path or Path("config.yaml")
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw)

    hooks_raw = raw.get("hooks") or {}
    hooks = {name: HookCommands(**(val or {})) for name, val in hooks_raw.items()}

    return AppConfig(
        github=GitHubConfig(**(raw.get("github") or {})),
        pull_request=PullRequestConfig(**(raw.get("pull_request") or {})),
        hooks=hooks,
        logging=LoggingConfig(**(raw.get("logging") or {})),
    )
