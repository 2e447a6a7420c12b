"""Pre/post extension points around hooked actions.

Hooks are configured per action name (pull-request.fetch, pull-request.merge,
pull-request.submit, pull-request.close, pull-request.open, pull-request.fwd):

    hooks:
      pull-request.submit:
        before: ["npm test"]
        after: ["echo submitted {submitted_pull} from {pull_branch}"]

Commands are formatted with the workflow options fields and run without a
shell. After-commands run only when the action returned normally.
"""

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Callable, Dict, List, TypeVar

from prflow.config import HookCommands
from prflow.models import WorkflowOptions

T = TypeVar("T")


class _Fields(dict):
    """format_map source that renders unknown and unset fields as ""."""

    def __missing__(self, key: str) -> str:
        return ""


def render_command(command: str, options: WorkflowOptions) -> str:
    """Substitute {field} placeholders with option values."""
    values = {k: ("" if v is None else v) for k, v in options.model_dump().items()}
    return command.format_map(_Fields(values))


class HookBridge:
    """Runs configured commands before and after an action."""

    def __init__(
        self,
        hooks: Dict[str, HookCommands] | None = None,
        repo_dir: Path | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._hooks = hooks or {}
        self._repo_dir = repo_dir
        self._log = log or logging.getLogger("prflow.pull_request.hooks")

    def invoke(self, name: str, options: WorkflowOptions, action: Callable[[], T]) -> T:
        """Run before-commands, action, then after-commands; return the action
        result. Exceptions of the action propagate and skip after-commands."""
        commands = self._hooks.get(name) or HookCommands()
        self._run_all(name, "before", commands.before, options)
        result = action()
        self._run_all(name, "after", commands.after, options)
        return result

    def _run_all(self, name: str, phase: str, commands: List[str], options: WorkflowOptions) -> None:
        for command in commands:
            rendered = render_command(command, options)
            self._log.debug("Hook %s (%s): %s", name, phase, rendered)
            self._run(name, rendered)

    def _run(self, name: str, command: str) -> None:
        args = shlex.split(command)
        if not args:
            return
        try:
            proc = subprocess.run(args, cwd=self._repo_dir, check=True, capture_output=True, text=True, timeout=300)
        except subprocess.CalledProcessError as e:
            err = (e.stderr or e.stdout or "").strip()
            self._log.warning("Hook %s command %r failed: %s", name, command, err)
            return
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            self._log.warning("Hook %s command %r failed: %s", name, command, e)
            return
        if proc.stdout.strip():
            self._log.info("%s", proc.stdout.strip())
