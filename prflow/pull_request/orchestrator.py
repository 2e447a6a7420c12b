"""
Pull request workflows: resolve options, then run the requested actions.

Each action is an ordered pipeline of hosting API and git steps; a step runs
only after the previous one succeeded. Actions requested together run in a
fixed order (browser, close, comment, fetch or merge, forward, info, list,
open, submit) and a failing action does not stop the ones after it. Nothing
is rolled back: a merge that succeeded locally stays merged when the push
after it fails.
"""

import logging
import webbrowser
from typing import Callable, Dict, List

from prflow.adapters.base import GitPlatformAdapter, GitPlatformError
from prflow.config import AppConfig
from prflow.models import (
    ActionOutcome,
    Comment,
    CreatePullRequest,
    ListRequest,
    PullRequest,
    RepositoryListing,
    WorkflowOptions,
    WorkflowResult,
)
from prflow.pull_request.branch_codec import encode, number_from_branch
from prflow.pull_request.complexity import DIRECTION_DESC
from prflow.pull_request.errors import UserInputError, WorkflowError
from prflow.pull_request.hooks import HookBridge
from prflow.pull_request.lister import SORT_CREATED, PullRequestLister
from prflow.pull_request.reconciler import reconcile_submit
from prflow.services.git import GitRunnerError, WorkingTree

FETCH_TYPE_CHECKOUT = "checkout"
FETCH_TYPE_MERGE = "merge"
FETCH_TYPE_REBASE = "rebase"
FETCH_TYPE_SILENT = "silent"

STATE_CLOSED = "closed"
STATE_OPEN = "open"

# Failure message of each action; the close failure is only a warning
_FAILURE_MESSAGES = {
    "browser": "Can't open pull request #{number} in the browser",
    "close": "Can't close pull request #{number}",
    "comment": "Can't comment on pull request #{number}",
    "fetch": "Can't fetch pull request #{number}",
    "merge": "Can't merge pull request #{number}",
    "forward": "Can't forward pull request #{number}",
    "info": "Can't get pull request #{number}",
    "list": "Can't list pull requests",
    "open": "Can't open pull request #{number}",
    "submit": "Can't submit pull request",
}


def apply_replacements(text: str, replacements: Dict[str, str]) -> str:
    """Replace every occurrence of each key with its value."""
    for old, new in replacements.items():
        text = text.replace(old, new)
    return text


class WorkflowOrchestrator:
    """Runs pull request actions against one hosting adapter and working tree."""

    def __init__(
        self,
        adapter: GitPlatformAdapter,
        git: WorkingTree,
        config: AppConfig,
        hooks: HookBridge | None = None,
        opener: Callable[[str], object] | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._adapter = adapter
        self._git = git
        self._config = config
        self._hooks = hooks or HookBridge(config.hooks)
        self._opener = opener or webbrowser.open
        self._log = log or logging.getLogger("prflow.pull_request.orchestrator")
        self._lister = PullRequestLister(adapter, log=self._log)

    @property
    def _prefix(self) -> str:
        return self._config.pull_request.pull_branch_name_prefix

    def resolve(self, options: WorkflowOptions) -> WorkflowOptions:
        """Fill derived fields and defaults in place.

        Raises:
            UserInputError: No repository, or an action that needs a pull
                request number could not resolve one.
        """
        pr_config = self._config.pull_request
        if not options.repo and not options.all:
            raise UserInputError("You must specify a Git repository with a GitHub remote to run this command")

        if options.number is None:
            options.number = number_from_branch(options.current_branch, self._prefix)
        options.pull_branch = encode(options.number, self._prefix) if options.number is not None else None
        options.state = options.state or STATE_OPEN

        if not options.pull_branch and (options.close or options.fetch or options.merge or options.rebase):
            raise UserInputError("You've invoked a method that requires a pull request number.")

        if not options.list:
            options.branch = options.branch or pr_config.default_branch
        if options.forward == "":
            options.forward = pr_config.default_pr_forwarder
        if options.submit == "":
            options.submit = pr_config.default_pr_reviewer
        return options

    def run(self, options: WorkflowOptions) -> WorkflowResult:
        """Resolve options and run every requested action in dispatch order."""
        self.resolve(options)
        result = WorkflowResult()

        if options.browser:
            self._dispatch(result, options, "browser", None, lambda: self.browser(options))
        if options.close:
            self._dispatch(result, options, "close", "pull-request.close", lambda: self._close_action(options))
        if options.comment:
            self._dispatch(result, options, "comment", None, lambda: self.comment(options))
        if options.fetch:
            self._dispatch(result, options, "fetch", "pull-request.fetch", lambda: self._fetch_action(options))
        elif options.merge or options.rebase:
            self._dispatch(result, options, "merge", "pull-request.merge", lambda: self._merge_action(options))
        if options.forward:
            self._dispatch(result, options, "forward", "pull-request.fwd", lambda: self._forward_action(options))
        if options.info:
            self._dispatch(result, options, "info", None, lambda: self.info(options))
        if options.list:
            self._dispatch(result, options, "list", None, lambda: self.list(options))
        if options.open:
            self._dispatch(result, options, "open", "pull-request.open", lambda: self._open_action(options))
        if options.submit:
            self._dispatch(result, options, "submit", "pull-request.submit", lambda: self._submit_action(options))
        return result

    def _dispatch(
        self,
        result: WorkflowResult,
        options: WorkflowOptions,
        action: str,
        hook: str | None,
        run: Callable[[], object],
    ) -> None:
        try:
            value = self._hooks.invoke(hook, options, run) if hook else run()
        except (GitPlatformError, GitRunnerError, WorkflowError) as e:
            level = logging.WARNING if action == "close" else logging.ERROR
            self._log.log(level, "%s: %s", _FAILURE_MESSAGES[action].format(number=options.number), e)
            result.outcomes.append(ActionOutcome(action=action, ok=False, error=str(e)))
            return
        result.outcomes.append(ActionOutcome(action=action, ok=True, result=value))

    # Hooked actions: log, run the pipeline, record what post hooks may use

    def _fetch_action(self, options: WorkflowOptions) -> PullRequest:
        mode = FETCH_TYPE_CHECKOUT
        operation = ""
        branch = options.pull_branch
        if options.merge:
            mode, operation, branch = FETCH_TYPE_MERGE, " and merging", options.current_branch
        elif options.rebase:
            mode, operation, branch = FETCH_TYPE_REBASE, " and rebasing", options.current_branch
        self._log.info("Fetching pull request #%s%s into branch %s", options.number, operation, branch)
        return self.fetch(options, mode)

    def _merge_action(self, options: WorkflowOptions) -> None:
        operation = "Rebasing" if options.rebase else "Merging"
        self._log.info("%s pull request #%s into branch %s", operation, options.number, options.branch)
        self.merge(options)
        self._record_merge_comment_info(options)

    def _forward_action(self, options: WorkflowOptions) -> PullRequest:
        self._log.info("Forwarding pull request #%s to @%s", options.number, options.forward)
        pull = self.forward(options)
        self._log.info("%s", pull.html_url)
        self._record_merge_comment_info(options)
        return pull

    def _close_action(self, options: WorkflowOptions) -> PullRequest:
        self._log.info("Closing pull request #%s", options.number)
        pull = self.close(options)
        self._log.info("%s", pull.html_url)
        self._record_merge_comment_info(options)
        return pull

    def _open_action(self, options: WorkflowOptions) -> PullRequest:
        self._log.info("Opening pull request #%s", options.number)
        pull = self.open(options)
        self._log.info("%s", pull.html_url)
        return pull

    def _submit_action(self, options: WorkflowOptions) -> PullRequest:
        self._log.info("Submitting pull request to @%s", options.submit)
        pull = self.submit(options, options.submit or "")
        self._log.info("%s", pull.html_url)
        self._record_merge_comment_info(options)
        return pull

    def _record_merge_comment_info(self, options: WorkflowOptions) -> None:
        """Expose the local commits of this change (current_sha, changes,
        pull_head_sha) to post hooks; a git failure leaves them unset."""
        try:
            sha = self._git.last_commit_sha()
            changes = self._git.count_user_adjacent_commits()
        except GitRunnerError as e:
            self._log.warning("Can't read local commits for hooks: %s", e)
            return
        options.current_sha = sha
        if changes > 0:
            options.changes = changes
        options.pull_head_sha = f"{sha}~{changes}"

    # Pipelines

    def _require_number(self, options: WorkflowOptions) -> int:
        if options.number is None:
            raise WorkflowError("This action requires a pull request number")
        return options.number

    def _get(self, options: WorkflowOptions) -> PullRequest:
        return self._adapter.get_pull_request(options.user or "", options.repo or "", self._require_number(options))

    def fetch(self, options: WorkflowOptions, mode: str = FETCH_TYPE_CHECKOUT) -> PullRequest:
        """Fetch the head branch of the pull request into the pull branch, then
        checkout, merge or rebase it unless mode is silent."""
        pull = self._get(options)
        if not pull.head.remote_url:
            raise WorkflowError(f"Head repository of pull request #{pull.number} is not available")
        if not options.pull_branch:
            raise WorkflowError("No pull branch to fetch into")

        self._git.fetch(pull.head.remote_url, pull.head.ref, options.pull_branch)
        if mode == FETCH_TYPE_CHECKOUT:
            self._git.checkout(options.pull_branch)
        elif mode == FETCH_TYPE_MERGE:
            self._git.merge(options.pull_branch)
        elif mode == FETCH_TYPE_REBASE:
            self._git.rebase(options.pull_branch)
        return pull

    def merge(self, options: WorkflowOptions) -> None:
        """Merge (or rebase) the pull branch into the base branch, push the base
        branch and delete the pull branch."""
        if not options.pull_branch or not options.branch:
            raise WorkflowError("Merging requires a pull branch and a base branch")
        self._git.checkout(options.branch)
        if options.rebase:
            self._git.rebase(options.pull_branch)
        else:
            self._git.merge(options.pull_branch)
        self._git.push(self._config.pull_request.default_remote, options.branch)
        self._git.delete_branch(options.pull_branch)

    def submit(self, options: WorkflowOptions, target_user: str) -> PullRequest:
        """Push the pull branch (or the current branch) and open a pull request
        on target_user's repository.

        When creation fails, an equivalent open pull request is looked up and
        returned instead; otherwise the creation error propagates.
        """
        if not target_user:
            raise WorkflowError("No user to submit the pull request to")
        branch = options.pull_branch or options.current_branch
        if not branch:
            raise WorkflowError("No branch to submit")

        self._git.push(self._config.pull_request.default_remote, branch)
        if not options.title:
            options.title = self._git.last_commit_message(branch)
        if not options.title and options.issue is None:
            raise WorkflowError("A pull request title is required")

        request = CreatePullRequest(
            base=options.branch or self._config.pull_request.default_branch,
            head=f"{options.user}:{branch}",
            title=options.title,
            body=options.description,
            issue=options.issue,
        )
        try:
            pull = self._adapter.create_pull_request(target_user, options.repo or "", request)
        except GitPlatformError as e:
            pull = reconcile_submit(
                self._adapter,
                e,
                target_user,
                options.repo or "",
                base_branch=options.branch,
                current_branch=options.current_branch,
                local_user=options.user,
                log=self._log,
            )
        options.submitted_pull = pull.number
        return pull

    def forward(self, options: WorkflowOptions) -> PullRequest:
        """Fetch the pull request silently and submit a copy of it to the
        forward target."""
        pull = self.fetch(options, FETCH_TYPE_SILENT)
        options.title = pull.title
        options.description = pull.body
        options.submitted_user = pull.author
        submitted = self.submit(options, options.forward or "")
        options.forwarded_pull = submitted.number
        return submitted

    def close(self, options: WorkflowOptions) -> PullRequest:
        """Close the pull request remotely and remove its local pull branch."""
        pull = self._get(options)
        body = apply_replacements(pull.body, self._config.pull_request.replace)
        closed = self._adapter.update_pull_request(
            options.user or "", options.repo or "", pull.number, pull.title, body, STATE_CLOSED
        )
        if options.pull_branch and options.pull_branch == options.current_branch:
            self._git.checkout(pull.base.ref)
        if options.pull_branch and self._git.branch_exists(options.pull_branch):
            self._git.delete_branch(options.pull_branch)
        return closed

    def open(self, options: WorkflowOptions) -> PullRequest:
        """Reopen the pull request, keeping its title and body."""
        pull = self._get(options)
        return self._adapter.update_pull_request(
            options.user or "", options.repo or "", pull.number, pull.title, pull.body, STATE_OPEN
        )

    def comment(self, options: WorkflowOptions) -> Comment:
        number = self._require_number(options)
        self._log.info("Adding comment on pull request #%s", number)
        return self._adapter.create_comment(options.user or "", options.repo or "", number, options.comment or "")

    def info(self, options: WorkflowOptions) -> PullRequest:
        return self._get(options)

    def list(self, options: WorkflowOptions) -> List[RepositoryListing]:
        """Listings of the repository, or of every repository of the user or
        organization when options.all is set."""
        options.sort = options.sort or SORT_CREATED
        options.direction = options.direction or DIRECTION_DESC
        request = ListRequest(
            state=options.state or STATE_OPEN,
            sort=options.sort,
            direction=options.direction,
            mine=options.me,
            logged_user=options.logged_user,
            branch=options.branch,
        )
        if options.all:
            self._log.info("Listing all %s pull requests for %s", request.state, options.org or options.user)
            return self._lister.list_from_all_repositories(request, user=options.user, org=options.org)

        if options.me:
            self._log.info(
                "Listing %s pull requests sent by %s on %s/%s",
                request.state,
                options.logged_user,
                options.user,
                options.repo,
            )
        else:
            self._log.info("Listing %s pull requests on %s/%s", request.state, options.user, options.repo)
        return [self._lister.list(options.user or "", options.repo or "", request)]

    def browser(self, options: WorkflowOptions) -> str:
        """Open the pull request (or the pull request list) in a browser and
        return the URL."""
        host = self._config.github.host.rstrip("/") + "/"
        if options.number is not None:
            url = f"{host}{options.user}/{options.repo}/pull/{options.number}"
        else:
            url = f"{host}{options.user}/{options.repo}/pulls"
        self._opener(url)
        return url
