"""prflow entry point.

Usage: prflow [NUMBER] [--fetch | --merge | --rebase | --close | --open |
--info | --list | --submit [USER] | --fwd [USER] | --comment TEXT | --browser].
A NUMBER without an action fetches that pull request; no arguments lists
the open pull requests of the repository.
"""

import argparse
import logging
import sys
from pathlib import Path

from prflow.adapters import GitHubAdapter, GitPlatformError
from prflow.config import AppConfig, load_config
from prflow.logging import PrflowLogging
from prflow.models import WorkflowOptions, WorkflowResult
from prflow.pull_request import UserInputError, WorkflowOrchestrator
from prflow.pull_request.render import format_listing, format_pull
from prflow.services.git import GitRunnerError, WorkingTree

_ACTIONS = ("browser", "close", "comment", "fetch", "forward", "info", "list", "merge", "open", "rebase", "submit")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI flags."""
    parser = argparse.ArgumentParser(
        prog="prflow",
        description="Fetch, merge, submit, forward, close and list pull requests",
    )
    parser.add_argument("number", nargs="?", type=int, help="Pull request number")
    parser.add_argument("--config", type=Path, default=Path("config.yaml"), help="Path to YAML config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log git commands and API calls")

    actions = parser.add_argument_group("actions")
    actions.add_argument("-B", "--browser", action="store_true", help="Open the pull request in a browser")
    actions.add_argument("-C", "--close", action="store_true", help="Close the pull request")
    actions.add_argument("-c", "--comment", help="Comment on the pull request")
    actions.add_argument("-f", "--fetch", action="store_true", help="Fetch the pull request into a local branch")
    actions.add_argument("-M", "--merge", action="store_true", help="Merge the pull request")
    actions.add_argument("-R", "--rebase", action="store_true", help="Rebase instead of merging")
    actions.add_argument(
        "--fwd", dest="forward", nargs="?", const="", help="Forward the pull request to a user (default from config)"
    )
    actions.add_argument("-I", "--info", action="store_true", help="Show the pull request")
    actions.add_argument("-l", "--list", action="store_true", help="List pull requests")
    actions.add_argument("-o", "--open", action="store_true", help="Reopen the pull request")
    actions.add_argument(
        "-s", "--submit", nargs="?", const="", help="Submit the current branch to a user (default from config)"
    )

    context = parser.add_argument_group("context")
    context.add_argument("-u", "--user", help="Repository owner")
    context.add_argument("-r", "--repo", help="Repository name")
    context.add_argument("-O", "--org", help="Organization (with --all)")
    context.add_argument("-b", "--branch", help="Base branch")

    listing = parser.add_argument_group("listing")
    listing.add_argument("-a", "--all", action="store_true", help="List pull requests of all repositories")
    listing.add_argument("-m", "--me", action="store_true", help="Only pull requests sent by me")
    listing.add_argument("-S", "--state", choices=["open", "closed"], help="Pull request state")
    listing.add_argument("--sort", help="created, updated, popularity, long-running or complexity")
    listing.add_argument("--direction", choices=["asc", "desc"], help="Sort direction")
    listing.add_argument("-k", "--link", action="store_true", help="Show the URL on the same line")
    listing.add_argument("-d", "--detailed", action="store_true", help="Show URL and body")

    submit = parser.add_argument_group("submit")
    submit.add_argument("-t", "--title", help="Pull request title (default: last commit message)")
    submit.add_argument("-D", "--description", help="Pull request body")
    submit.add_argument("-i", "--issue", type=int, help="Turn this issue into the pull request")
    return parser.parse_args(argv)


def build_options(args: argparse.Namespace, config: AppConfig, current_branch: str | None) -> WorkflowOptions:
    """Map parsed flags onto WorkflowOptions, with owner/repo defaulting to
    github.repository from config."""
    default_user, _, default_repo = (config.github.repository or "").partition("/")
    options = WorkflowOptions(
        user=args.user or default_user or None,
        repo=args.repo or default_repo or None,
        org=args.org,
        branch=args.branch,
        current_branch=current_branch,
        number=args.number,
        state=args.state,
        sort=args.sort,
        direction=args.direction,
        all=args.all,
        me=args.me,
        link=args.link,
        detailed=args.detailed,
        browser=args.browser,
        close=args.close,
        comment=args.comment,
        fetch=args.fetch,
        merge=args.merge,
        rebase=args.rebase,
        forward=args.forward,
        info=args.info,
        list=args.list,
        open=args.open,
        submit=args.submit,
        title=args.title,
        description=args.description,
        issue=args.issue,
    )
    if not any(getattr(options, name) not in (None, False) for name in _ACTIONS):
        if options.number is not None:
            options.fetch = True
        else:
            options.list = True
    return options


def print_result(result: WorkflowResult, options: WorkflowOptions) -> None:
    """Print fetched records; other actions already logged their progress."""
    info = result.outcome("info")
    if info is not None and info.ok:
        print("\n".join(format_pull(info.result, link=options.link, detailed=options.detailed, show_body=True)))
    listed = result.outcome("list")
    if listed is not None and listed.ok:
        for listing in listed.result:
            lines = format_listing(listing, link=options.link, detailed=options.detailed)
            if lines:
                print("\n".join(lines))


def main(argv: list[str] | None = None) -> int:
    """Entry point: exit 0 when every action succeeded, 1 on a failed action,
    2 on missing input."""
    args = parse_args(argv)
    config = load_config(args.config)
    PrflowLogging(config.logging, verbose=args.verbose).setup()
    log = logging.getLogger("prflow.main")

    git = WorkingTree()
    try:
        current_branch: str | None = git.current_branch()
    except GitRunnerError:
        current_branch = None

    adapter = GitHubAdapter(config.github_token_resolved, api_url=config.github.api_url)
    options = build_options(args, config, current_branch)
    if options.me:
        try:
            options.logged_user = config.github.username or adapter.get_authenticated_login()
        except GitPlatformError as e:
            log.warning("Can't read the authenticated user: %s", e)

    orchestrator = WorkflowOrchestrator(adapter, git, config)
    try:
        result = orchestrator.run(options)
    except UserInputError as e:
        log.error("%s", e)
        return 2

    print_result(result, options)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
