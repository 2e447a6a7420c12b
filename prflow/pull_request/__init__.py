"""Pull request workflows: branch codec, complexity, listing, reconciliation,
hooks and the orchestrator that sequences them."""

from prflow.pull_request.branch_codec import decode, encode, number_from_branch
from prflow.pull_request.complexity import score, sort_by_complexity
from prflow.pull_request.errors import UserInputError, WorkflowError
from prflow.pull_request.hooks import HookBridge
from prflow.pull_request.lister import PullRequestLister, group_by_base_branch
from prflow.pull_request.orchestrator import WorkflowOrchestrator
from prflow.pull_request.reconciler import reconcile_submit

__all__ = [
    "HookBridge",
    "PullRequestLister",
    "UserInputError",
    "WorkflowError",
    "WorkflowOrchestrator",
    "decode",
    "encode",
    "group_by_base_branch",
    "number_from_branch",
    "reconcile_submit",
    "score",
    "sort_by_complexity",
]
