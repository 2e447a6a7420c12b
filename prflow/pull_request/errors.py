"""Workflow error taxonomy.

Hosting API failures are GitPlatformError (prflow.adapters) and git failures
are GitRunnerError (prflow.services.git); both propagate through the
pipelines unchanged.
"""


class WorkflowError(Exception):
    """A pipeline precondition does not hold."""

    pass


class UserInputError(WorkflowError):
    """Required repository or pull request context is missing.

    Raised while resolving options, before any action runs.
    """

    pass
