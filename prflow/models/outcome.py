"""Per-action outcomes of one workflow run."""

from typing import Any, List

from pydantic import BaseModel, Field


class ActionOutcome(BaseModel):
    """Result of one dispatched action."""

    action: str
    ok: bool
    result: Any = None
    error: str | None = None


class WorkflowResult(BaseModel):
    """Outcomes in dispatch order."""

    outcomes: List[ActionOutcome] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(outcome.ok for outcome in self.outcomes)

    def outcome(self, action: str) -> ActionOutcome | None:
        """Return the outcome of the given action, if it was dispatched."""
        for item in self.outcomes:
            if item.action == action:
                return item
        return None
