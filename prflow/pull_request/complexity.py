"""Complexity score of a pull request, used to sort listings client side."""

from typing import List

from prflow.models import ComplexityMetrics, PullRequest

WEIGHT_ADDITION = 2
WEIGHT_CHANGED_FILE = 2
WEIGHT_COMMENT = 2
WEIGHT_DELETION = 2
WEIGHT_REVIEW_COMMENT = 1

DIRECTION_ASC = "asc"
DIRECTION_DESC = "desc"


def score(metrics: ComplexityMetrics) -> int:
    """Weighted sum of the change-size metrics."""
    return (
        metrics.additions * WEIGHT_ADDITION
        + metrics.changed_files * WEIGHT_CHANGED_FILE
        + metrics.comments * WEIGHT_COMMENT
        + metrics.deletions * WEIGHT_DELETION
        + metrics.review_comments * WEIGHT_REVIEW_COMMENT
    )


def sort_by_complexity(pulls: List[PullRequest], direction: str = DIRECTION_DESC) -> List[PullRequest]:
    """Most complex first; ties keep their order. The whole sequence is
    reversed for ascending direction."""
    ordered = sorted(pulls, key=lambda pull: -(pull.complexity or 0))
    if direction == DIRECTION_ASC:
        ordered.reverse()
    return ordered
