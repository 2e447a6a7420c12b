"""Tests for prflow.pull_request.reconciler (recover a failed submit)."""

from unittest.mock import Mock

import pytest

from prflow.adapters.base import GitPlatformError
from prflow.pull_request.reconciler import reconcile_submit


def _matching(make_pull, **overrides):
    fields = dict(
        base_ref="feature",
        head_ref="feature",
        base_sha="abc",
        head_sha="abc",
        base_owner="X",
        head_owner="alice",
    )
    fields.update(overrides)
    return make_pull(7, **fields)


def test_returns_matching_open_pull_request(make_pull) -> None:
    """Submit to X from branch feature fails; the equivalent open pull request is returned."""
    existing = _matching(make_pull)
    adapter = Mock()
    adapter.list_pull_requests.return_value = [make_pull(3), existing]
    error = GitPlatformError("422: Validation Failed", status_code=422)

    pull = reconcile_submit(adapter, error, "X", "repo", "feature", "feature", "alice")

    assert pull is existing
    adapter.list_pull_requests.assert_called_once_with("X", "repo", state="open")


def test_reraises_original_error_without_match(make_pull) -> None:
    adapter = Mock()
    adapter.list_pull_requests.return_value = [make_pull(3)]
    error = GitPlatformError("422: Validation Failed", status_code=422)

    with pytest.raises(GitPlatformError) as exc_info:
        reconcile_submit(adapter, error, "X", "repo", "feature", "feature", "alice")

    assert exc_info.value is error


@pytest.mark.parametrize(
    "overrides",
    [
        {"base_ref": "main"},
        {"head_ref": "other"},
        {"head_sha": "def"},
        {"base_owner": "Y"},
        {"head_owner": "bob"},
    ],
)
def test_every_field_must_match(make_pull, overrides) -> None:
    adapter = Mock()
    adapter.list_pull_requests.return_value = [_matching(make_pull, **overrides)]
    error = GitPlatformError("422: Validation Failed", status_code=422)

    with pytest.raises(GitPlatformError) as exc_info:
        reconcile_submit(adapter, error, "X", "repo", "feature", "feature", "alice")

    assert exc_info.value is error


def test_listing_failure_reraises_original_error() -> None:
    adapter = Mock()
    adapter.list_pull_requests.side_effect = GitPlatformError("500: boom", status_code=500)
    error = GitPlatformError("422: Validation Failed", status_code=422)

    with pytest.raises(GitPlatformError) as exc_info:
        reconcile_submit(adapter, error, "X", "repo", "feature", "feature", "alice")

    assert exc_info.value is error


def test_several_matches_reraise_original_error(make_pull) -> None:
    """Two equivalent open pull requests are ambiguous, so the create error stands."""
    first = _matching(make_pull)
    second = _matching(make_pull).model_copy(update={"number": 8})
    adapter = Mock()
    adapter.list_pull_requests.return_value = [first, second]
    error = GitPlatformError("422: Validation Failed", status_code=422)

    with pytest.raises(GitPlatformError) as exc_info:
        reconcile_submit(adapter, error, "X", "repo", "feature", "feature", "alice")

    assert exc_info.value is error
