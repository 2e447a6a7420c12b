"""GitHub API adapter."""

from datetime import datetime
from typing import Any, Dict, List

import requests

from prflow.adapters.base import GitPlatformAdapter, GitPlatformError, GitPlatformNotFoundError
from prflow.models import Comment, CreatePullRequest, PullRequest, PullRequestRef, Repository

PER_PAGE = 100


def _parse_iso(s: str | None) -> datetime | None:
    if not s:
        return None
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _ref_from_api(data: Dict[str, Any]) -> PullRequestRef:
    user = data.get("user") or {}
    repo = data.get("repo") or {}
    return PullRequestRef(
        ref=data.get("ref", ""),
        sha=data.get("sha", ""),
        owner=user.get("login", ""),
        remote_url=repo.get("ssh_url") or repo.get("clone_url"),
    )


def _pr_from_api(data: Dict[str, Any]) -> PullRequest:
    user = data.get("user") or {}
    return PullRequest(
        number=data["number"],
        title=data.get("title") or "",
        body=data.get("body") or "",
        state=data.get("state", "open"),
        base=_ref_from_api(data.get("base") or {}),
        head=_ref_from_api(data.get("head") or {}),
        author=user.get("login", ""),
        html_url=data.get("html_url"),
        created_at=_parse_iso(data.get("created_at")),
        mergeable_state=data.get("mergeable_state"),
        additions=data.get("additions"),
        changed_files=data.get("changed_files"),
        comments=data.get("comments"),
        deletions=data.get("deletions"),
        review_comments=data.get("review_comments"),
    )


def _comment_from_api(data: Dict[str, Any]) -> Comment:
    user = data.get("user") or {}
    return Comment(
        id=data["id"],
        body=data.get("body") or "",
        author=user.get("login", ""),
        html_url=data.get("html_url"),
        created_at=_parse_iso(data.get("created_at")),
    )


def _repository_from_api(data: Dict[str, Any]) -> Repository:
    owner = data.get("owner") or {}
    return Repository(owner=owner.get("login", ""), name=data["name"])


class GitHubAdapter(GitPlatformAdapter):
    """GitHub API implementation."""

    def __init__(self, token: str | None, api_url: str = "https://api.github.com") -> None:
        self._api_url = api_url.rstrip("/")
        self._session = requests.Session()
        if token:
            self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _url(self, path: str) -> str:
        return f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = path if path.startswith("http") else self._url(path)
        try:
            resp = self._session.request(method, url, params=params, json=json, timeout=30)
        except requests.RequestException as e:
            raise GitPlatformError(f"{method} {url} failed: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                payload = resp.json()
                msg = payload.get("message", msg)
                errors = payload.get("errors") or []
                if errors and isinstance(errors[0], dict) and errors[0].get("message"):
                    msg = f"{msg}: {errors[0]['message']}"
            except ValueError:
                pass
            if resp.status_code == 404:
                raise GitPlatformNotFoundError(f"404: {msg}", status_code=404)
            raise GitPlatformError(f"{resp.status_code}: {msg}", status_code=resp.status_code)
        return resp

    def _paginate(self, path: str, params: Dict[str, Any] | None = None) -> List[Dict[str, Any]]:
        """GET every page of a list endpoint, following Link: rel=next."""
        items: List[Dict[str, Any]] = []
        url: str | None = path
        page_params: Dict[str, Any] | None = {**(params or {}), "per_page": PER_PAGE}
        while url:
            resp = self._request("GET", url, params=page_params)
            items.extend(resp.json() or [])
            url = (resp.links or {}).get("next", {}).get("url")
            # The next link already carries the query string
            page_params = None
        return items

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequest:
        resp = self._request("GET", f"/repos/{owner}/{repo}/pulls/{number}")
        return _pr_from_api(resp.json())

    def list_pull_requests(
        self,
        owner: str,
        repo: str,
        state: str = "open",
        sort: str = "created",
        direction: str = "desc",
    ) -> List[PullRequest]:
        data = self._paginate(
            f"/repos/{owner}/{repo}/pulls",
            params={"state": state, "sort": sort, "direction": direction},
        )
        return [_pr_from_api(d) for d in data]

    def create_pull_request(self, owner: str, repo: str, request: CreatePullRequest) -> PullRequest:
        payload: Dict[str, Any] = {"head": request.head, "base": request.base}
        if request.issue is not None:
            payload["issue"] = request.issue
        else:
            payload["title"] = request.title
            payload["body"] = request.body or ""
        resp = self._request("POST", f"/repos/{owner}/{repo}/pulls", json=payload)
        return _pr_from_api(resp.json())

    def update_pull_request(
        self,
        owner: str,
        repo: str,
        number: int,
        title: str,
        body: str | None,
        state: str,
    ) -> PullRequest:
        payload: Dict[str, Any] = {"title": title, "state": state}
        if body is not None:
            payload["body"] = body
        resp = self._request("PATCH", f"/repos/{owner}/{repo}/pulls/{number}", json=payload)
        return _pr_from_api(resp.json())

    def get_combined_status(self, owner: str, repo: str, sha: str) -> str | None:
        resp = self._request("GET", f"/repos/{owner}/{repo}/commits/{sha}/status")
        return (resp.json() or {}).get("state")

    def list_repositories(self, user: str | None = None, org: str | None = None) -> List[Repository]:
        if org:
            path = f"/orgs/{org}/repos"
        elif user:
            path = f"/users/{user}/repos"
        else:
            path = "/user/repos"
        data = self._paginate(path, params={"type": "all"})
        return [_repository_from_api(d) for d in data]

    def create_comment(self, owner: str, repo: str, number: int, body: str) -> Comment:
        resp = self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues/{number}/comments",
            json={"body": body},
        )
        return _comment_from_api(resp.json())

    def get_authenticated_login(self) -> str:
        resp = self._request("GET", "/user")
        return (resp.json() or {}).get("login", "")
