"""Plain-text rendering of pull requests and listings for the CLI."""

from datetime import datetime, timezone
from typing import List

from prflow.models import PullRequest, RepositoryListing

STATUS_MARKS = {"success": " ✓", "failure": " ✗"}


def humanize_age(created_at: datetime | None, now: datetime | None = None) -> str:
    """Short age like "3 days ago"; empty when unknown."""
    if created_at is None:
        return ""
    now = now or datetime.now(timezone.utc)
    seconds = int((now - created_at).total_seconds())
    for unit, size in (("year", 31536000), ("month", 2592000), ("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size:
            count = seconds // size
            return f"{count} {unit}{'s' if count != 1 else ''} ago"
    return "just now"


def format_pull(
    pull: PullRequest,
    link: bool = False,
    detailed: bool = False,
    show_body: bool = False,
    now: datetime | None = None,
) -> List[str]:
    """Lines describing one pull request."""
    headline = f"#{pull.number} {pull.title} @{pull.author}"
    age = humanize_age(pull.created_at, now=now)
    if age:
        headline += f" ({age})"
    headline += STATUS_MARKS.get(pull.combined_status or "", "")
    if link and pull.html_url:
        headline += f" {pull.html_url}"

    lines = [headline]
    if detailed and not link and pull.html_url:
        lines.append(pull.html_url)
    if pull.mergeable_state == "clean":
        lines.append(f"Mergeable ({pull.mergeable_state})")
    elif pull.mergeable_state is not None:
        lines.append(f"Not mergeable ({pull.mergeable_state})")
    if (show_body or detailed) and pull.body:
        lines.append(pull.body + "\n")
    return lines


def format_listing(
    listing: RepositoryListing,
    link: bool = False,
    detailed: bool = False,
    now: datetime | None = None,
) -> List[str]:
    """Repository header, then each base branch with its pull requests.

    Empty and failed listings render nothing.
    """
    if listing.error or not listing.pulls:
        return []
    lines = [f"{listing.owner}/{listing.repo}"]
    for group in listing.branches:
        lines.append(f"{group.name} ({group.total})")
        for pull in group.pulls:
            lines.extend(format_pull(pull, link=link, detailed=detailed, now=now))
    return lines
