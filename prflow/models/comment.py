"""Comment on a pull request (issue comment)."""

from datetime import datetime

from pydantic import BaseModel


class Comment(BaseModel):
    """Comment on a pull request."""

    id: int
    body: str
    author: str
    html_url: str | None = None
    created_at: datetime | None = None
