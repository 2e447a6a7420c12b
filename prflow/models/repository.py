"""Repository owned by a user or an organization."""

from pydantic import BaseModel


class Repository(BaseModel):
    """Repository (owner login and name)."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"
