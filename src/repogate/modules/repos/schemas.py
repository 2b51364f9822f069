"""Repository schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, TypeAdapter


class Repository(BaseModel):
    """One entry of GitHub's ``GET /user/repos`` listing.

    Only the fields the templates use are declared; the rest of
    GitHub's payload is kept as extra attributes.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    full_name: str
    html_url: str
    description: str | None = None
    private: bool = False
    fork: bool = False
    language: str | None = None
    stargazers_count: int = 0
    updated_at: datetime | None = None


RepositoryList = TypeAdapter(list[Repository])
