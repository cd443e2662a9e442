"""Request/response schemas for authors."""

from pydantic import BaseModel, ConfigDict, Field


class AuthorBase(BaseModel):
    firstname: str = Field(..., min_length=1, max_length=255)
    lastname: str = Field(..., min_length=1, max_length=255)
    bio: str | None = Field(default=None, max_length=10_000)


class AuthorCreate(AuthorBase):
    """Body of POST /authors."""


class AuthorUpdate(AuthorBase):
    """Body of PUT /authors/{id}; id must match the path."""

    id: int


class AuthorRead(AuthorBase):
    """Author as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
