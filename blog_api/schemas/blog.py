"""
Blog schemas for the blogging API.

This module defines the request and response models for blog posts,
including the closed set of post states and permitted sort keys.
"""

from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class BlogState(StrEnum):
    """Lifecycle state controlling public visibility of a blog."""

    DRAFT = "draft"
    PUBLISHED = "published"


class BlogSort(StrEnum):
    """
    Permitted sort keys for blog listings.

    A leading ``-`` sorts descending, otherwise ascending.
    """

    CREATED_AT = "created_at"
    CREATED_AT_DESC = "-created_at"
    TITLE = "title"
    TITLE_DESC = "-title"
    READ_COUNT = "read_count"
    READ_COUNT_DESC = "-read_count"
    READING_TIME = "reading_time"
    READING_TIME_DESC = "-reading_time"

    @property
    def field(self) -> str:
        return self.value.removeprefix("-")

    @property
    def descending(self) -> bool:
        return self.value.startswith("-")


def _clean_tags(tags: list[str]) -> list[str]:
    """Strip whitespace and drop empty tags, keeping the caller's order."""
    return [tag.strip() for tag in tags if tag and tag.strip()]


class AuthorSummary(BaseModel):
    """Author fields embedded in blog responses."""

    model_config = ConfigDict(from_attributes=True)

    first_name: str
    last_name: str
    email: EmailStr


class BlogCreate(BaseModel):
    """Blog creation model (request body, the author comes from the token)."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Blog title",
        examples=["A Week in Lisbon"],
    )
    description: str | None = Field(
        default=None,
        max_length=500,
        description="Short description shown in listings",
    )
    tags: list[str] = Field(
        default_factory=list,
        max_length=20,
        description="Ordered list of tags",
        examples=[["travel", "portugal"]],
    )
    body: str = Field(..., description="Blog body text")

    @field_validator("tags", mode="after")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v)


class BlogUpdate(BaseModel):
    """
    Blog edit model.

    Only these fields are editable; anything else in the request body is
    rejected so callers cannot overwrite the author, state or counters.
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "title": "A Week in Lisbon (updated)",
                "body": "Updated body text...",
                "tags": ["travel", "portugal", "food"],
            },
        },
    )

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=500)
    tags: list[str] | None = Field(default=None, max_length=20)
    body: str | None = None

    @field_validator("tags", mode="after")
    @classmethod
    def validate_tags(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        return _clean_tags(v)


class BlogStateUpdate(BaseModel):
    """Blog state change model."""

    model_config = ConfigDict(extra="forbid")

    state: BlogState = Field(..., description="New blog state")


class BlogResponse(BaseModel):
    """Blog response model."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str | None = None
    tags: list[str]
    body: str
    state: BlogState
    author_id: UUID
    author: AuthorSummary | None = None
    read_count: int
    reading_time: int
    created_at: str
    updated_at: str


class BlogListResponse(BaseModel):
    """Paginated blog listing envelope."""

    model_config = ConfigDict(populate_by_name=True)

    blogs: list[BlogResponse]
    total_pages: int = Field(alias="totalPages")
    current_page: int = Field(alias="currentPage")


class MessageResponse(BaseModel):
    """Plain message payload."""

    message: str
