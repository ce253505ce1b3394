"""Blog database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import JSON, DateTime, Index, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String


class BlogDB(SQLModel, table=True):
    """
    Blog database model.

    This model represents the blogs table in the database, with a
    foreign key relationship to the User model for the author.
    """

    __tablename__ = cast("declared_attr[str]", "blogs")

    __table_args__ = (
        Index("ix_blogs_state_created", "state", "created_at"),
        Index("ix_blogs_author_state", "author_id", "state"),
    )

    # Primary key
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Blog ID",
    )

    # Foreign key to User, never reassigned after creation
    author_id: UUID = Field(
        sa_column=Column(
            "author_id",
            ForeignKey("users.uuid", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Author ID (foreign key to users.uuid)",
    )

    # Required fields
    title: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Blog title",
    )
    body: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Blog body text",
    )

    # Optional fields
    description: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Short description",
    )

    # Ordered tag list (stored as JSON)
    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Blog tags",
    )

    state: str = Field(
        default="draft",
        sa_column=Column(String(20), nullable=False, index=True),
        description="Blog state (draft, published)",
    )

    # Metadata fields
    read_count: int = Field(
        default=0,
        nullable=False,
        description="Number of single-post reads",
    )
    reading_time: int = Field(
        default=0,
        nullable=False,
        description="Estimated reading time in minutes",
    )

    # Timestamps (timezone-aware)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "author_id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "A Week in Lisbon",
                "description": "Trams, tiles and pastel de nata",
                "body": "Lisbon is a city of hills...",
                "tags": ["travel", "portugal"],
                "state": "draft",
                "read_count": 0,
                "reading_time": 1,
            },
        },
    )
