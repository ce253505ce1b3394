"""
User schemas for registration and authentication responses.

Users are only created through signup; the blog subsystem reads them to
resolve authors but never changes them.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr, field_validator


class UserCreate(BaseModel):
    """User registration model (request body)."""

    model_config = ConfigDict(frozen=True)

    first_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="User first name",
        examples=["Ada"],
    )
    last_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="User last name",
        examples=["Lovelace"],
    )
    email: EmailStr = Field(
        ...,
        description="Email address",
        examples=["ada@example.com"],
    )
    password: SecretStr = Field(
        ...,
        min_length=8,
        description="Password",
        examples=["Password123"],
    )

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Store emails lowercase so uniqueness is case-insensitive."""
        return v.lower()


class UserResponse(BaseModel):
    """User response model (without sensitive information)."""

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
    )

    uuid: UUID = Field(alias="id")
    first_name: str
    last_name: str
    email: EmailStr
    created_at: str
