from uuid import UUID

from pydantic import BaseModel


class Token(BaseModel):
    """Token schema for JWT access tokens."""

    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    """Token data schema for a verified token payload."""

    user_id: UUID
    jti: str
    token_type: str
