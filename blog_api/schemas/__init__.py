from blog_api.schemas.auth import Token, TokenData
from blog_api.schemas.blog import (
    AuthorSummary,
    BlogCreate,
    BlogListResponse,
    BlogResponse,
    BlogSort,
    BlogState,
    BlogStateUpdate,
    BlogUpdate,
    MessageResponse,
)
from blog_api.schemas.health import HealthCheckResponse
from blog_api.schemas.user import UserCreate, UserResponse

__all__ = [
    "AuthorSummary",
    "BlogCreate",
    "BlogListResponse",
    "BlogResponse",
    "BlogSort",
    "BlogState",
    "BlogStateUpdate",
    "BlogUpdate",
    "HealthCheckResponse",
    "MessageResponse",
    "Token",
    "TokenData",
    "UserCreate",
    "UserResponse",
]
