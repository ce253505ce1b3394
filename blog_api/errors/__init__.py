from blog_api.errors.auth import (
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    PasswordHashingError,
    UserAuthenticationError,
    auth_exception_handler,
)
from blog_api.errors.base import BaseAppError, create_exception_handler, error_content
from blog_api.errors.blog import (
    BlogError,
    BlogForbiddenError,
    BlogNotFoundError,
    BlogResponseError,
    blog_exception_handler,
)
from blog_api.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DatabaseInitializationError,
    DuplicateEntryError,
    database_exception_handler,
)
from blog_api.errors.validation import validation_exception_handler

__all__ = [
    "BaseAppError",
    "BlogError",
    "BlogForbiddenError",
    "BlogNotFoundError",
    "BlogResponseError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DatabaseInitializationError",
    "DuplicateEntryError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MissingTokenError",
    "PasswordHashingError",
    "UserAuthenticationError",
    "auth_exception_handler",
    "blog_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "error_content",
    "validation_exception_handler",
]
