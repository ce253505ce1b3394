"""Blog errors."""

from logging import getLogger

from starlette.status import (
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from blog_api.configs import file_logger
from blog_api.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class BlogError(BaseAppError):
    """Base class for blog errors."""


class BlogNotFoundError(BlogError):
    """Raised when a blog does not exist or is not visible to readers."""

    def __init__(self) -> None:
        super().__init__("Blog not found", HTTP_404_NOT_FOUND)


class BlogForbiddenError(BlogError):
    """Raised when the caller is not the blog's author."""

    def __init__(self, action: str = "modify") -> None:
        super().__init__(f"You do not have permission to {action} this blog", HTTP_403_FORBIDDEN)


class BlogResponseError(BlogError):
    """Raised when a stored blog cannot be converted to its response model."""

    def __init__(self, detail: str = "Failed to build blog response") -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)


blog_exception_handler = create_exception_handler(logger)
