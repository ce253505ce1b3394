from blog_api.configs.settings import (
    DEFAULT_ERROR_MESSAGE,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    WORDS_PER_MINUTE,
    LimiterConfig,
    file_logger,
    settings,
)

__all__ = [
    "DEFAULT_ERROR_MESSAGE",
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "LimiterConfig",
    "WORDS_PER_MINUTE",
    "file_logger",
    "settings",
]
