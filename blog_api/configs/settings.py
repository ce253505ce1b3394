"""Application settings and configuration constants.

This module contains application settings, constants, and configuration
values for the blogging API.
"""

from logging import ERROR, INFO, Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pydantic import BaseModel, SecretStr
from pydantic_settings.main import BaseSettings, SettingsConfigDict
from pythonjsonlogger.json import JsonFormatter

from blog_api.schemas.blog import BlogState

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Constants ---
WORDS_PER_MINUTE = 200
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5

# Response constants
DEFAULT_ERROR_MESSAGE = "Internal Server Error"


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Blogging API"
    DEBUG: bool = False

    # Environment
    ENVIRONMENT: str = "development"
    HOST: str = "127.0.0.1"
    PORT: int = 5000
    PRODUCTION_FRONTEND_URL: str | None = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = True
    LOG_DIR: str = "logs"

    # Database Configuration
    DATABASE_URL: str = "sqlite+aiosqlite:///./blog.db"
    DATABASE_ECHO: bool = False
    POOL_SIZE: int = 5
    MAX_OVERFLOW: int = 10
    POOL_TIMEOUT: int = 30  # seconds
    POOL_RECYCLE: int = 1800  # seconds

    # JWT Configuration
    JWT_SECRET: SecretStr = SecretStr("change-me-in-production")
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "blog-api"
    JWT_AUDIENCE: str = "blog-api-clients"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Blog behaviour
    DEFAULT_BLOG_STATE: BlogState = BlogState.DRAFT
    PUBLIC_STATE_FILTER: bool = True

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    @property
    def is_postgres(self) -> bool:
        return self.DATABASE_URL.startswith("postgresql")


settings = Settings()


class LimiterConfig(BaseModel):
    """Keyword arguments for the slowapi Limiter."""

    enabled: bool = settings.RATE_LIMIT_ENABLED
    storage_uri: str = settings.RATE_LIMIT_STORAGE_URI
    default_limits: list[str] = ["100/minute"]
    headers_enabled: bool = False
    strategy: str = "fixed-window"
    key_prefix: str = "blog_api"


def _has_file_handler(logger: Logger, filename: Path) -> bool:
    return any(
        isinstance(handler, RotatingFileHandler)
        and Path(handler.baseFilename) == filename.resolve()
        for handler in logger.handlers
    )


def file_logger(logger: Logger) -> Logger:
    """
    Attach rotating JSON file handlers to a logger.

    ``combined.log`` receives everything from INFO up, ``error.log`` only
    errors. Nothing is attached when ``LOG_TO_FILE`` is disabled.

    Args:
        logger: Logger to decorate.

    Returns:
        Logger: The same logger instance.
    """
    if not settings.LOG_TO_FILE:
        return logger

    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    for filename, level in (("combined.log", INFO), ("error.log", ERROR)):
        path = log_dir / filename
        if _has_file_handler(logger, path):
            continue
        handler = RotatingFileHandler(
            path,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
        )
        handler.setLevel(level)
        handler.setFormatter(JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logger.addHandler(handler)

    return logger
