from blog_api.managers.password_manager import hash_password, verify_password
from blog_api.managers.rate_limiter import close_limiter, limiter, rate_limit_exceeded_handler
from blog_api.managers.token_manager import (
    create_access_token,
    decode_access_token,
)

__all__ = [
    "close_limiter",
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "limiter",
    "rate_limit_exceeded_handler",
    "verify_password",
]
