"""Repository layer for database operations."""

from blog_api.repositories.blog import BlogQuery, BlogRepository, calculate_reading_time
from blog_api.repositories.user import UserRepository

__all__ = ["BlogQuery", "BlogRepository", "UserRepository", "calculate_reading_time"]
