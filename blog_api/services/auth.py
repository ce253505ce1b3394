"""Authentication service handling signup and password login."""

from datetime import timedelta
from logging import getLogger

from blog_api.configs import file_logger, settings
from blog_api.errors.auth import InvalidCredentialsError
from blog_api.managers.password_manager import verify_password
from blog_api.managers.token_manager import create_access_token
from blog_api.models import UserDB
from blog_api.repositories import UserRepository
from blog_api.schemas.auth import Token
from blog_api.schemas.user import UserCreate

logger = file_logger(getLogger(__name__))


class AuthService:
    """Service for handling user authentication."""

    def __init__(self, user_repo: UserRepository) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: User repository for database operations
        """
        self.user_repo = user_repo

    async def register_user(self, user_create: UserCreate) -> UserDB:
        """
        Register a new user with a hashed password.

        Args:
            user_create: Signup payload

        Returns:
            UserDB: Created user

        Raises:
            DuplicateEntryError: If the email is already registered
        """
        user = await self.user_repo.create(user_create)
        logger.info(f"User {user.uuid} registered")
        return user

    async def authenticate_user(self, email: str, password: str | None) -> UserDB:
        """
        Authenticate a user by email and password.

        Args:
            email: User email
            password: User password

        Returns:
            UserDB: Authenticated user

        Raises:
            InvalidCredentialsError: If authentication fails
        """
        user = await self.user_repo.get_by_email(email)
        hashed = user.password_hash if user else None

        # Unknown users still pay for a verification.
        if not await verify_password(password or "", hashed) or user is None:
            raise InvalidCredentialsError

        return user

    def create_token_for_user(self, user: UserDB) -> Token:
        """
        Create an access token for a user.

        Args:
            user: User entity

        Returns:
            Token: Bearer token
        """
        access_token = create_access_token(
            user_id=user.uuid,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )
        return Token(access_token=access_token, token_type="bearer")
