"""User repository for database operations."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col

from blog_api.errors.database import DatabaseError, DuplicateEntryError
from blog_api.managers.password_manager import hash_password
from blog_api.models.user import UserDB
from blog_api.schemas.user import UserCreate


class UserRepository:
    """
    Repository for User database operations.

    Blog handlers only read users; creation happens through signup.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def create(self, user: UserCreate) -> UserDB:
        """
        Create a new user in the database.

        Args:
            user: User schema with user data

        Returns:
            UserDB: Created user database model

        Raises:
            DuplicateEntryError: If the email already exists
            DatabaseError: For other database errors
        """
        password_hash = await hash_password(user.password.get_secret_value())

        db_user = UserDB(
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            password_hash=password_hash,
        )

        try:
            self.session.add(db_user)
            await self.session.flush()
            await self.session.refresh(db_user)
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            if "email" in error_msg.lower():
                raise DuplicateEntryError(
                    detail=f"Email '{user.email}' already exists",
                ) from e
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e
        return db_user

    async def get_by_id(self, user_id: UUID) -> UserDB | None:
        """
        Get user by ID.

        Args:
            user_id: User UUID

        Returns:
            UserDB | None: User if found, None otherwise
        """
        result = await self.session.execute(
            select(UserDB).where(col(UserDB.uuid) == user_id),
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserDB | None:
        """
        Get user by email.

        Args:
            email: Email to search for, compared case-insensitively

        Returns:
            UserDB | None: User if found, None otherwise
        """
        result = await self.session.execute(
            select(UserDB).where(col(UserDB.email) == email.lower()),
        )
        return result.scalar_one_or_none()
