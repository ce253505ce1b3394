"""Blog repository for database operations."""

from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from math import ceil
from uuid import UUID

from sqlalchemy import String, asc, cast, delete, desc, func, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import ColumnElement
from sqlmodel import col

from blog_api.configs import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, WORDS_PER_MINUTE, file_logger, settings
from blog_api.errors.database import DatabaseConnectionError, DatabaseError
from blog_api.models.blog import BlogDB
from blog_api.models.user import UserDB
from blog_api.schemas.blog import BlogCreate, BlogSort, BlogState, BlogUpdate

logger = file_logger(getLogger(__name__))

type BlogWithAuthor = tuple[BlogDB, UserDB | None]

SORT_COLUMNS = {
    "created_at": BlogDB.created_at,
    "title": BlogDB.title,
    "read_count": BlogDB.read_count,
    "reading_time": BlogDB.reading_time,
}


def calculate_reading_time(body: str) -> int:
    """
    Calculate reading time in minutes.

    Words are counted by splitting on single spaces, at 200 words per
    minute, rounded up. An empty body reads in 0 minutes.

    Args:
        body: Blog body text

    Returns:
        int: Reading time in minutes
    """
    if not body:
        return 0
    return ceil(len(body.split(" ")) / WORDS_PER_MINUTE)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass(frozen=True)
class BlogQuery:
    """
    Listing parameters understood by ``BlogRepository.list``.

    Attributes:
        page: 1-based page number
        limit: Page size
        search: Case-insensitive substring matched against title, tags and author
        sort: Permitted sort key
        state: State to list, published unless a filter was supplied
        author_id: Restrict to a single author
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_SIZE
    search: str | None = None
    sort: BlogSort | None = None
    state: BlogState = BlogState.PUBLISHED
    author_id: UUID | None = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class BlogRepository:
    """
    Repository for Blog database operations.

    This class implements the repository pattern for Blog entities,
    providing CRUD operations and the listing query.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def create(self, blog: BlogCreate, author_id: UUID) -> BlogDB:
        """
        Create a new blog post in the database.

        Args:
            blog: Blog creation schema
            author_id: UUID of the authenticated author

        Returns:
            BlogDB: Created blog database model

        Raises:
            DatabaseError: If the insert violates a constraint
            DatabaseConnectionError: For other database errors
        """
        db_blog = BlogDB(
            author_id=author_id,
            title=blog.title,
            description=blog.description,
            tags=blog.tags,
            body=blog.body,
            state=settings.DEFAULT_BLOG_STATE.value,
            read_count=0,
            reading_time=calculate_reading_time(blog.body),
        )
        return await self._add_and_refresh(db_blog)

    async def get_by_id(self, blog_id: UUID) -> BlogDB | None:
        """
        Get blog by ID regardless of state.

        Args:
            blog_id: Blog UUID

        Returns:
            BlogDB | None: Blog if found, None otherwise
        """
        result = await self.session.execute(
            select(BlogDB).where(col(BlogDB.id) == blog_id),
        )
        return result.scalar_one_or_none()

    async def get_with_author(self, blog_id: UUID) -> BlogWithAuthor | None:
        """
        Get a blog together with its author row.

        Args:
            blog_id: Blog UUID

        Returns:
            BlogWithAuthor | None: (blog, author) if found, None otherwise
        """
        statement = (
            select(BlogDB, UserDB)
            .outerjoin(UserDB, col(UserDB.uuid) == col(BlogDB.author_id))
            .where(col(BlogDB.id) == blog_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(statement)
        row = result.first()
        if row is None:
            return None
        blog, author = row
        return blog, author

    async def read_published(self, blog_id: UUID) -> BlogWithAuthor | None:
        """
        Count a read of a published blog and return it.

        The increment is a single ``UPDATE ... SET read_count = read_count + 1``
        so concurrent readers never lose updates. Drafts are not counted and
        are reported as missing.

        Args:
            blog_id: Blog UUID

        Returns:
            BlogWithAuthor | None: Post-increment (blog, author), None if the
            blog is missing or not published
        """
        result = await self.session.execute(
            self.read_count_increment(blog_id),
        )
        if result.rowcount == 0:
            return None
        return await self.get_with_author(blog_id)

    @staticmethod
    def read_count_increment(blog_id: UUID):  # noqa: ANN205
        """Build the atomic read-count increment for a published blog."""
        return (
            update(BlogDB)
            .where(
                col(BlogDB.id) == blog_id,
                col(BlogDB.state) == BlogState.PUBLISHED.value,
            )
            .values(read_count=col(BlogDB.read_count) + 1)
            .execution_options(synchronize_session=False)
        )

    def _tag_match(self, pattern: str) -> ColumnElement[bool]:
        """
        Match the pattern against each tag of the blog.

        Tags are unpacked with the dialect's JSON array function so the
        pattern never sees JSON escaping or punctuation.

        Args:
            pattern: Escaped ``LIKE`` pattern

        Returns:
            ColumnElement[bool]: ``EXISTS`` over the blog's tags
        """
        if self.session.get_bind().dialect.name == "postgresql":
            elements = func.json_array_elements_text(col(BlogDB.tags))
        else:
            elements = func.json_each(col(BlogDB.tags))
        tags = elements.table_valued("value").alias("tag")
        return (
            select(tags.c.value)
            .select_from(tags)
            .where(tags.c.value.ilike(pattern, escape="\\"))
            .exists()
        )

    def _predicate(self, query: BlogQuery) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = [col(BlogDB.state) == query.state.value]

        if query.author_id:
            conditions.append(col(BlogDB.author_id) == query.author_id)

        if query.search:
            pattern = f"%{_escape_like(query.search)}%"
            matches = [
                col(BlogDB.title).ilike(pattern, escape="\\"),
                self._tag_match(pattern),
            ]
            # UUIDs render with hyphens on PostgreSQL and as bare hex on SQLite
            if compact := query.search.replace("-", ""):
                author_text = func.replace(cast(col(BlogDB.author_id), String), "-", "")
                matches.append(
                    author_text.ilike(f"%{_escape_like(compact)}%", escape="\\"),
                )
            conditions.append(or_(*matches))

        return conditions

    async def count(self, query: BlogQuery) -> int:
        """
        Count blogs matching the listing predicate (ignores pagination).

        Args:
            query: Listing parameters

        Returns:
            int: Number of matching blogs
        """
        statement = select(func.count()).select_from(BlogDB).where(*self._predicate(query))
        result = await self.session.execute(statement)
        count = result.scalar()
        return count if count is not None else 0

    async def list(self, query: BlogQuery) -> tuple[list[BlogWithAuthor], int]:
        """
        Get one page of blogs with their authors, plus the total page count.

        Args:
            query: Listing parameters

        Returns:
            tuple[list[BlogWithAuthor], int]: Page items and total pages
        """
        sort = query.sort or BlogSort.CREATED_AT_DESC
        direction = desc if sort.descending else asc

        statement = (
            select(BlogDB, UserDB)
            .outerjoin(UserDB, col(UserDB.uuid) == col(BlogDB.author_id))
            .where(*self._predicate(query))
            .order_by(direction(SORT_COLUMNS[sort.field]), direction(col(BlogDB.id)))
            .offset(query.offset)
            .limit(query.limit)
        )

        result = await self.session.execute(statement)
        items = [(blog, author) for blog, author in result.all()]
        total = await self.count(query)

        logger.info(
            f"Listed {len(items)} of {total} {query.state.value} blogs "
            f"(page {query.page}, limit {query.limit})",
        )
        return items, ceil(total / query.limit)

    async def update(self, blog_id: UUID, blog_update: BlogUpdate) -> BlogDB | None:
        """
        Apply an edit to a blog.

        Only fields present in the request are written. Reading time is
        recomputed from the body after the merge.

        Args:
            blog_id: Blog UUID
            blog_update: Allow-listed edit fields

        Returns:
            BlogDB | None: Updated blog if found, None otherwise
        """
        db_blog = await self.get_by_id(blog_id)
        if not db_blog:
            return None

        update_data = blog_update.model_dump(exclude_unset=True, exclude_none=True)
        for key, value in update_data.items():
            setattr(db_blog, key, value)

        db_blog.reading_time = calculate_reading_time(db_blog.body)
        db_blog.updated_at = datetime.now(tz=UTC)

        return await self._add_and_refresh(db_blog)

    async def set_state(self, blog_id: UUID, state: BlogState) -> BlogDB | None:
        """
        Change the state of a blog.

        Args:
            blog_id: Blog UUID
            state: New state

        Returns:
            BlogDB | None: Updated blog if found, None otherwise
        """
        db_blog = await self.get_by_id(blog_id)
        if not db_blog:
            return None

        db_blog.state = state.value
        db_blog.updated_at = datetime.now(tz=UTC)

        return await self._add_and_refresh(db_blog)

    async def delete(self, blog_id: UUID) -> bool:
        """
        Delete blog by ID.

        Args:
            blog_id: Blog UUID

        Returns:
            bool: True if blog was deleted, False if not found
        """
        result = await self.session.execute(
            delete(BlogDB).where(col(BlogDB.id) == blog_id),
        )
        await self.session.flush()
        return result.rowcount > 0

    async def _add_and_refresh(self, db_blog: BlogDB) -> BlogDB:
        """
        Add a blog and refresh it from the database with error handling.

        Args:
            db_blog: Blog to add

        Returns:
            BlogDB: Refreshed blog

        Raises:
            DatabaseError: If a constraint is violated
            DatabaseConnectionError: For other database errors
        """
        try:
            self.session.add(db_blog)
            await self.session.flush()
            await self.session.refresh(db_blog)
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail=f"Failed to save blog: {e}") from e
        return db_blog
