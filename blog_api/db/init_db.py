"""
Database initialization script.

Creates the tables for a fresh development database. Run with
``python -m blog_api.db.init_db``. Production schemas are managed by
Alembic (``alembic upgrade head``).
"""

from asyncio import run as asyncio_run
from logging import getLogger

from blog_api.configs import file_logger
from blog_api.db.database import close_db, init_db
from blog_api.errors.database import DatabaseInitializationError

logger = file_logger(getLogger(__name__))


async def main() -> None:
    try:
        logger.info("Initializing database...")
        await init_db()
        logger.info("Database ready!")
    except Exception as e:
        logger.exception("Failed to initialize database")
        raise DatabaseInitializationError from e
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio_run(main())
