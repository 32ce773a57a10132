"""
Database initialization script.

Creates the tables for a local or development database. Production schemas
are managed by Alembic: run `alembic upgrade head` instead.
"""

from asyncio import run as asyncio_run

from quillblog.db.database import close_db, init_db
from quillblog.errors.database import DatabaseConnectionError
from quillblog.monitoring.logging import configure_logging, get_logger

logger = get_logger(__name__)


async def main() -> None:
    """Create tables and close the pool."""
    try:
        logger.info("Initializing database...")
        await init_db()
        logger.info("Database ready!")
    except OSError as e:
        logger.exception("Failed to connect to database")
        raise DatabaseConnectionError from e
    finally:
        await close_db()


if __name__ == "__main__":
    configure_logging()
    asyncio_run(main())
