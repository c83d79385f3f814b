"""
Database Engine Management
SQLAlchemy 2.0 async engine helpers.

The index facade never owns an engine; these helpers exist for callers
that want one built from settings. Opening and disposing it is theirs.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from libsql_vector.core.config import settings


def create_engine(url: str | None = None, *, echo: bool | None = None) -> AsyncEngine:
    """
    Create an async database engine

    Args:
        url: SQLAlchemy async URL (defaults to settings.database_url)
        echo: SQLAlchemy statement logging (defaults to settings.database_echo)

    Returns:
        AsyncEngine instance

    Usage:
        engine = create_engine("sqlite+aiosqlite:///./movies.db")
        index = Index(engine, IndexOptions(table_name="movies", dimensions=1024))
    """
    return create_async_engine(
        url or settings.database_url,
        echo=settings.database_echo if echo is None else echo,
    )


async def dispose_engine(engine: AsyncEngine) -> None:
    """
    Close database connections
    Should be called on application shutdown
    """
    await engine.dispose()
