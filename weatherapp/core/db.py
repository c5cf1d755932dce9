from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from weatherapp.core.config import settings


# ---------------------------------------------------------------------
# Database engine
# ---------------------------------------------------------------------

# Connections are pooled by the engine and checked before use.
engine: AsyncEngine = create_async_engine(
    settings.database_url,
    pool_pre_ping=True,
)


# ---------------------------------------------------------------------
# Database session factory
# ---------------------------------------------------------------------

# Objects stay loaded after commit so repositories can hand them back
# to the router for serialization.
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ---------------------------------------------------------------------
# Dependency injection
# ---------------------------------------------------------------------

async def get_db() -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency that provides an asynchronous database session.

    One session is opened per request and released when the request ends,
    whether the handler returned normally or raised.
    """
    async with AsyncSessionLocal() as session:
        yield session
