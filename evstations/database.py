"""
Database connection and session management.
Uses SQLAlchemy async with asyncpg for PostgreSQL (aiosqlite for local runs).
"""
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool
from evstations.config import get_settings


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


def get_async_database_url(url: str) -> str:
    """
    Convert postgres:// to postgresql+asyncpg:// for async driver.
    Also convert sslmode=require to ssl=require for asyncpg compatibility.
    """
    # Convert protocol
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)

    # Convert sslmode to ssl for asyncpg
    url = url.replace("sslmode=", "ssl=")

    return url


def create_engine_for_url(url: str, echo: bool = False):
    """Create an async engine; SQLite files get a NullPool."""
    url = get_async_database_url(url)
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=echo, poolclass=NullPool)
    return create_async_engine(url, echo=echo, pool_pre_ping=True)


settings = get_settings()

# Create async engine
engine = create_engine_for_url(settings.database_url, echo=settings.debug)

# Create async session factory
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncSession:
    """Dependency for getting database session."""
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db():
    """Initialize database tables."""
    # Register models on Base.metadata
    import evstations.models.station  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
