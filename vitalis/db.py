from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from vitalis.config import settings

_ASYNC_SCHEME = "postgresql+asyncpg://"


def normalize_database_url(url: str) -> str:
    """Point plain Postgres URLs (as handed out by hosting providers) at asyncpg."""
    for scheme in ("postgres://", "postgresql://"):
        if url.startswith(scheme):
            return _ASYNC_SCHEME + url[len(scheme):]
    return url


engine = create_async_engine(normalize_database_url(settings.database_url), pool_pre_ping=True)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_session() -> AsyncSession:  # type: ignore[misc]
    async with async_session() as session:
        yield session
