from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession, AsyncEngine
from core.config import settings
from models.base import Base


def build_engine(url: str = None, **kwargs) -> AsyncEngine:
    url = url or settings.DATABASE_URL
    options = dict(echo=False, future=True)
    if not url.startswith("sqlite"):
        # Server databases (postgresql+asyncpg) get a tuned pool
        options.update(
            pool_pre_ping=True,
            pool_recycle=3600,
            pool_size=5,
            max_overflow=5,
        )
    options.update(kwargs)
    return create_async_engine(url, **options)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


engine = build_engine()
AsyncSessionLocal = build_session_factory(engine)


async def init_db(bind: AsyncEngine = None):
    """Create the key-value table if it does not exist yet."""
    import models.kv  # noqa: F401  registers KeyValueEntry on Base.metadata
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
