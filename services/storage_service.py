"""Durable key-value store used by every progress service.

Values are opaque strings; each service encodes and decodes its own records.
Backends raise ``StorageUnavailable`` for any I/O fault so callers only have
one error type to handle.
"""
import asyncio
from typing import Dict, Iterable, List, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError
from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from core.config import settings
from core.exceptions import StorageUnavailable
from core.logger import logger
from models.kv import KeyValueEntry

USER_STATS = "user_stats"
EXAM_RESULTS = "exam_results"
DAILY_STREAK = "daily_streak"
LAST_STUDY_DATE = "last_study_date"


class StoreKeys:
    """Resolves the stable key names, optionally scoped to one local account."""

    def __init__(self, user_id: Optional[str] = None, prefix: Optional[str] = None):
        self.user_id = user_id
        self.prefix = settings.STORE_KEY_PREFIX if prefix is None else prefix

    def _resolve(self, name: str) -> str:
        key = f"{self.user_id}:{name}" if self.user_id else name
        return f"{self.prefix}{key}"

    @property
    def user_stats(self) -> str:
        return self._resolve(USER_STATS)

    @property
    def exam_results(self) -> str:
        return self._resolve(EXAM_RESULTS)

    @property
    def daily_streak(self) -> str:
        return self._resolve(DAILY_STREAK)

    @property
    def last_study_date(self) -> str:
        return self._resolve(LAST_STUDY_DATE)

    def all(self) -> List[str]:
        return [self.user_stats, self.exam_results, self.daily_streak, self.last_study_date]


class KeyValueStore:
    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}

    def lock(self, key: str) -> asyncio.Lock:
        """Per-key lock; hold it across a read-modify-write of ``key``."""
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        return self._locks[key]

    async def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    async def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    async def remove_many(self, keys: Iterable[str]) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        pass


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, data: Dict[str, str] = None):
        super().__init__()
        self.data: Dict[str, str] = dict(data or {})

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value

    async def remove_many(self, keys: Iterable[str]) -> None:
        for key in keys:
            self.data.pop(key, None)


class RedisKeyValueStore(KeyValueStore):
    def __init__(self, redis: Redis):
        super().__init__()
        self.redis = redis

    @classmethod
    def from_url(cls, url: str = None) -> "RedisKeyValueStore":
        return cls(Redis.from_url(url or settings.REDIS_URL, decode_responses=True))

    async def get(self, key: str) -> Optional[str]:
        try:
            value = await self.redis.get(key)
        except RedisError as e:
            raise StorageUnavailable("get", key, e) from e
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        try:
            await self.redis.set(key, value)
        except RedisError as e:
            raise StorageUnavailable("set", key, e) from e

    async def remove_many(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        if not keys:
            return
        try:
            await self.redis.delete(*keys)
        except RedisError as e:
            raise StorageUnavailable("remove_many", ",".join(keys), e) from e

    async def close(self) -> None:
        await self.redis.aclose()


class SqlKeyValueStore(KeyValueStore):
    def __init__(self, session_factory: async_sessionmaker, engine: AsyncEngine = None):
        super().__init__()
        self.session_factory = session_factory
        self.engine = engine

    async def get(self, key: str) -> Optional[str]:
        try:
            async with self.session_factory() as db:
                result = await db.execute(select(KeyValueEntry.value).filter(KeyValueEntry.key == key))
                return result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            raise StorageUnavailable("get", key, e) from e

    async def set(self, key: str, value: str) -> None:
        try:
            async with self.session_factory() as db:
                await db.merge(KeyValueEntry(key=key, value=value))
                await db.commit()
        except (SQLAlchemyError, OSError) as e:
            raise StorageUnavailable("set", key, e) from e

    async def remove_many(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        if not keys:
            return
        try:
            async with self.session_factory() as db:
                await db.execute(delete(KeyValueEntry).where(KeyValueEntry.key.in_(keys)))
                await db.commit()
        except (SQLAlchemyError, OSError) as e:
            raise StorageUnavailable("remove_many", ",".join(keys), e) from e

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()


async def build_store(backend: str = None) -> KeyValueStore:
    """Create the store selected by ``STORE_BACKEND``."""
    backend = (backend or settings.STORE_BACKEND).lower()
    if backend == "redis":
        store = RedisKeyValueStore.from_url()
    elif backend == "sql":
        from db.session import AsyncSessionLocal, engine, init_db
        await init_db()
        store = SqlKeyValueStore(AsyncSessionLocal, engine)
    elif backend == "memory":
        store = InMemoryKeyValueStore()
    else:
        raise ValueError(f"Unknown store backend: {backend}")
    logger.info("Key-value store ready", backend=backend)
    return store
