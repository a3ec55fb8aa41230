import json
from typing import Optional
from pydantic import ValidationError
from core.exceptions import StorageUnavailable
from core.logger import logger
from models.stats import StatsUpdate, UserStats
from services.storage_service import KeyValueStore, StoreKeys

# Errors that mean "stored stats are unusable"; reads fall back to zeroed stats
READ_ERRORS = (StorageUnavailable, ValidationError, json.JSONDecodeError, ValueError)


class StatsService:
    def __init__(self, store: KeyValueStore, user_id: Optional[str] = None, keys: StoreKeys = None):
        self.store = store
        self.keys = keys or StoreKeys(user_id)

    @property
    def key(self) -> str:
        return self.keys.user_stats

    async def _load(self) -> UserStats:
        try:
            raw = await self.store.get(self.key)
            if raw:
                return UserStats.from_json(raw)
        except READ_ERRORS as e:
            logger.error("Failed to load user stats", key=self.key, error=str(e))
        return UserStats()

    async def _save(self, stats: UserStats) -> bool:
        try:
            await self.store.set(self.key, stats.to_json())
            return True
        except StorageUnavailable as e:
            logger.error("Failed to save user stats", key=self.key, error=str(e))
            return False

    async def read(self) -> UserStats:
        return await self._load()

    async def write(self, update: StatsUpdate) -> UserStats:
        """Merge ``update`` over the stored stats and persist the result."""
        async with self.store.lock(self.key):
            current = await self._load()
            if update.is_empty():
                return current
            merged = current.merged(update)
            await self._save(merged)
        return merged

    async def record_session(self, correct: int, total: int, score: int) -> UserStats:
        """Add one completed session to the lifetime counters."""
        async with self.store.lock(self.key):
            current = await self._load()
            update = StatsUpdate(
                total_correct=current.total_correct + correct,
                total_questions=current.total_questions + total,
                best_score=max(current.best_score, score),
            )
            merged = current.merged(update)
            saved = await self._save(merged)
        logger.info("User stats updated", correct=correct, total=total, score=score,
                    best_score=merged.best_score, saved=saved)
        return merged

    async def reset(self) -> bool:
        """Drop the stored stats only; history and streak are left alone."""
        try:
            await self.store.remove_many([self.key])
        except StorageUnavailable as e:
            logger.error("Failed to reset user stats", key=self.key, error=str(e))
            return False
        logger.info("User stats reset", key=self.key)
        return True
