import json
from datetime import datetime
from typing import List, Optional
from pydantic import ValidationError
from core.exceptions import StorageUnavailable
from core.logger import logger
from models.question import ALL_CATEGORIES, MIXED_CATEGORY
from models.result import ExamResult, dump_results, load_results
from services.storage_service import KeyValueStore, StoreKeys


class HistoryService:
    def __init__(self, store: KeyValueStore, user_id: Optional[str] = None, keys: StoreKeys = None):
        self.store = store
        self.keys = keys or StoreKeys(user_id)

    @property
    def key(self) -> str:
        return self.keys.exam_results

    async def _load(self) -> List[ExamResult]:
        try:
            raw = await self.store.get(self.key)
            if raw:
                return load_results(raw)
        except (StorageUnavailable, ValidationError, json.JSONDecodeError, ValueError) as e:
            logger.error("Failed to load exam results", key=self.key, error=str(e))
        return []

    async def read_all(self) -> List[ExamResult]:
        """All results, newest first."""
        return await self._load()

    async def recent(self, limit: int) -> List[ExamResult]:
        return (await self._load())[:max(limit, 0)]

    async def append(self, result: ExamResult) -> bool:
        async with self.store.lock(self.key):
            results = await self._load()
            taken = {r.id for r in results}
            if result.id in taken and result.id.isdigit():
                # Same-millisecond completions: move past the highest numeric id
                newest = max(int(rid) for rid in taken if rid.isdigit())
                result = result.model_copy(update={"id": str(newest + 1)})
            try:
                await self.store.set(self.key, dump_results([result] + results))
            except StorageUnavailable as e:
                logger.error("Failed to save exam result", key=self.key, error=str(e))
                return False
        logger.info("Exam result saved", result_id=result.id, score=result.score, category=result.category)
        return True

    @staticmethod
    def new_result(score: int, category: Optional[str], questions_answered: int,
                   now: datetime = None) -> ExamResult:
        now = now or datetime.now().astimezone()
        return ExamResult(
            id=str(int(now.timestamp() * 1000)),
            score=score,
            date=now.isoformat(),
            category=MIXED_CATEGORY if category in (None, "", ALL_CATEGORIES) else category,
            questions_answered=questions_answered,
            time_spent=0,
        )
