from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Callable, List, Optional, Sequence
from core.config import settings
from core.exceptions import StorageUnavailable
from core.logger import logger
from models.question import Category
from models.result import ExamResult
from models.stats import UserStats
from services.history_service import HistoryService
from services.stats_service import StatsService
from services.storage_service import KeyValueStore, StoreKeys
from services.streak_service import StreakService
from utils.scoring import average, percentage


@dataclass(frozen=True)
class DayScore:
    day: date
    score: int
    attempts: int

    @property
    def label(self) -> str:
        return self.day.strftime("%a")


@dataclass(frozen=True)
class CategoryScore:
    category: Category
    score: int
    attempts: int

    @property
    def title(self) -> str:
        return self.category.display_name


@dataclass(frozen=True)
class ProgressSummary:
    stats: UserStats
    accuracy: int
    trend: int
    weekly: List[DayScore]
    categories: List[CategoryScore]
    recent: List[ExamResult] = field(default_factory=list)
    exams_taken: int = 0
    exams_passed: int = 0

    @property
    def improving(self) -> bool:
        return self.trend >= 0


def _result_day(result: ExamResult) -> Optional[date]:
    try:
        return result.local_date
    except ValueError:
        logger.warning("Exam result has an unreadable date", result_id=result.id, date=result.date)
        return None


def weekly_series(results: Sequence[ExamResult], today: date, days: int = 7) -> List[DayScore]:
    """Average score per calendar day for the trailing ``days`` days, oldest first."""
    by_day = {}
    for result in results:
        day = _result_day(result)
        if day is not None:
            by_day.setdefault(day, []).append(result.score)

    series = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        scores = by_day.get(day, [])
        series.append(DayScore(day=day, score=average(scores), attempts=len(scores)))
    return series


def category_series(results: Sequence[ExamResult]) -> List[CategoryScore]:
    """Average score per category. Mixed sessions count towards no category."""
    series = []
    for category in Category:
        scores = [r.score for r in results if r.category == category.value]
        series.append(CategoryScore(category=category, score=average(scores), attempts=len(scores)))
    return series


def overall_accuracy(stats: UserStats) -> int:
    return percentage(stats.total_correct, stats.total_questions)


def score_trend(results: Sequence[ExamResult]) -> int:
    """Latest score minus the one before it (results are newest first)."""
    if len(results) < 2:
        return 0
    return results[0].score - results[1].score


class ProgressService:
    def __init__(self, store: KeyValueStore, user_id: Optional[str] = None, keys: StoreKeys = None,
                 clock: Callable[[], date] = None):
        self.store = store
        self.keys = keys or StoreKeys(user_id)
        self.stats = StatsService(store, keys=self.keys)
        self.history = HistoryService(store, keys=self.keys)
        self.streak = StreakService(store, keys=self.keys, stats=self.stats)
        self.clock = clock or date.today

    async def get_user_stats(self) -> UserStats:
        return await self.stats.read()

    async def get_exam_results(self) -> List[ExamResult]:
        return await self.history.read_all()

    async def current_streak(self) -> int:
        return await self.streak.current()

    async def weekly(self, today: date = None) -> List[DayScore]:
        results = await self.history.read_all()
        return weekly_series(results, today or self.clock(), settings.WEEKLY_SERIES_DAYS)

    async def by_category(self) -> List[CategoryScore]:
        return category_series(await self.history.read_all())

    async def accuracy(self) -> int:
        return overall_accuracy(await self.stats.read())

    async def trend(self) -> int:
        return score_trend(await self.history.read_all())

    async def summary(self, today: date = None) -> ProgressSummary:
        stats = await self.stats.read()
        results = await self.history.read_all()
        return ProgressSummary(
            stats=stats,
            accuracy=overall_accuracy(stats),
            trend=score_trend(results),
            weekly=weekly_series(results, today or self.clock(), settings.WEEKLY_SERIES_DAYS),
            categories=category_series(results),
            recent=results[:settings.RECENT_RESULTS_LIMIT],
            exams_taken=len(results),
            exams_passed=sum(1 for r in results if r.passed()),
        )

    async def reset_all(self) -> bool:
        """Remove stats, history and streak in one bulk call."""
        keys = self.keys.all()
        try:
            await self.store.remove_many(keys)
        except StorageUnavailable as e:
            logger.error("Failed to reset progress", keys=keys, error=str(e))
            return False
        logger.info("All progress reset", keys=keys)
        return True
