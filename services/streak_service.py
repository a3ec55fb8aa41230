from datetime import date, datetime, timedelta
from typing import Callable, Optional
from core.exceptions import StorageUnavailable
from core.logger import logger
from models.stats import StatsUpdate
from services.stats_service import StatsService
from services.storage_service import KeyValueStore, StoreKeys

# Format written by older builds (JavaScript Date.toDateString)
LEGACY_DATE_FORMAT = "%a %b %d %Y"


def parse_study_date(raw: Optional[str]) -> Optional[date]:
    if not raw:
        return None
    raw = raw.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    try:
        return datetime.strptime(raw, LEGACY_DATE_FORMAT).date()
    except ValueError:
        logger.warning("Unreadable last study date", value=raw)
        return None


def next_streak(last: Optional[date], today: date, streak: int) -> int:
    """Streak value after studying on ``today``."""
    if last == today:
        return streak
    if last == today - timedelta(days=1):
        return streak + 1
    return 1


class StreakService:
    def __init__(self, store: KeyValueStore, user_id: Optional[str] = None, keys: StoreKeys = None,
                 stats: StatsService = None, clock: Callable[[], date] = None):
        self.store = store
        self.keys = keys or StoreKeys(user_id)
        self.stats = stats or StatsService(store, keys=self.keys)
        self.clock = clock or date.today

    async def _read_streak(self) -> int:
        raw = await self.store.get(self.keys.daily_streak)
        try:
            return max(int(raw), 0) if raw else 0
        except ValueError:
            logger.warning("Unreadable streak value", value=raw)
            return 0

    async def current(self) -> int:
        try:
            return await self._read_streak()
        except StorageUnavailable as e:
            logger.error("Failed to load streak", error=str(e))
            return 0

    async def last_study_date(self) -> Optional[date]:
        try:
            return parse_study_date(await self.store.get(self.keys.last_study_date))
        except StorageUnavailable as e:
            logger.error("Failed to load last study date", error=str(e))
            return None

    async def touch(self, today: date = None) -> int:
        """Count ``today`` as a study day and return the resulting streak."""
        today = today or self.clock()
        async with self.store.lock(self.keys.daily_streak):
            try:
                last = parse_study_date(await self.store.get(self.keys.last_study_date))
                streak = await self._read_streak()
            except StorageUnavailable as e:
                logger.error("Failed to load streak", error=str(e))
                return 0

            if last == today:
                return streak

            streak = next_streak(last, today, streak)
            try:
                await self.store.set(self.keys.last_study_date, today.isoformat())
                await self.store.set(self.keys.daily_streak, str(streak))
            except StorageUnavailable as e:
                logger.error("Failed to save streak", error=str(e))
                return streak

        await self.stats.write(StatsUpdate(current_streak=streak))
        logger.info("Study streak updated", streak=streak, date=today.isoformat())
        return streak
