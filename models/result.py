from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel
from core.config import settings


class ExamResult(BaseModel):
    """One completed attempt. Stored newest-first under ``exam_results``."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    score: int = Field(ge=0, le=100)
    date: str
    category: str = "mixed"
    questions_answered: int = Field(ge=0)
    time_spent: int = 0

    @property
    def completed_at(self) -> datetime:
        return datetime.fromisoformat(self.date.replace("Z", "+00:00"))

    @property
    def local_date(self):
        """Calendar date of completion in local time."""
        completed = self.completed_at
        if completed.tzinfo is not None:
            completed = completed.astimezone()
        return completed.date()

    def passed(self, threshold: int = None) -> bool:
        if threshold is None:
            threshold = settings.PASS_THRESHOLD
        return self.score >= threshold


ExamResultList = TypeAdapter(List[ExamResult])


def dump_results(results: List[ExamResult]) -> str:
    return ExamResultList.dump_json(results, by_alias=True).decode()


def load_results(raw: str) -> List[ExamResult]:
    return ExamResultList.validate_json(raw)
