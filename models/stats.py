from dataclasses import dataclass, fields
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from core.exceptions import InvalidStatsUpdate


class UserStats(BaseModel):
    """Cumulative counters stored under ``user_stats``."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_correct: int = Field(0, ge=0)
    current_streak: int = Field(0, ge=0)
    best_score: int = Field(0, ge=0, le=100)
    total_questions: int = Field(0, ge=0)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str) -> "UserStats":
        return cls.model_validate_json(raw)

    def merged(self, update: "StatsUpdate") -> "UserStats":
        return self.model_copy(update=update.as_dict())


@dataclass(frozen=True)
class StatsUpdate:
    """Named partial update for UserStats. Fields left as None keep their stored value."""
    total_correct: Optional[int] = None
    current_streak: Optional[int] = None
    best_score: Optional[int] = None
    total_questions: Optional[int] = None

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidStatsUpdate(f"{f.name} must be an integer, got {value!r}")
            if value < 0:
                raise InvalidStatsUpdate(f"{f.name} must not be negative, got {value}")
        if self.best_score is not None and self.best_score > 100:
            raise InvalidStatsUpdate(f"best_score must be a percentage, got {self.best_score}")

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    def is_empty(self) -> bool:
        return not self.as_dict()
