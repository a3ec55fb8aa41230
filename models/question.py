from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

ALL_CATEGORIES = "all"
MIXED_CATEGORY = "mixed"
OPTIONS_PER_QUESTION = 4


class Category(str, Enum):
    ROAD_SIGNS = "road-signs"
    TRAFFIC_RULES = "traffic-rules"
    FIRST_AID = "first-aid"
    SCENARIOS = "scenarios"

    @property
    def display_name(self) -> str:
        return CATEGORY_TITLES[self.value]

    @classmethod
    def parse(cls, value) -> Optional["Category"]:
        """Return the matching category, or None for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


CATEGORY_TITLES = {
    "road-signs": "Road Signs",
    "traffic-rules": "Traffic Rules",
    "first-aid": "First Aid",
    "scenarios": "Scenarios",
}


def category_title(value: Optional[str]) -> str:
    return CATEGORY_TITLES.get(value, "Mixed Quiz")


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    options: Tuple[str, ...]
    correct_answer: int
    explanation: str = ""
    category: Category

    @field_validator("options")
    @classmethod
    def check_options(cls, v):
        if len(v) != OPTIONS_PER_QUESTION:
            raise ValueError(f"expected {OPTIONS_PER_QUESTION} options, got {len(v)}")
        return v

    @model_validator(mode="after")
    def check_correct_answer(self):
        if not 0 <= self.correct_answer < len(self.options):
            raise ValueError(f"correct_answer {self.correct_answer} is not a valid option index")
        return self

    def is_correct(self, answer_index: int) -> bool:
        return answer_index == self.correct_answer

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_answer]
