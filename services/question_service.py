import random
from typing import List, Optional, Sequence
from models.question import ALL_CATEGORIES, MIXED_CATEGORY, Category, Question
from models.question_bank import QUESTION_BANK
from core.logger import logger


class QuestionService:
    def __init__(self, bank: Sequence[Question] = QUESTION_BANK, rng: random.Random = None):
        self.bank = tuple(bank)
        self.rng = rng or random.Random()

    def all_questions(self) -> List[Question]:
        return list(self.bank)

    def questions_by_category(self, category: Optional[str] = None) -> List[Question]:
        """Questions in ``category``; the whole bank for None/"all"/"mixed".

        Unknown categories yield an empty list rather than an error.
        """
        if category is None or category in (ALL_CATEGORIES, MIXED_CATEGORY):
            return self.all_questions()
        wanted = Category.parse(category)
        if wanted is None:
            logger.debug("Unknown question category", category=category)
            return []
        return [q for q in self.bank if q.category == wanted]

    def get_question(self, question_id: str) -> Optional[Question]:
        for q in self.bank:
            if q.id == question_id:
                return q
        return None

    def shuffled_indices(self, size: int) -> List[int]:
        """Uniform permutation of range(size) (Fisher-Yates / Knuth)."""
        indices = list(range(size))
        for i in range(size - 1, 0, -1):
            j = self.rng.randint(0, i)
            indices[i], indices[j] = indices[j], indices[i]
        return indices

    def select_random(self, count: int, category: Optional[str] = None) -> List[Question]:
        """Draw min(count, pool size) distinct questions in random order."""
        pool = self.questions_by_category(category)
        if count <= 0 or not pool:
            return []
        order = self.shuffled_indices(len(pool))
        return [pool[i] for i in order[:count]]
