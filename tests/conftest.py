"""
Pytest configuration and fixtures for the quiz engine tests.
"""
import asyncio
import sys
import os
import random
from datetime import datetime, date

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.exceptions import StorageUnavailable
from models.question import Category, Question
from models.result import ExamResult
from services.question_service import QuestionService
from services.storage_service import InMemoryKeyValueStore

TODAY = date(2026, 10, 19)


class FlakyStore(InMemoryKeyValueStore):
    """In-memory store that fails every operation touching ``fail_keys``."""

    def __init__(self, fail_keys=(), data=None):
        super().__init__(data)
        self.fail_keys = set(fail_keys)

    async def get(self, key):
        if key in self.fail_keys:
            raise StorageUnavailable("get", key, OSError("disk unavailable"))
        return await super().get(key)

    async def set(self, key, value):
        if key in self.fail_keys:
            raise StorageUnavailable("set", key, OSError("disk unavailable"))
        await super().set(key, value)


class YieldingStore(InMemoryKeyValueStore):
    """In-memory store that hands control back to the loop on every call."""

    async def get(self, key):
        await asyncio.sleep(0)
        value = await super().get(key)
        await asyncio.sleep(0)
        return value

    async def set(self, key, value):
        await asyncio.sleep(0)
        await super().set(key, value)


def make_question(index: int, category: Category = Category.ROAD_SIGNS) -> Question:
    return Question(
        id=f"q{index}",
        text=f"Question {index}?",
        options=("A", "B", "C", "D"),
        correct_answer=index % 4,
        explanation=f"Explanation {index}",
        category=category,
    )


def make_result(score: int, when: str, category: str = "mixed", rid: str = None) -> ExamResult:
    return ExamResult(
        id=rid or f"{score}-{when}",
        score=score,
        date=when,
        category=category,
        questions_answered=10,
        time_spent=0,
    )


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def flaky_store_factory():
    return FlakyStore


@pytest.fixture
def sample_bank():
    """Twelve questions: ten road-signs, two first-aid."""
    bank = [make_question(i) for i in range(10)]
    bank += [make_question(i, Category.FIRST_AID) for i in range(10, 12)]
    return bank


@pytest.fixture
def question_service(sample_bank):
    return QuestionService(sample_bank, rng=random.Random(42))


@pytest.fixture
def fixed_now():
    return datetime(2026, 10, 19, 9, 30).astimezone()


@pytest.fixture
def result_factory():
    return make_result


@pytest.fixture
def answer_session():
    """Play a session to its last question, answering the first ``correct`` right."""

    async def play(session, correct: int):
        for position in range(session.total_questions):
            question = session.current_question
            if position < correct:
                session.select_answer(question.correct_answer)
            else:
                session.select_answer((question.correct_answer + 1) % len(question.options))
            session.submit_current()
            await session.advance()
        return session

    return play


@pytest.fixture
def yielding_store():
    return YieldingStore()
