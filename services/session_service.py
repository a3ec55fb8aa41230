"""Quiz session state machine and the service that records finished sessions.

A session moves LOADING -> IN_PROGRESS -> REVIEWING -> ... -> COMPLETED.
It is never persisted; only its outcome is, via ``SessionService``.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Tuple

from core.config import settings
from core.exceptions import InvalidAnswerIndex, PrematureSubmit, SessionStateError
from core.logger import logger
from models.question import ALL_CATEGORIES, MIXED_CATEGORY, Question, category_title
from services.history_service import HistoryService
from services.question_service import QuestionService
from services.stats_service import StatsService
from services.storage_service import KeyValueStore, StoreKeys
from services.streak_service import StreakService
from utils.scoring import percentage

UNANSWERED = -1


class SessionState(str, Enum):
    LOADING = "loading"
    IN_PROGRESS = "in_progress"
    REVIEWING = "reviewing"
    COMPLETED = "completed"


class OptionMark(str, Enum):
    NONE = "none"
    CORRECT = "correct"
    INCORRECT = "incorrect"


@dataclass(frozen=True)
class QuestionReview:
    """What the user sees after submitting one question."""
    question: Question
    selected: int
    is_correct: bool
    marks: Tuple[OptionMark, ...]

    @property
    def correct_answer(self) -> int:
        return self.question.correct_answer

    @property
    def explanation(self) -> str:
        return self.question.explanation


@dataclass(frozen=True)
class SessionOutcome:
    correct_count: int
    total_questions: int
    score: int
    category: str
    completed_at: datetime

    @property
    def passed(self) -> bool:
        return self.score >= settings.PASS_THRESHOLD


def compute_score(correct_count: int, total_questions: int) -> int:
    return percentage(correct_count, total_questions)


def mark_options(question: Question, selected: int) -> Tuple[OptionMark, ...]:
    marks = []
    for index in range(len(question.options)):
        if index == question.correct_answer:
            marks.append(OptionMark.CORRECT)
        elif index == selected:
            marks.append(OptionMark.INCORRECT)
        else:
            marks.append(OptionMark.NONE)
    return tuple(marks)


CompletionHook = Callable[[SessionOutcome], Awaitable[None]]


class QuizSession:
    def __init__(self, questions: QuestionService, question_count: int = None,
                 category: Optional[str] = None, on_complete: CompletionHook = None,
                 clock: Callable[[], datetime] = None):
        self.questions = questions
        self.question_count = settings.PRACTICE_QUESTION_COUNT if question_count is None else question_count
        self.category = category
        self.on_complete = on_complete
        self.clock = clock or (lambda: datetime.now().astimezone())
        self._reset()

    def _reset(self):
        self.items: List[Question] = []
        self.answers: List[int] = []
        self.current_index = 0
        self.state = SessionState.LOADING
        self.outcome: Optional[SessionOutcome] = None

    # --- observable state ---

    @property
    def total_questions(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return self.state == SessionState.LOADING and not self.items

    @property
    def is_completed(self) -> bool:
        return self.state == SessionState.COMPLETED

    @property
    def current_question(self) -> Optional[Question]:
        if not self.items or self.is_completed:
            return None
        return self.items[self.current_index]

    @property
    def selected_answer(self) -> int:
        if not self.items:
            return UNANSWERED
        return self.answers[self.current_index]

    @property
    def correct_count(self) -> int:
        return sum(1 for q, a in zip(self.items, self.answers) if q.is_correct(a))

    @property
    def score(self) -> int:
        if self.outcome is not None:
            return self.outcome.score
        return compute_score(self.correct_count, self.total_questions)

    @property
    def passed(self) -> bool:
        return self.score >= settings.PASS_THRESHOLD

    @property
    def progress(self) -> Tuple[int, int]:
        answered = self.current_index + (1 if self.state in (SessionState.REVIEWING, SessionState.COMPLETED) else 0)
        return min(answered, self.total_questions), self.total_questions

    @property
    def review(self) -> Optional[QuestionReview]:
        if self.state != SessionState.REVIEWING:
            return None
        return self._build_review()

    @property
    def category_label(self) -> str:
        if self.category in (None, "", ALL_CATEGORIES):
            return MIXED_CATEGORY
        return self.category

    @property
    def title(self) -> str:
        return category_title(self.category)

    # --- transitions ---

    def start(self) -> SessionState:
        self._reset()
        self.items = self.questions.select_random(self.question_count, self.category)
        self.answers = [UNANSWERED] * len(self.items)
        if self.items:
            self.state = SessionState.IN_PROGRESS
            logger.info("Quiz session started", category=self.category_label, total=len(self.items))
        else:
            logger.info("No questions available", category=self.category)
        return self.state

    def restart(self) -> SessionState:
        """Discard this attempt and draw a fresh set with the same parameters."""
        return self.start()

    def select_answer(self, answer_index: int) -> bool:
        """Record a choice for the current question.

        Returns False without changing anything once the question has been
        submitted (or the session is not running).
        """
        if self.state != SessionState.IN_PROGRESS:
            logger.debug("Answer ignored", state=self.state.value, index=self.current_index)
            return False
        question = self.items[self.current_index]
        if isinstance(answer_index, bool) or not isinstance(answer_index, int) \
                or not 0 <= answer_index < len(question.options):
            raise InvalidAnswerIndex(answer_index, len(question.options))
        self.answers[self.current_index] = answer_index
        return True

    def submit_current(self) -> QuestionReview:
        if self.state != SessionState.IN_PROGRESS:
            raise SessionStateError(f"Cannot submit while {self.state.value}")
        if self.answers[self.current_index] == UNANSWERED:
            logger.debug("Submit rejected, no answer selected", index=self.current_index)
            raise PrematureSubmit(self.current_index)
        self.state = SessionState.REVIEWING
        return self._build_review()

    async def advance(self) -> SessionState:
        if self.state != SessionState.REVIEWING:
            raise SessionStateError(f"Cannot advance while {self.state.value}")
        if self.current_index + 1 < self.total_questions:
            self.current_index += 1
            self.state = SessionState.IN_PROGRESS
            return self.state

        self.outcome = SessionOutcome(
            correct_count=self.correct_count,
            total_questions=self.total_questions,
            score=compute_score(self.correct_count, self.total_questions),
            category=self.category_label,
            completed_at=self.clock(),
        )
        self.state = SessionState.COMPLETED
        logger.info("Quiz session completed", score=self.outcome.score,
                    correct=self.outcome.correct_count, total=self.outcome.total_questions,
                    category=self.outcome.category)
        if self.on_complete is not None:
            await self.on_complete(self.outcome)
        return self.state

    def _build_review(self) -> QuestionReview:
        question = self.items[self.current_index]
        selected = self.answers[self.current_index]
        return QuestionReview(
            question=question,
            selected=selected,
            is_correct=question.is_correct(selected),
            marks=mark_options(question, selected),
        )


class SessionService:
    def __init__(self, store: KeyValueStore, questions: QuestionService = None,
                 user_id: Optional[str] = None, keys: StoreKeys = None):
        self.store = store
        self.keys = keys or StoreKeys(user_id)
        self.questions = questions or QuestionService()
        self.stats = StatsService(store, keys=self.keys)
        self.history = HistoryService(store, keys=self.keys)
        self.streak = StreakService(store, keys=self.keys, stats=self.stats)

    def new_session(self, question_count: int = None, category: Optional[str] = None) -> QuizSession:
        session = QuizSession(
            self.questions,
            question_count=question_count,
            category=category,
            on_complete=self.record_completion,
        )
        session.start()
        return session

    def start_practice(self, category: Optional[str] = None) -> QuizSession:
        return self.new_session(settings.PRACTICE_QUESTION_COUNT, category)

    def start_exam(self) -> QuizSession:
        # EXAM_TIME_LIMIT_MINUTES is displayed only; nothing here enforces it
        return self.new_session(settings.EXAM_QUESTION_COUNT)

    def start_daily_challenge(self) -> QuizSession:
        return self.new_session(settings.DAILY_CHALLENGE_QUESTION_COUNT)

    async def record_completion(self, outcome: SessionOutcome):
        """Persist a finished session: stats, then history, then streak.

        Each write is independent; one failing does not skip the others.
        """
        # 1. Lifetime counters
        try:
            await self.stats.record_session(outcome.correct_count, outcome.total_questions, outcome.score)
        except Exception as e:
            logger.error("Failed to record session stats", error=str(e))

        # 2. History log
        try:
            result = HistoryService.new_result(
                score=outcome.score,
                category=outcome.category,
                questions_answered=outcome.total_questions,
                now=outcome.completed_at,
            )
            await self.history.append(result)
        except Exception as e:
            logger.error("Failed to record exam result", error=str(e))

        # 3. Daily streak
        try:
            await self.streak.touch(outcome.completed_at.date())
        except Exception as e:
            logger.error("Failed to update streak", error=str(e))
