import random

import pytest
from unittest.mock import AsyncMock

from core.exceptions import InvalidAnswerIndex, PrematureSubmit, SessionStateError
from services.question_service import QuestionService
from services.session_service import (
    UNANSWERED, OptionMark, QuizSession, SessionState, compute_score,
)


@pytest.fixture
def session(question_service):
    s = QuizSession(question_service, question_count=10)
    s.start()
    return s


def test_start_initialises_session(session):
    assert session.state == SessionState.IN_PROGRESS
    assert session.total_questions == 10
    assert session.answers == [UNANSWERED] * 10
    assert session.current_index == 0
    assert session.selected_answer == UNANSWERED
    assert session.current_question is session.items[0]


def test_start_with_empty_pool_stays_loading(question_service):
    session = QuizSession(question_service, question_count=10, category="nonexistent-category")
    assert session.start() == SessionState.LOADING
    assert session.is_empty
    assert session.current_question is None
    assert session.select_answer(0) is False
    with pytest.raises(SessionStateError):
        session.submit_current()


def test_short_pool_limits_session_length(question_service):
    session = QuizSession(question_service, question_count=10, category="first-aid")
    session.start()
    assert session.total_questions == 2


def test_reselect_overwrites_before_submit(session):
    session.select_answer(0)
    session.select_answer(3)
    assert session.selected_answer == 3


def test_invalid_answer_index_rejected(session):
    with pytest.raises(InvalidAnswerIndex):
        session.select_answer(4)
    with pytest.raises(InvalidAnswerIndex):
        session.select_answer(-1)
    assert session.selected_answer == UNANSWERED


def test_premature_submit_rejected(session):
    with pytest.raises(PrematureSubmit) as exc:
        session.submit_current()
    assert "select an answer" in str(exc.value)
    assert session.state == SessionState.IN_PROGRESS


def test_submit_reveals_marks_for_wrong_answer(session):
    question = session.current_question
    wrong = (question.correct_answer + 1) % 4
    session.select_answer(wrong)
    review = session.submit_current()

    assert session.state == SessionState.REVIEWING
    assert review.is_correct is False
    assert review.marks[question.correct_answer] == OptionMark.CORRECT
    assert review.marks[wrong] == OptionMark.INCORRECT
    assert sum(1 for m in review.marks if m == OptionMark.NONE) == 2
    assert session.review == review


def test_submit_reveals_single_mark_for_correct_answer(session):
    question = session.current_question
    session.select_answer(question.correct_answer)
    review = session.submit_current()
    assert review.is_correct
    assert review.marks.count(OptionMark.CORRECT) == 1
    assert OptionMark.INCORRECT not in review.marks


def test_answer_locked_after_submit(session):
    session.select_answer(1)
    session.submit_current()
    assert session.select_answer(2) is False
    assert session.selected_answer == 1


async def test_advance_only_from_reviewing(session):
    with pytest.raises(SessionStateError):
        await session.advance()


async def test_advance_moves_to_next_question(session):
    session.select_answer(0)
    session.submit_current()
    assert await session.advance() == SessionState.IN_PROGRESS
    assert session.current_index == 1
    assert session.selected_answer == UNANSWERED
    assert session.progress == (1, 10)


async def test_completion_scores_and_calls_hook(question_service, answer_session):
    hook = AsyncMock()
    session = QuizSession(question_service, question_count=10, category="road-signs", on_complete=hook)
    session.start()
    await answer_session(session, correct=8)

    assert session.state == SessionState.COMPLETED
    assert session.correct_count == 8
    assert session.score == 80
    assert session.passed
    assert session.current_question is None
    hook.assert_awaited_once()
    outcome = hook.await_args.args[0]
    assert (outcome.correct_count, outcome.total_questions, outcome.score) == (8, 10, 80)
    assert outcome.category == "road-signs"


async def test_completed_session_rejects_further_actions(session, answer_session):
    await answer_session(session, correct=3)
    assert session.select_answer(0) is False
    with pytest.raises(SessionStateError):
        session.submit_current()
    with pytest.raises(SessionStateError):
        await session.advance()


async def test_failing_score_below_threshold(question_service, answer_session):
    session = QuizSession(question_service, question_count=10)
    session.start()
    await answer_session(session, correct=6)
    assert session.score == 60
    assert not session.passed
    assert session.outcome.category == "mixed"


async def test_restart_draws_fresh_set(sample_bank, answer_session):
    service = QuestionService(sample_bank, rng=random.Random(3))
    session = QuizSession(service, question_count=5)
    session.start()
    await answer_session(session, correct=5)

    assert session.restart() == SessionState.IN_PROGRESS
    assert session.outcome is None
    assert session.current_index == 0
    assert session.answers == [UNANSWERED] * 5
    assert session.total_questions == 5


@pytest.mark.parametrize("correct,total,expected", [
    (0, 10, 0), (10, 10, 100), (8, 10, 80), (1, 3, 33), (2, 3, 67), (1, 8, 13), (5, 40, 13), (0, 0, 0),
])
def test_compute_score(correct, total, expected):
    assert compute_score(correct, total) == expected


def test_score_rounds_half_up():
    # 1/8 = 12.5% and 3/8 = 37.5%
    assert compute_score(1, 8) == 13
    assert compute_score(3, 8) == 38
