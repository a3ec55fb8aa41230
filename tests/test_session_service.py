import asyncio
from datetime import datetime

from core.config import settings
from services.progress_service import ProgressService
from services.question_service import QuestionService
from services.session_service import SessionOutcome, SessionService, SessionState


async def test_full_session_updates_stats_history_and_streak(store, question_service, answer_session):
    service = SessionService(store, question_service)
    session = service.new_session(10, "road-signs")
    await answer_session(session, correct=8)

    assert session.score == 80
    progress = ProgressService(store)
    stats = await progress.get_user_stats()
    assert stats.total_correct == 8
    assert stats.total_questions == 10
    assert stats.best_score == 80
    assert stats.current_streak == 1

    results = await progress.get_exam_results()
    assert len(results) == 1
    assert results[0].score == 80
    assert results[0].category == "road-signs"
    assert results[0].questions_answered == 10
    assert results[0].time_spent == 0
    assert await progress.current_streak() == 1


async def test_two_sessions_same_day(store, question_service, answer_session):
    service = SessionService(store, question_service)
    await answer_session(service.new_session(10), correct=10)
    await answer_session(service.new_session(10), correct=5)

    progress = ProgressService(store)
    stats = await progress.get_user_stats()
    assert stats.total_correct == 15
    assert stats.total_questions == 20
    assert stats.best_score == 100
    assert stats.current_streak == 1
    assert [r.score for r in await progress.get_exam_results()] == [50, 100]
    assert await progress.trend() == -50


async def test_empty_category_does_not_record(store, question_service):
    service = SessionService(store, question_service)
    session = service.new_session(10, "nonexistent-category")
    assert session.is_empty
    assert store.data == {}


async def test_stats_failure_does_not_block_history_or_streak(flaky_store_factory, fixed_now):
    store = flaky_store_factory(fail_keys={"user_stats"})
    service = SessionService(store)
    outcome = SessionOutcome(correct_count=4, total_questions=5, score=80, category="first-aid",
                             completed_at=fixed_now)
    await service.record_completion(outcome)

    assert "exam_results" in store.data
    assert store.data["daily_streak"] == "1"
    assert store.data["last_study_date"] == fixed_now.date().isoformat()
    assert "user_stats" not in store.data


async def test_history_failure_does_not_block_stats_or_streak(flaky_store_factory, fixed_now):
    store = flaky_store_factory(fail_keys={"exam_results"})
    service = SessionService(store)
    outcome = SessionOutcome(4, 5, 80, "mixed", fixed_now)
    await service.record_completion(outcome)

    stats = await ProgressService(store).get_user_stats()
    assert stats.total_correct == 4
    assert stats.current_streak == 1


async def test_unexpected_error_in_one_step_is_contained(store, fixed_now):
    service = SessionService(store)

    async def broken(*args, **kwargs):
        raise RuntimeError("boom")

    service.stats.record_session = broken
    await service.record_completion(SessionOutcome(1, 1, 100, "mixed", fixed_now))
    assert "exam_results" in store.data
    assert "daily_streak" in store.data


def test_presets(store):
    service = SessionService(store, QuestionService())
    assert service.start_practice("first-aid").total_questions == 6
    assert service.start_practice().total_questions == settings.PRACTICE_QUESTION_COUNT
    assert service.start_daily_challenge().total_questions == settings.DAILY_CHALLENGE_QUESTION_COUNT
    exam = service.start_exam()
    # 40 requested, the bank only holds 28
    assert exam.total_questions == 28
    assert exam.state == SessionState.IN_PROGRESS
    assert exam.title == "Mixed Quiz"


async def test_sessions_are_scoped_per_user(store, question_service, answer_session):
    alice = SessionService(store, question_service, user_id="alice")
    await answer_session(alice.new_session(4), correct=4)

    assert (await ProgressService(store, user_id="alice").get_user_stats()).total_correct == 4
    assert (await ProgressService(store).get_user_stats()).total_correct == 0


def test_outcome_pass_flag():
    now = datetime(2026, 10, 19, 12, 0)
    assert SessionOutcome(7, 10, 70, "mixed", now).passed
    assert not SessionOutcome(6, 10, 60, "mixed", now).passed


async def test_overlapping_completions_keep_every_increment(yielding_store, fixed_now):
    service = SessionService(yielding_store)
    outcomes = [
        SessionOutcome(1, 5, 20, "road-signs", fixed_now),
        SessionOutcome(2, 5, 40, "first-aid", fixed_now),
        SessionOutcome(3, 5, 60, "mixed", fixed_now),
    ]
    await asyncio.gather(*(service.record_completion(o) for o in outcomes))

    progress = ProgressService(yielding_store)
    stats = await progress.get_user_stats()
    assert (stats.total_correct, stats.total_questions, stats.best_score) == (6, 15, 60)
    assert stats.current_streak == 1

    results = await progress.get_exam_results()
    assert len(results) == 3
    assert len({r.id for r in results}) == 3
