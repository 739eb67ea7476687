from datetime import datetime, timedelta, timezone

import pytest

from models.progress import ProgressRecord
from models.session import LearningSession, SessionType
from models.vocabulary import Vocabulary
from utils.stats import summarize, topic_progress

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _vocab(vocab_id: str, topic_id: str = "t1") -> Vocabulary:
    return Vocabulary(
        id=vocab_id,
        user_id="u1",
        word=f"word-{vocab_id}",
        meaning=f"meaning-{vocab_id}",
        topic_id=topic_id,
        created_at=NOW,
        updated_at=NOW,
    )


def _progress(vocab_id: str, correct: int, incorrect: int, level: int = 0, streak: int = 0) -> ProgressRecord:
    return ProgressRecord(
        user_id="u1",
        vocabulary_id=vocab_id,
        correct_count=correct,
        incorrect_count=incorrect,
        mastery_level=level,
        learned=level >= 80,
        streak=streak,
        last_reviewed=NOW,
        next_review=NOW,
    )


def _session(days_ago: float, time_spent: int) -> LearningSession:
    completed = NOW - timedelta(days=days_ago)
    return LearningSession(
        id=f"s{days_ago}",
        user_id="u1",
        type=SessionType.QUIZ,
        time_spent=time_spent,
        started_at=completed - timedelta(seconds=time_spent),
        completed_at=completed,
    )


def test_empty_inputs_summarize_to_zero():
    summary = summarize([], [], [], window_days=7, now=NOW)
    assert summary.total_words == 0
    assert summary.learned_words == 0
    assert summary.average_accuracy == 0
    assert summary.streak == 0
    assert summary.sessions_count == 0
    assert summary.time_spent == 0


def test_zero_attempts_gives_zero_accuracy():
    summary = summarize([_vocab("a")], [_progress("a", 0, 0)], [], now=NOW)
    assert summary.average_accuracy == 0


def test_summary_counts_accuracy_and_streak():
    vocab = [_vocab("a"), _vocab("b"), _vocab("c")]
    progress = [
        _progress("a", 8, 2, level=85, streak=3),
        _progress("b", 3, 4, level=40, streak=0),
        _progress("c", 1, 0, level=20, streak=5),
    ]
    summary = summarize(vocab, progress, [], now=NOW)
    assert summary.total_words == 3
    assert summary.learned_words == 1
    assert summary.average_accuracy == pytest.approx(100 * 12 / 18)
    assert summary.streak == 5


def test_sessions_outside_window_are_ignored():
    sessions = [_session(1, 120), _session(6.9, 30), _session(8, 500)]
    summary = summarize([], [], sessions, window_days=7, now=NOW)
    assert summary.sessions_count == 2
    assert summary.time_spent == 150


def test_window_bounds_are_inclusive():
    sessions = [_session(7, 40), _session(0, 20), _session(7.0001, 500)]
    summary = summarize([], [], sessions, window_days=7, now=NOW)
    assert sessions[0].completed_at == NOW - timedelta(days=7)
    assert summary.sessions_count == 2
    assert summary.time_spent == 60



def test_future_sessions_are_outside_window():
    summary = summarize([], [], [_session(-1, 60)], window_days=7, now=NOW)
    assert summary.sessions_count == 0


def test_topic_progress_restricts_to_topic():
    vocab = [_vocab("a", "t1"), _vocab("b", "t1"), _vocab("c", "t2")]
    progress = [
        _progress("a", 9, 1, level=90),
        _progress("b", 1, 1, level=10),
        _progress("c", 5, 0, level=100),
    ]
    breakdown = topic_progress("t1", vocab, progress)
    assert breakdown.total == 2
    assert breakdown.learned == 1
    assert breakdown.percentage == 50.0
    assert breakdown.accuracy == pytest.approx(83.3)
    assert breakdown.level == "fair"


def test_topic_progress_empty_topic():
    breakdown = topic_progress("missing", [_vocab("a")], [])
    assert breakdown.total == 0
    assert breakdown.percentage == 0.0
    assert breakdown.level == "needs_improvement"
