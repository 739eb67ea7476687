from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from models.progress import ProgressRecord
from models.session import LearningSession
from models.stats import SessionSummary, TopicProgress
from models.vocabulary import Vocabulary
from utils.mastery import mastery_percent, progress_level


def accuracy(records: Iterable[ProgressRecord]) -> float:
    """Percent of correct answers over all attempts; 0 when nothing was answered."""
    total_correct = 0
    total_incorrect = 0
    for record in records:
        total_correct += record.correct_count
        total_incorrect += record.incorrect_count
    attempts = total_correct + total_incorrect
    if attempts == 0:
        return 0.0
    return (total_correct / attempts) * 100


def window_start(window_days: int, now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now - timedelta(days=window_days)


def summarize(
    vocabularies: Iterable[Vocabulary],
    progress_records: Iterable[ProgressRecord],
    sessions: Iterable[LearningSession],
    window_days: int = 7,
    now: Optional[datetime] = None,
) -> SessionSummary:
    now = now or datetime.now(timezone.utc)
    start = window_start(window_days, now)
    records = list(progress_records)
    recent = [s for s in sessions if start <= s.completed_at <= now]
    return SessionSummary(
        total_words=len(list(vocabularies)),
        learned_words=sum(1 for r in records if r.learned),
        average_accuracy=accuracy(records),
        streak=max((r.streak for r in records), default=0),
        sessions_count=len(recent),
        time_spent=sum(s.time_spent for s in recent),
    )


def topic_progress(
    topic_id: str,
    vocabularies: Iterable[Vocabulary],
    progress_records: Iterable[ProgressRecord],
) -> TopicProgress:
    topic_vocab_ids = {v.id for v in vocabularies if v.topic_id == topic_id}
    records = [r for r in progress_records if r.vocabulary_id in topic_vocab_ids]
    learned = sum(1 for r in records if r.learned)
    percentage = mastery_percent(learned, len(topic_vocab_ids))
    return TopicProgress(
        topic_id=topic_id,
        total=len(topic_vocab_ids),
        learned=learned,
        percentage=percentage,
        accuracy=round(accuracy(records), 1),
        level=progress_level(percentage),
    )
