from datetime import datetime, timedelta, timezone
from typing import Optional

from models.progress import Outcome, ProgressRecord

MASTERY_MIN = 0
MASTERY_MAX = 100
LEARNED_THRESHOLD = 80
CORRECT_STEP = 10
INCORRECT_STEP = -5
INITIAL_CORRECT_LEVEL = 20
INITIAL_INCORRECT_LEVEL = 0
CORRECT_REVIEW_DELAY = timedelta(hours=24)
INCORRECT_REVIEW_DELAY = timedelta(hours=4)

PROGRESS_LEVELS = (
    (90, "mastered"),
    (70, "good"),
    (50, "fair"),
)


def clamp_mastery(level: int) -> int:
    return max(MASTERY_MIN, min(MASTERY_MAX, level))


def is_learned(mastery_level: int) -> bool:
    return mastery_level >= LEARNED_THRESHOLD


def next_review_at(outcome: Outcome, now: datetime) -> datetime:
    delay = CORRECT_REVIEW_DELAY if outcome == Outcome.CORRECT else INCORRECT_REVIEW_DELAY
    return now + delay


def apply_outcome(
    record: Optional[ProgressRecord],
    outcome: Outcome,
    *,
    user_id: str = "",
    vocabulary_id: str = "",
    now: Optional[datetime] = None,
) -> ProgressRecord:
    """Compute the next progress state for one answer.

    A missing record is synthesized from the outcome alone and owned by
    ``user_id``/``vocabulary_id``; left blank, the caller assigns the identity
    before storing it. The input record is never mutated; a new one is returned.
    """
    now = now or datetime.now(timezone.utc)
    correct = outcome == Outcome.CORRECT
    if record is None:
        level = INITIAL_CORRECT_LEVEL if correct else INITIAL_INCORRECT_LEVEL
        return ProgressRecord(
            user_id=user_id,
            vocabulary_id=vocabulary_id,
            correct_count=1 if correct else 0,
            incorrect_count=0 if correct else 1,
            mastery_level=level,
            learned=is_learned(level),
            streak=1 if correct else 0,
            last_reviewed=now,
            next_review=next_review_at(outcome, now),
        )
    level = clamp_mastery(record.mastery_level + (CORRECT_STEP if correct else INCORRECT_STEP))
    return record.model_copy(
        update={
            "correct_count": record.correct_count + (1 if correct else 0),
            "incorrect_count": record.incorrect_count + (0 if correct else 1),
            "streak": record.streak + 1 if correct else 0,
            "mastery_level": level,
            "learned": is_learned(level),
            "last_reviewed": now,
            "next_review": next_review_at(outcome, now),
        }
    )


def initial_progress(user_id: str, vocabulary_id: str, now: Optional[datetime] = None) -> ProgressRecord:
    """Zeroed record created alongside a new vocabulary item."""
    now = now or datetime.now(timezone.utc)
    return ProgressRecord(
        user_id=user_id,
        vocabulary_id=vocabulary_id,
        last_reviewed=now,
        next_review=now,
    )


def mastery_percent(learned: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round((learned / total) * 100, 1)


def progress_level(percentage: float) -> str:
    for threshold, label in PROGRESS_LEVELS:
        if percentage >= threshold:
            return label
    return "needs_improvement"
