from __future__ import annotations

import math
import random
from datetime import datetime
from typing import List, Optional, Sequence

from models.quiz import OPTIONS_PER_QUESTION, QuizAnswer, QuizQuestion
from models.session import LearningSessionCreate, SessionType
from models.vocabulary import Vocabulary

DEFAULT_MAX_QUESTIONS = 10
DISTRACTOR_COUNT = OPTIONS_PER_QUESTION - 1


def generate_quiz(
    pool: Sequence[Vocabulary],
    max_questions: int = DEFAULT_MAX_QUESTIONS,
    rng: Optional[random.Random] = None,
) -> List[QuizQuestion]:
    """Build multiple-choice questions from a vocabulary pool.

    Each prompt is used at most once. Distractors are meanings of other items
    sampled from the whole pool, so small pools may repeat distractor sets.
    Pools smaller than one question's worth of options yield no questions.
    """
    rng = rng or random.Random()
    items = list(pool)
    if len(items) < OPTIONS_PER_QUESTION:
        return []
    shuffled = items[:]
    rng.shuffle(shuffled)
    questions: List[QuizQuestion] = []
    for index, prompt in enumerate(shuffled[: max(0, min(max_questions, len(shuffled)))]):
        others = [item for position, item in enumerate(shuffled) if position != index]
        options = [item.meaning for item in rng.sample(others, DISTRACTOR_COUNT)]
        correct_index = rng.randint(0, DISTRACTOR_COUNT)
        options.insert(correct_index, prompt.meaning)
        questions.append(
            QuizQuestion(question=prompt, options=options, correct_index=correct_index)
        )
    return questions


def is_correct_answer(answer: QuizAnswer) -> bool:
    return answer.selected_index is not None and answer.selected_index == answer.correct_index


def score_quiz(answers: Sequence[QuizAnswer]) -> int:
    return sum(1 for answer in answers if is_correct_answer(answer))


def session_score(correct: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return (correct / total) * 100


def build_session(
    session_type: SessionType,
    *,
    correct: int,
    total: int,
    started_at: datetime,
    completed_at: datetime,
    topic_id: str = "",
) -> LearningSessionCreate:
    elapsed = (completed_at - started_at).total_seconds()
    return LearningSessionCreate(
        topic_id=topic_id,
        type=session_type,
        score=session_score(correct, total),
        total_questions=total,
        time_spent=max(0, math.floor(elapsed)),
        started_at=started_at,
        completed_at=completed_at,
    )
