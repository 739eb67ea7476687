import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from config import get_config_value
from db.fallback import FallbackStore, get_store
from models.progress import Outcome
from models.quiz import OPTIONS_PER_QUESTION, QuizCompletion
from models.session import SessionType
from routes.vocabulary import require_vocabulary
from utils.progress import record_answer
from utils.quiz import build_session, generate_quiz, is_correct_answer, score_quiz

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/{user_id}/quiz")
async def new_quiz(
    user_id: str,
    topic_id: Optional[str] = None,
    max_questions: Optional[int] = Query(default=None, ge=1),
    store: FallbackStore = Depends(get_store),
):
    """Generate a multiple-choice quiz from the user's vocabulary."""
    if topic_id == "all":
        topic_id = None
    if max_questions is None:
        max_questions = get_config_value("quiz", "max_questions", 10)
    pool = store.get_vocabularies(user_id, topic_id)
    questions = generate_quiz(pool.value, max_questions=max_questions)
    return {
        "questions": questions,
        "enough_words": len(pool.value) >= OPTIONS_PER_QUESTION,
        "started_at": datetime.now(timezone.utc),
        "degraded": pool.degraded,
    }

@router.post("/{user_id}/quiz/complete")
async def complete_quiz(
    user_id: str,
    completion: QuizCompletion,
    store: FallbackStore = Depends(get_store),
):
    """Check every answered word, record each answer's progress, then save the session."""
    if not completion.answers:
        raise HTTPException(status_code=400, detail="Quiz has no answers")
    degraded = False
    for answer in completion.answers:
        degraded = require_vocabulary(store, user_id, answer.vocabulary_id).degraded or degraded
    for answer in completion.answers:
        outcome = Outcome.from_bool(is_correct_answer(answer))
        result = record_answer(store, user_id, answer.vocabulary_id, outcome)
        degraded = degraded or result.degraded
    correct = score_quiz(completion.answers)
    session = build_session(
        SessionType.QUIZ,
        correct=correct,
        total=len(completion.answers),
        started_at=completion.started_at,
        completed_at=completion.completed_at or datetime.now(timezone.utc),
        topic_id="" if completion.topic_id == "all" else completion.topic_id,
    )
    saved = store.write_session(user_id, session)
    logger.info("Quiz completed for %s: %d/%d", user_id, correct, len(completion.answers))
    return {
        "correct": correct,
        "total": len(completion.answers),
        "session": saved.value,
        "degraded": degraded or saved.degraded,
    }
