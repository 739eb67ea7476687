from fastapi import APIRouter, Depends

from db.fallback import FallbackStore, get_store
from models.progress import AnswerCreate, Outcome
from routes.vocabulary import require_vocabulary
from utils.progress import record_answer

router = APIRouter()

@router.get("/{user_id}/progress")
async def list_progress(user_id: str, store: FallbackStore = Depends(get_store)):
    result = store.get_progress(user_id)
    return {"progress": result.value, "degraded": result.degraded}

@router.post("/{user_id}/progress/{vocabulary_id}")
async def submit_answer(
    user_id: str,
    vocabulary_id: str,
    answer: AnswerCreate,
    store: FallbackStore = Depends(get_store),
):
    """Record one flashcard or quiz answer and return the updated mastery."""
    require_vocabulary(store, user_id, vocabulary_id)
    result = record_answer(store, user_id, vocabulary_id, Outcome.from_bool(answer.correct))
    return {"progress": result.value, "degraded": result.degraded}
