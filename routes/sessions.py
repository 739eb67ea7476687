from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from db.fallback import FallbackStore, get_store
from models.session import LearningSessionCreate
from utils.stats import window_start

router = APIRouter()

@router.get("/{user_id}/sessions")
async def list_sessions(
    user_id: str,
    days: Optional[int] = Query(default=None, ge=1),
    store: FallbackStore = Depends(get_store),
):
    start = window_start(days) if days else None
    result = store.get_sessions(user_id, start)
    return {"sessions": result.value, "degraded": result.degraded}

@router.post("/{user_id}/sessions", status_code=status.HTTP_201_CREATED)
async def save_session(
    user_id: str,
    session: LearningSessionCreate,
    store: FallbackStore = Depends(get_store),
):
    """Save a finished flashcard, quiz or review session."""
    result = store.write_session(user_id, session)
    return {"session": result.value, "degraded": result.degraded}
