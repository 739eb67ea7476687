from typing import Optional

from fastapi import APIRouter, Depends, Query

from config import get_config_value
from db.fallback import FallbackStore, get_store
from utils.progress import learning_stats
from utils.stats import topic_progress

router = APIRouter()

@router.get("/{user_id}/stats")
async def user_stats(
    user_id: str,
    days: Optional[int] = Query(default=None, ge=1),
    store: FallbackStore = Depends(get_store),
):
    """Summary: words, learned words, accuracy, best streak, recent sessions and time."""
    if days is None:
        days = get_config_value("stats", "window_days", 7)
    result = learning_stats(store, user_id, window_days=days)
    return {"stats": result.value, "window_days": days, "degraded": result.degraded}

@router.get("/{user_id}/stats/topics")
async def topic_stats(user_id: str, store: FallbackStore = Depends(get_store)):
    topics = store.get_topics(user_id)
    vocabularies = store.get_vocabularies(user_id)
    progress = store.get_progress(user_id)
    breakdown = [
        topic_progress(topic.id, vocabularies.value, progress.value)
        for topic in topics.value
    ]
    degraded = topics.degraded or vocabularies.degraded or progress.degraded
    return {"topics": breakdown, "degraded": degraded}
