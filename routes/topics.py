from fastapi import APIRouter, Depends, HTTPException, status

from db.fallback import FallbackStore, get_store
from models.topic import TopicCreate, TopicUpdate

router = APIRouter()

def require_topic(store: FallbackStore, user_id: str, topic_id: str):
    result = store.get_topic(topic_id)
    if result.value is None or result.value.user_id != user_id:
        raise HTTPException(status_code=404, detail="Topic not found")
    return result

@router.get("/{user_id}/topics")
async def list_topics(user_id: str, store: FallbackStore = Depends(get_store)):
    """List a user's topics."""
    result = store.get_topics(user_id)
    return {"topics": result.value, "degraded": result.degraded}

@router.post("/{user_id}/topics", status_code=status.HTTP_201_CREATED)
async def create_topic(user_id: str, topic: TopicCreate, store: FallbackStore = Depends(get_store)):
    result = store.add_topic(user_id, topic)
    return {"topic": result.value, "degraded": result.degraded}

@router.patch("/{user_id}/topics/{topic_id}")
async def update_topic(
    user_id: str,
    topic_id: str,
    updates: TopicUpdate,
    store: FallbackStore = Depends(get_store),
):
    require_topic(store, user_id, topic_id)
    result = store.update_topic(topic_id, updates)
    return {"topic": result.value, "degraded": result.degraded}

@router.delete("/{user_id}/topics/{topic_id}")
async def delete_topic(user_id: str, topic_id: str, store: FallbackStore = Depends(get_store)):
    """Delete a topic together with its vocabulary and their progress."""
    require_topic(store, user_id, topic_id)
    result = store.delete_topic(topic_id)
    return {"deleted": result.value, "degraded": result.degraded}
