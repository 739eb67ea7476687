from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from db.fallback import FallbackStore, get_store
from models.vocabulary import VocabularyCreate, VocabularyUpdate
from routes.topics import require_topic

router = APIRouter()

def require_vocabulary(store: FallbackStore, user_id: str, vocabulary_id: str):
    result = store.get_vocabulary(vocabulary_id)
    if result.value is None or result.value.user_id != user_id:
        raise HTTPException(status_code=404, detail="Vocabulary not found")
    return result

@router.get("/{user_id}/vocabulary")
async def list_vocabulary(
    user_id: str,
    topic_id: Optional[str] = None,
    store: FallbackStore = Depends(get_store),
):
    """List vocabulary, optionally restricted to one topic."""
    result = store.get_vocabularies(user_id, topic_id)
    return {"vocabulary": result.value, "degraded": result.degraded}

@router.post("/{user_id}/vocabulary", status_code=status.HTTP_201_CREATED)
async def create_vocabulary(
    user_id: str,
    vocabulary: VocabularyCreate,
    store: FallbackStore = Depends(get_store),
):
    """Add a word to a topic; a zeroed progress record is created with it."""
    require_topic(store, user_id, vocabulary.topic_id)
    result = store.add_vocabulary(user_id, vocabulary)
    return {"vocabulary": result.value, "degraded": result.degraded}

@router.patch("/{user_id}/vocabulary/{vocabulary_id}")
async def update_vocabulary(
    user_id: str,
    vocabulary_id: str,
    updates: VocabularyUpdate,
    store: FallbackStore = Depends(get_store),
):
    require_vocabulary(store, user_id, vocabulary_id)
    if updates.topic_id:
        require_topic(store, user_id, updates.topic_id)
    result = store.update_vocabulary(vocabulary_id, updates)
    return {"vocabulary": result.value, "degraded": result.degraded}

@router.delete("/{user_id}/vocabulary/{vocabulary_id}")
async def delete_vocabulary(user_id: str, vocabulary_id: str, store: FallbackStore = Depends(get_store)):
    require_vocabulary(store, user_id, vocabulary_id)
    result = store.delete_vocabulary(vocabulary_id)
    return {"deleted": result.value, "degraded": result.degraded}
