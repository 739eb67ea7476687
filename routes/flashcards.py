from typing import Optional

from fastapi import APIRouter, Depends

from db.fallback import FallbackStore, get_store

router = APIRouter()

@router.get("/{user_id}/flashcards")
async def flashcard_deck(
    user_id: str,
    topic_id: Optional[str] = None,
    store: FallbackStore = Depends(get_store),
):
    """Cards for a flashcard run: each word with its current progress, if any."""
    if topic_id == "all":
        topic_id = None
    vocabularies = store.get_vocabularies(user_id, topic_id)
    progress = store.get_progress(user_id)
    by_vocabulary = {record.vocabulary_id: record for record in progress.value}
    cards = [
        {"vocabulary": vocabulary, "progress": by_vocabulary.get(vocabulary.id)}
        for vocabulary in vocabularies.value
    ]
    return {"cards": cards, "degraded": vocabularies.degraded or progress.degraded}
