from __future__ import annotations

import logging
import threading
from collections import defaultdict
from datetime import datetime, timezone
from typing import DefaultDict, Optional, Tuple

from db.fallback import FallbackStore, StoreResult
from models.progress import Outcome, ProgressRecord
from models.stats import SessionSummary
from utils.mastery import apply_outcome
from utils.stats import summarize, window_start

logger = logging.getLogger(__name__)

_locks_guard = threading.Lock()
# One lock per pair ever answered in this process; never evicted.
_key_locks: DefaultDict[Tuple[str, str], threading.Lock] = defaultdict(threading.Lock)


def _lock_for(user_id: str, vocabulary_id: str) -> threading.Lock:
    with _locks_guard:
        return _key_locks[(user_id, vocabulary_id)]


def get_record(store: FallbackStore, user_id: str, vocabulary_id: str) -> StoreResult:
    result = store.get_progress(user_id, vocabulary_id)
    record: Optional[ProgressRecord] = result.value[0] if result.value else None
    return StoreResult(record, result.degraded)


def record_answer(
    store: FallbackStore,
    user_id: str,
    vocabulary_id: str,
    outcome: Outcome,
    now: Optional[datetime] = None,
) -> StoreResult:
    """Read, update and write back one progress record.

    Serialized per (user, vocabulary) pair so concurrent answers never lose a
    counter increment.
    """
    now = now or datetime.now(timezone.utc)
    with _lock_for(user_id, vocabulary_id):
        current = get_record(store, user_id, vocabulary_id)
        updated = apply_outcome(
            current.value,
            outcome,
            user_id=user_id,
            vocabulary_id=vocabulary_id,
            now=now,
        )
        written = store.write_progress(updated)
    logger.debug(
        "Progress %s/%s: %s -> mastery %d, streak %d",
        user_id,
        vocabulary_id,
        outcome.value,
        updated.mastery_level,
        updated.streak,
    )
    return StoreResult(written.value, current.degraded or written.degraded)


def learning_stats(
    store: FallbackStore,
    user_id: str,
    window_days: int = 7,
    now: Optional[datetime] = None,
) -> StoreResult:
    now = now or datetime.now(timezone.utc)
    vocabularies = store.get_vocabularies(user_id)
    progress = store.get_progress(user_id)
    sessions = store.get_sessions(user_id, window_start(window_days, now))
    summary: SessionSummary = summarize(
        vocabularies.value,
        progress.value,
        sessions.value,
        window_days=window_days,
        now=now,
    )
    degraded = vocabularies.degraded or progress.degraded or sessions.degraded
    return StoreResult(summary, degraded)
