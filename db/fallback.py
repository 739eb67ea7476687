from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from config import get_config_value
from db.store import MemoryStore, SQLiteStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    value: T
    degraded: bool = False


class FallbackStore:
    """Routes store calls to the primary store, or to the fallback once it fails.

    Every call returns a ``StoreResult`` so callers can see when data came from
    the in-memory fallback. After the first storage error the wrapper stays
    degraded until ``reset()`` is called. Integrity errors are caller mistakes,
    not outages, and always propagate.
    """

    def __init__(self, primary, fallback, enabled: bool = True):
        self.primary = primary
        self.fallback = fallback
        self.enabled = enabled
        self._degraded = False

    @property
    def degraded(self) -> bool:
        return self._degraded

    def reset(self) -> None:
        self._degraded = False

    def call(self, name: str, *args: Any, **kwargs: Any) -> StoreResult:
        if self._degraded:
            logger.warning("Store degraded, serving %s from memory", name)
            return StoreResult(getattr(self.fallback, name)(*args, **kwargs), degraded=True)
        try:
            return StoreResult(getattr(self.primary, name)(*args, **kwargs))
        except sqlite3.IntegrityError:
            raise
        except sqlite3.Error as exc:
            if not self.enabled:
                raise
            logger.warning("Store call %s failed (%s), switching to in-memory fallback", name, exc)
            self._degraded = True
            return StoreResult(getattr(self.fallback, name)(*args, **kwargs), degraded=True)

    def __getattr__(self, name: str) -> Callable[..., StoreResult]:
        if name.startswith("_") or name in ("primary", "fallback", "enabled"):
            raise AttributeError(name)
        if not hasattr(self.primary, name):
            raise AttributeError(name)

        def method(*args: Any, **kwargs: Any) -> StoreResult:
            return self.call(name, *args, **kwargs)

        return method


_store: Optional[FallbackStore] = None


def get_store() -> FallbackStore:
    """FastAPI dependency returning the process-wide store."""
    global _store
    if _store is None:
        enabled = get_config_value("storage", "fallback_enabled", True)
        _store = FallbackStore(SQLiteStore(), MemoryStore(), enabled=enabled)
    return _store
