"""Persistence for topics, vocabulary, progress and learning sessions.

``SQLiteStore`` is the primary store. ``MemoryStore`` keeps the same data in
process memory and serves as the fallback when the database is unavailable.
Both expose the same methods; lookups of a missing entity return ``None``.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from db.database import get_conn
from models.progress import ProgressRecord
from models.session import LearningSession, LearningSessionCreate
from models.topic import Topic, TopicCreate, TopicUpdate
from models.vocabulary import Vocabulary, VocabularyCreate, VocabularyUpdate
from utils.mastery import initial_progress

ProgressKey = Tuple[str, str]

TOPIC_COLUMNS = "id, user_id, name, description, color, icon_url, created_at"
VOCABULARY_COLUMNS = (
    "id, user_id, topic_id, word, meaning, example, pronunciation, image_url, "
    "audio_url, difficulty, created_at, updated_at"
)
PROGRESS_COLUMNS = (
    "user_id, vocabulary_id, correct_count, incorrect_count, mastery_level, "
    "learned, streak, last_reviewed, next_review"
)
SESSION_COLUMNS = (
    "id, user_id, topic_id, type, score, total_questions, time_spent, started_at, completed_at"
)


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _ts(value: datetime) -> str:
    return value.isoformat()


def _parse_ts(value: str) -> datetime:
    return datetime.fromisoformat(value)


def _topic_from_row(row) -> Topic:
    data = dict(row)
    data["created_at"] = _parse_ts(data["created_at"])
    return Topic(**data)


def _vocabulary_from_row(row) -> Vocabulary:
    data = dict(row)
    data["created_at"] = _parse_ts(data["created_at"])
    data["updated_at"] = _parse_ts(data["updated_at"])
    return Vocabulary(**data)


def _progress_from_row(row) -> ProgressRecord:
    data = dict(row)
    data["learned"] = bool(data["learned"])
    data["last_reviewed"] = _parse_ts(data["last_reviewed"])
    data["next_review"] = _parse_ts(data["next_review"])
    return ProgressRecord(**data)


def _session_from_row(row) -> LearningSession:
    data = dict(row)
    data["started_at"] = _parse_ts(data["started_at"])
    data["completed_at"] = _parse_ts(data["completed_at"])
    return LearningSession(**data)


class SQLiteStore:
    # Topics

    def get_topics(self, user_id: str) -> List[Topic]:
        with get_conn() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {TOPIC_COLUMNS} FROM topics WHERE user_id = ? ORDER BY created_at, name",
                (user_id,),
            )
            return [_topic_from_row(row) for row in cursor.fetchall()]

    def get_topic(self, topic_id: str) -> Optional[Topic]:
        with get_conn() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT {TOPIC_COLUMNS} FROM topics WHERE id = ?", (topic_id,))
            row = cursor.fetchone()
            return _topic_from_row(row) if row else None

    def add_topic(self, user_id: str, topic: TopicCreate) -> Topic:
        created = Topic(id=new_id(), user_id=user_id, created_at=utcnow(), **topic.model_dump())
        with get_conn() as conn:
            conn.execute(
                f"INSERT INTO topics ({TOPIC_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    created.id,
                    created.user_id,
                    created.name,
                    created.description,
                    created.color,
                    created.icon_url,
                    _ts(created.created_at),
                ),
            )
            conn.commit()
        return created

    def update_topic(self, topic_id: str, updates: TopicUpdate) -> Optional[Topic]:
        current = self.get_topic(topic_id)
        if current is None:
            return None
        updated = current.model_copy(update=updates.model_dump(exclude_unset=True, exclude_none=True))
        with get_conn() as conn:
            conn.execute(
                """
                UPDATE topics SET name = ?, description = ?, color = ?, icon_url = ?
                WHERE id = ?
                """,
                (updated.name, updated.description, updated.color, updated.icon_url, topic_id),
            )
            conn.commit()
        return updated

    def delete_topic(self, topic_id: str) -> bool:
        with get_conn() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                DELETE FROM progress WHERE vocabulary_id IN (
                    SELECT id FROM vocabularies WHERE topic_id = ?
                )
                """,
                (topic_id,),
            )
            cursor.execute("DELETE FROM vocabularies WHERE topic_id = ?", (topic_id,))
            cursor.execute("DELETE FROM topics WHERE id = ?", (topic_id,))
            deleted = cursor.rowcount > 0
            conn.commit()
        return deleted

    # Vocabulary

    def get_vocabularies(self, user_id: str, topic_id: Optional[str] = None) -> List[Vocabulary]:
        query = f"SELECT {VOCABULARY_COLUMNS} FROM vocabularies WHERE user_id = ?"
        params: list[object] = [user_id]
        if topic_id:
            query += " AND topic_id = ?"
            params.append(topic_id)
        query += " ORDER BY created_at, word"
        with get_conn() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [_vocabulary_from_row(row) for row in cursor.fetchall()]

    def get_vocabulary(self, vocabulary_id: str) -> Optional[Vocabulary]:
        with get_conn() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {VOCABULARY_COLUMNS} FROM vocabularies WHERE id = ?",
                (vocabulary_id,),
            )
            row = cursor.fetchone()
            return _vocabulary_from_row(row) if row else None

    def add_vocabulary(self, user_id: str, vocabulary: VocabularyCreate) -> Vocabulary:
        now = utcnow()
        created = Vocabulary(
            id=new_id(),
            user_id=user_id,
            created_at=now,
            updated_at=now,
            **vocabulary.model_dump(),
        )
        progress = initial_progress(user_id, created.id, now)
        with get_conn() as conn:
            conn.execute(
                f"""
                INSERT INTO vocabularies ({VOCABULARY_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    created.id,
                    created.user_id,
                    created.topic_id,
                    created.word,
                    created.meaning,
                    created.example,
                    created.pronunciation,
                    created.image_url,
                    created.audio_url,
                    created.difficulty.value,
                    _ts(created.created_at),
                    _ts(created.updated_at),
                ),
            )
            _upsert_progress(conn, progress)
            conn.commit()
        return created

    def update_vocabulary(self, vocabulary_id: str, updates: VocabularyUpdate) -> Optional[Vocabulary]:
        current = self.get_vocabulary(vocabulary_id)
        if current is None:
            return None
        changes = updates.model_dump(exclude_unset=True, exclude_none=True)
        changes["updated_at"] = utcnow()
        updated = current.model_copy(update=changes)
        with get_conn() as conn:
            conn.execute(
                """
                UPDATE vocabularies
                SET topic_id = ?, word = ?, meaning = ?, example = ?, pronunciation = ?,
                    image_url = ?, audio_url = ?, difficulty = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    updated.topic_id,
                    updated.word,
                    updated.meaning,
                    updated.example,
                    updated.pronunciation,
                    updated.image_url,
                    updated.audio_url,
                    updated.difficulty.value,
                    _ts(updated.updated_at),
                    vocabulary_id,
                ),
            )
            conn.commit()
        return updated

    def delete_vocabulary(self, vocabulary_id: str) -> bool:
        with get_conn() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM progress WHERE vocabulary_id = ?", (vocabulary_id,))
            cursor.execute("DELETE FROM vocabularies WHERE id = ?", (vocabulary_id,))
            deleted = cursor.rowcount > 0
            conn.commit()
        return deleted

    # Progress

    def get_progress(self, user_id: str, vocabulary_id: Optional[str] = None) -> List[ProgressRecord]:
        query = f"SELECT {PROGRESS_COLUMNS} FROM progress WHERE user_id = ?"
        params: list[object] = [user_id]
        if vocabulary_id:
            query += " AND vocabulary_id = ?"
            params.append(vocabulary_id)
        with get_conn() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [_progress_from_row(row) for row in cursor.fetchall()]

    def write_progress(self, record: ProgressRecord) -> ProgressRecord:
        with get_conn() as conn:
            _upsert_progress(conn, record)
            conn.commit()
        return record

    # Sessions

    def get_sessions(self, user_id: str, window_start: Optional[datetime] = None) -> List[LearningSession]:
        with get_conn() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {SESSION_COLUMNS} FROM sessions WHERE user_id = ? ORDER BY completed_at",
                (user_id,),
            )
            sessions = [_session_from_row(row) for row in cursor.fetchall()]
        # Offsets may differ between rows, so the window is applied on parsed values.
        if window_start is not None:
            sessions = [s for s in sessions if s.completed_at >= window_start]
        return sessions

    def write_session(self, user_id: str, session: LearningSessionCreate) -> LearningSession:
        saved = LearningSession(id=new_id(), user_id=user_id, **session.model_dump())
        with get_conn() as conn:
            conn.execute(
                f"INSERT INTO sessions ({SESSION_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    saved.id,
                    saved.user_id,
                    saved.topic_id,
                    saved.type.value,
                    saved.score,
                    saved.total_questions,
                    saved.time_spent,
                    _ts(saved.started_at),
                    _ts(saved.completed_at),
                ),
            )
            conn.commit()
        return saved


def _upsert_progress(conn, record: ProgressRecord) -> None:
    conn.execute(
        f"""
        INSERT INTO progress ({PROGRESS_COLUMNS})
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        ON CONFLICT(user_id, vocabulary_id) DO UPDATE SET
            correct_count = excluded.correct_count,
            incorrect_count = excluded.incorrect_count,
            mastery_level = excluded.mastery_level,
            learned = excluded.learned,
            streak = excluded.streak,
            last_reviewed = excluded.last_reviewed,
            next_review = excluded.next_review
        """,
        (
            record.user_id,
            record.vocabulary_id,
            record.correct_count,
            record.incorrect_count,
            record.mastery_level,
            int(record.learned),
            record.streak,
            _ts(record.last_reviewed),
            _ts(record.next_review),
        ),
    )


class MemoryStore:
    def __init__(self):
        self._topics: Dict[str, Topic] = {}
        self._vocabularies: Dict[str, Vocabulary] = {}
        self._progress: Dict[ProgressKey, ProgressRecord] = {}
        self._sessions: List[LearningSession] = []

    # Topics

    def get_topics(self, user_id: str) -> List[Topic]:
        return [t for t in self._topics.values() if t.user_id == user_id]

    def get_topic(self, topic_id: str) -> Optional[Topic]:
        return self._topics.get(topic_id)

    def add_topic(self, user_id: str, topic: TopicCreate) -> Topic:
        created = Topic(id=new_id(), user_id=user_id, created_at=utcnow(), **topic.model_dump())
        self._topics[created.id] = created
        return created

    def update_topic(self, topic_id: str, updates: TopicUpdate) -> Optional[Topic]:
        current = self._topics.get(topic_id)
        if current is None:
            return None
        updated = current.model_copy(update=updates.model_dump(exclude_unset=True, exclude_none=True))
        self._topics[topic_id] = updated
        return updated

    def delete_topic(self, topic_id: str) -> bool:
        if self._topics.pop(topic_id, None) is None:
            return False
        for vocabulary_id in [v.id for v in self._vocabularies.values() if v.topic_id == topic_id]:
            self.delete_vocabulary(vocabulary_id)
        return True

    # Vocabulary

    def get_vocabularies(self, user_id: str, topic_id: Optional[str] = None) -> List[Vocabulary]:
        vocabularies = [v for v in self._vocabularies.values() if v.user_id == user_id]
        if topic_id:
            vocabularies = [v for v in vocabularies if v.topic_id == topic_id]
        return vocabularies

    def get_vocabulary(self, vocabulary_id: str) -> Optional[Vocabulary]:
        return self._vocabularies.get(vocabulary_id)

    def add_vocabulary(self, user_id: str, vocabulary: VocabularyCreate) -> Vocabulary:
        now = utcnow()
        created = Vocabulary(
            id=new_id(),
            user_id=user_id,
            created_at=now,
            updated_at=now,
            **vocabulary.model_dump(),
        )
        self._vocabularies[created.id] = created
        self.insert_progress(initial_progress(user_id, created.id, now))
        return created

    def update_vocabulary(self, vocabulary_id: str, updates: VocabularyUpdate) -> Optional[Vocabulary]:
        current = self._vocabularies.get(vocabulary_id)
        if current is None:
            return None
        changes = updates.model_dump(exclude_unset=True, exclude_none=True)
        changes["updated_at"] = utcnow()
        updated = current.model_copy(update=changes)
        self._vocabularies[vocabulary_id] = updated
        return updated

    def delete_vocabulary(self, vocabulary_id: str) -> bool:
        if self._vocabularies.pop(vocabulary_id, None) is None:
            return False
        for key in [key for key in self._progress if key[1] == vocabulary_id]:
            del self._progress[key]
        return True

    # Progress

    def get_progress(self, user_id: str, vocabulary_id: Optional[str] = None) -> List[ProgressRecord]:
        if vocabulary_id:
            record = self._progress.get((user_id, vocabulary_id))
            return [record] if record else []
        return [r for (owner, _), r in self._progress.items() if owner == user_id]

    def insert_progress(self, record: ProgressRecord) -> ProgressRecord:
        key = (record.user_id, record.vocabulary_id)
        if key in self._progress:
            raise ValueError(f"Progress already exists for {key}")
        self._progress[key] = record
        return record

    def update_progress(self, record: ProgressRecord) -> ProgressRecord:
        key = (record.user_id, record.vocabulary_id)
        if key not in self._progress:
            raise KeyError(key)
        self._progress[key] = record
        return record

    def write_progress(self, record: ProgressRecord) -> ProgressRecord:
        if (record.user_id, record.vocabulary_id) in self._progress:
            return self.update_progress(record)
        return self.insert_progress(record)

    # Sessions

    def get_sessions(self, user_id: str, window_start: Optional[datetime] = None) -> List[LearningSession]:
        sessions = [s for s in self._sessions if s.user_id == user_id]
        if window_start is not None:
            sessions = [s for s in sessions if s.completed_at >= window_start]
        return sessions

    def write_session(self, user_id: str, session: LearningSessionCreate) -> LearningSession:
        saved = LearningSession(id=new_id(), user_id=user_id, **session.model_dump())
        self._sessions.append(saved)
        return saved
