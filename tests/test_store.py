from datetime import datetime, timedelta, timezone

import pytest

from db.store import MemoryStore, SQLiteStore
from models.progress import Outcome
from models.session import LearningSessionCreate, SessionType
from models.topic import TopicCreate, TopicUpdate
from models.vocabulary import VocabularyCreate, VocabularyUpdate
from utils.mastery import apply_outcome


@pytest.fixture(params=["sqlite", "memory"])
def backend(request, db_path):
    if request.param == "sqlite":
        return SQLiteStore()
    return MemoryStore()


def _seed(backend):
    topic = backend.add_topic("u1", TopicCreate(name="Family"))
    vocab = backend.add_vocabulary(
        "u1",
        VocabularyCreate(word="Father", meaning="Bo, cha", topic_id=topic.id, example="My father is a teacher."),
    )
    return topic, vocab


def test_topic_crud(backend):
    topic = backend.add_topic("u1", TopicCreate(name="Travel", color="#10b981"))
    backend.add_topic("u2", TopicCreate(name="Work"))
    assert [t.name for t in backend.get_topics("u1")] == ["Travel"]
    updated = backend.update_topic(topic.id, TopicUpdate(description="Words for trips"))
    assert updated.name == "Travel"
    assert updated.description == "Words for trips"
    assert backend.get_topic(topic.id).description == "Words for trips"
    assert backend.update_topic("missing", TopicUpdate(name="x")) is None


def test_add_vocabulary_creates_zeroed_progress(backend):
    _, vocab = _seed(backend)
    records = backend.get_progress("u1", vocab.id)
    assert len(records) == 1
    assert records[0].correct_count == 0
    assert records[0].mastery_level == 0
    assert records[0].learned is False


def test_write_progress_never_duplicates(backend):
    _, vocab = _seed(backend)
    record = backend.get_progress("u1", vocab.id)[0]
    for _ in range(3):
        record = apply_outcome(record, Outcome.CORRECT)
        backend.write_progress(record)
    records = backend.get_progress("u1", vocab.id)
    assert len(records) == 1
    assert records[0].correct_count == 3
    assert records[0].mastery_level == 30
    assert records[0].streak == 3


def test_vocabulary_filters_and_update(backend):
    topic, vocab = _seed(backend)
    other = backend.add_topic("u1", TopicCreate(name="Work"))
    backend.add_vocabulary("u1", VocabularyCreate(word="Manager", meaning="Quan ly", topic_id=other.id))
    assert len(backend.get_vocabularies("u1")) == 2
    assert [v.word for v in backend.get_vocabularies("u1", topic.id)] == ["Father"]
    updated = backend.update_vocabulary(vocab.id, VocabularyUpdate(meaning="Bo"))
    assert updated.meaning == "Bo"
    assert updated.word == "Father"
    assert updated.updated_at >= vocab.updated_at
    assert backend.update_vocabulary("missing", VocabularyUpdate(meaning="x")) is None


def test_delete_vocabulary_removes_progress(backend):
    _, vocab = _seed(backend)
    assert backend.delete_vocabulary(vocab.id) is True
    assert backend.get_vocabulary(vocab.id) is None
    assert backend.get_progress("u1") == []
    assert backend.delete_vocabulary(vocab.id) is False


def test_delete_topic_cascades(backend):
    topic, vocab = _seed(backend)
    assert backend.delete_topic(topic.id) is True
    assert backend.get_topic(topic.id) is None
    assert backend.get_vocabularies("u1") == []
    assert backend.get_progress("u1") == []
    assert backend.delete_topic(topic.id) is False


def test_sessions_window(backend):
    now = datetime.now(timezone.utc)
    for days_ago in (1, 10):
        completed = now - timedelta(days=days_ago)
        backend.write_session(
            "u1",
            LearningSessionCreate(
                type=SessionType.QUIZ,
                score=50,
                total_questions=4,
                time_spent=60,
                started_at=completed - timedelta(minutes=1),
                completed_at=completed,
            ),
        )
    assert len(backend.get_sessions("u1")) == 2
    recent = backend.get_sessions("u1", now - timedelta(days=7))
    assert len(recent) == 1
    assert recent[0].type == SessionType.QUIZ
    assert backend.get_sessions("u2") == []


def test_memory_insert_and_update_guard_keys():
    store = MemoryStore()
    record = apply_outcome(None, Outcome.CORRECT, user_id="u1", vocabulary_id="v1")
    store.insert_progress(record)
    with pytest.raises(ValueError):
        store.insert_progress(record)
    with pytest.raises(KeyError):
        store.update_progress(record.model_copy(update={"vocabulary_id": "v2"}))
