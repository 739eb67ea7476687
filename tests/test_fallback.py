import sqlite3
import threading

import pytest

from db import database
from db.fallback import FallbackStore
from db.store import MemoryStore, SQLiteStore
from models.progress import Outcome
from models.topic import TopicCreate
from models.vocabulary import VocabularyCreate
from utils.progress import learning_stats, record_answer


@pytest.fixture
def broken_db(config_dir, monkeypatch):
    # A database file without tables makes every query fail.
    monkeypatch.setattr(database, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(database, "DB_PATH", config_dir / "empty.db")


def test_healthy_primary_is_not_degraded(store):
    result = store.add_topic("u1", TopicCreate(name="Family"))
    assert result.degraded is False
    assert store.degraded is False
    assert store.get_topics("u1").value == [result.value]


def test_storage_error_switches_to_fallback(broken_db):
    store = FallbackStore(SQLiteStore(), MemoryStore())
    result = store.get_topics("u1")
    assert result.value == []
    assert result.degraded is True
    assert store.degraded is True
    added = store.add_topic("u1", TopicCreate(name="Family"))
    assert added.degraded is True
    assert [t.name for t in store.get_topics("u1").value] == ["Family"]


def test_reset_returns_to_primary(broken_db, monkeypatch, config_dir):
    store = FallbackStore(SQLiteStore(), MemoryStore())
    assert store.get_topics("u1").degraded is True
    monkeypatch.setattr(database, "DB_PATH", config_dir / "vocabcoach.db")
    database.init_db()
    store.reset()
    result = store.get_topics("u1")
    assert result.degraded is False


def test_disabled_fallback_propagates(broken_db):
    store = FallbackStore(SQLiteStore(), MemoryStore(), enabled=False)
    with pytest.raises(sqlite3.OperationalError):
        store.get_topics("u1")
    assert store.degraded is False


def test_integrity_errors_propagate(store):
    with pytest.raises(sqlite3.IntegrityError):
        store.add_vocabulary("u1", VocabularyCreate(word="Father", meaning="Bo", topic_id="missing"))
    assert store.degraded is False


def test_unknown_methods_raise_attribute_error(store):
    with pytest.raises(AttributeError):
        store.insert_progress


def test_record_answer_without_prior_record():
    store = FallbackStore(MemoryStore(), MemoryStore())
    result = record_answer(store, "u1", "v1", Outcome.CORRECT)
    assert result.degraded is False
    assert result.value.mastery_level == 20
    assert result.value.streak == 1
    assert len(store.get_progress("u1").value) == 1


def test_record_answer_updates_existing_record(store):
    topic = store.add_topic("u1", TopicCreate(name="Family")).value
    vocab = store.add_vocabulary("u1", VocabularyCreate(word="Mother", meaning="Me", topic_id=topic.id)).value
    record_answer(store, "u1", vocab.id, Outcome.CORRECT)
    result = record_answer(store, "u1", vocab.id, Outcome.INCORRECT)
    assert result.value.correct_count == 1
    assert result.value.incorrect_count == 1
    assert result.value.mastery_level == 5
    assert result.value.streak == 0
    stats = learning_stats(store, "u1")
    assert stats.value.total_words == 1
    assert stats.value.average_accuracy == 50


def test_concurrent_answers_do_not_lose_updates():
    store = FallbackStore(MemoryStore(), MemoryStore())
    threads = [
        threading.Thread(target=record_answer, args=(store, "u1", "v1", Outcome.CORRECT))
        for _ in range(40)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    record = store.get_progress("u1", "v1").value[0]
    assert record.correct_count == 40
    assert record.streak == 40
    assert record.mastery_level == 100
