# SQL schema for VocabCoach database

SCHEMA_VERSION = 1

SCHEMA_SQL = """
-- Topics
CREATE TABLE IF NOT EXISTS topics (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    name TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    color TEXT NOT NULL DEFAULT '#2563eb',
    icon_url TEXT,
    created_at TEXT NOT NULL
);

-- Vocabulary items
CREATE TABLE IF NOT EXISTS vocabularies (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    topic_id TEXT NOT NULL,
    word TEXT NOT NULL,
    meaning TEXT NOT NULL,
    example TEXT,
    pronunciation TEXT,
    image_url TEXT,
    audio_url TEXT,
    difficulty TEXT NOT NULL DEFAULT 'easy' CHECK(difficulty IN ('easy', 'medium', 'hard')),
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    FOREIGN KEY (topic_id) REFERENCES topics (id) ON DELETE CASCADE
);

-- Mastery progress, one row per user/vocabulary pair
CREATE TABLE IF NOT EXISTS progress (
    user_id TEXT NOT NULL,
    vocabulary_id TEXT NOT NULL,
    correct_count INTEGER NOT NULL DEFAULT 0,
    incorrect_count INTEGER NOT NULL DEFAULT 0,
    mastery_level INTEGER NOT NULL DEFAULT 0 CHECK(mastery_level BETWEEN 0 AND 100),
    learned INTEGER NOT NULL DEFAULT 0,
    streak INTEGER NOT NULL DEFAULT 0,
    last_reviewed TEXT NOT NULL,
    next_review TEXT NOT NULL,
    PRIMARY KEY (user_id, vocabulary_id),
    FOREIGN KEY (vocabulary_id) REFERENCES vocabularies (id) ON DELETE CASCADE
);

-- Completed learning sessions
CREATE TABLE IF NOT EXISTS sessions (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    topic_id TEXT NOT NULL DEFAULT '',
    type TEXT NOT NULL CHECK(type IN ('flashcard', 'quiz', 'review')),
    score REAL NOT NULL DEFAULT 0,
    total_questions INTEGER NOT NULL DEFAULT 0,
    time_spent INTEGER NOT NULL DEFAULT 0,
    started_at TEXT NOT NULL,
    completed_at TEXT NOT NULL
);
"""

# Indexes for performance
INDEXES_SQL = """
CREATE INDEX IF NOT EXISTS idx_topics_user ON topics (user_id);
CREATE INDEX IF NOT EXISTS idx_vocabularies_user_topic ON vocabularies (user_id, topic_id);
CREATE INDEX IF NOT EXISTS idx_progress_vocabulary ON progress (vocabulary_id);
CREATE INDEX IF NOT EXISTS idx_sessions_user_completed ON sessions (user_id, completed_at);
"""
