import sqlite3
import os
from contextlib import contextmanager
from typing import Optional

BASE_DIR = os.path.dirname(__file__)
DB_PATH = os.environ.get("HEBREW_BIBLE_DB", os.path.join(BASE_DIR, "hebrew_bible.sqlite3"))

SCHEMA = """
PRAGMA journal_mode=WAL;
CREATE TABLE IF NOT EXISTS bible_books (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    hebrew_name TEXT NOT NULL,
    abbreviation TEXT NOT NULL,
    chapter_count INTEGER NOT NULL,
    testament TEXT NOT NULL DEFAULT 'OT',
    order_index INTEGER NOT NULL,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE IF NOT EXISTS bible_verses (
    id TEXT PRIMARY KEY,
    book_id TEXT NOT NULL REFERENCES bible_books(id) ON DELETE CASCADE,
    chapter INTEGER NOT NULL,
    verse INTEGER NOT NULL,
    hebrew_text TEXT NOT NULL,
    word_count INTEGER NOT NULL DEFAULT 0,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
    UNIQUE(book_id, chapter, verse)
);
CREATE INDEX IF NOT EXISTS idx_bible_verses_book_chapter ON bible_verses(book_id, chapter);
CREATE TABLE IF NOT EXISTS bible_words (
    id TEXT PRIMARY KEY,
    verse_id TEXT NOT NULL REFERENCES bible_verses(id) ON DELETE CASCADE,
    position INTEGER NOT NULL,
    hebrew TEXT NOT NULL,
    lemma TEXT,
    lemma_prefix TEXT,
    morph TEXT,
    is_prefix_compound INTEGER NOT NULL DEFAULT 0,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP
);
CREATE INDEX IF NOT EXISTS idx_bible_words_verse ON bible_words(verse_id);
CREATE INDEX IF NOT EXISTS idx_bible_words_lemma ON bible_words(lemma);
CREATE INDEX IF NOT EXISTS idx_bible_words_position ON bible_words(verse_id, position);
CREATE TABLE IF NOT EXISTS strongs_hebrew (
    number TEXT PRIMARY KEY,
    lemma TEXT,
    transliteration TEXT,
    pronunciation TEXT,
    short_def TEXT,
    strongs_def TEXT,
    kjv_def TEXT,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP
);
"""

def get_conn(db_path: Optional[str] = None) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path or DB_PATH)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys=ON;")
    return conn

@contextmanager
def open_db(db_path: Optional[str] = None):
    """Connection scoped to one unit of work; always closed, even on error."""
    conn = get_conn(db_path)
    try:
        yield conn
    finally:
        conn.close()

def init_db(conn: sqlite3.Connection):
    """Create tables/indexes if they don't exist (safe to run any number of times)."""
    conn.executescript(SCHEMA)
    conn.commit()

if __name__ == "__main__":
    with open_db() as conn:
        init_db(conn)
    print("Initialized DB at", DB_PATH)
