#!/usr/bin/env python3
# seed.py
# Loads morphhb (OSHB) books into SQLite: bible_books, bible_verses, bible_words.
#
#   python seed.py ruth              # one book
#   python seed.py exodus ruth       # several books
#   python seed.py --all             # all 39 books
#   python seed.py --remaining       # only books with no verses in the DB yet
import os
import sys
import sqlite3
import argparse
from typing import Dict, Any, Iterable, List, Optional, Set

from books import ALL_BOOKS, find_book
from db import DB_PATH, open_db, init_db
from osis_ingest import CorpusError, ingest_book

DEFAULT_CORPUS = os.environ.get(
    "MORPHHB_DIR", os.path.join(os.path.dirname(__file__), "data", "morphhb", "wlc"))

WORD_BATCH_SIZE = 500
PROGRESS_EVERY = 10

UPSERT_BOOK_SQL = """
INSERT INTO bible_books (id, name, hebrew_name, abbreviation, chapter_count, testament, order_index)
VALUES (:id, :name, :hebrew_name, :abbreviation, :chapter_count, :testament, :order_index)
ON CONFLICT(id) DO UPDATE SET
    name = excluded.name,
    hebrew_name = excluded.hebrew_name,
    abbreviation = excluded.abbreviation,
    chapter_count = excluded.chapter_count,
    order_index = excluded.order_index
"""

INSERT_VERSE_SQL = """
INSERT INTO bible_verses (id, book_id, chapter, verse, hebrew_text, word_count)
VALUES (:id, :book_id, :chapter, :verse, :hebrew_text, :word_count)
ON CONFLICT(id) DO NOTHING
"""

INSERT_WORD_SQL = """
INSERT INTO bible_words (id, verse_id, position, hebrew, lemma, lemma_prefix, morph, is_prefix_compound)
VALUES (:id, :verse_id, :position, :hebrew, :lemma, :lemma_prefix, :morph, :is_prefix_compound)
ON CONFLICT(id) DO NOTHING
"""

def debug(msg):
    print(msg, file=sys.stderr)

def batched(iterable: Iterable[Dict[str, Any]], n: int):
    """Yield lists of size n from iterable."""
    batch = []
    for item in iterable:
        batch.append(item)
        if len(batch) >= n:
            yield batch
            batch = []
    if batch:
        yield batch

def upsert_book(conn: sqlite3.Connection, row: Dict[str, Any]):
    conn.execute(UPSERT_BOOK_SQL, row)

def insert_verses(conn: sqlite3.Connection, rows: List[Dict[str, Any]]):
    if rows:
        conn.executemany(INSERT_VERSE_SQL, rows)

def insert_words(conn: sqlite3.Connection, rows: List[Dict[str, Any]], batch_size: int = WORD_BATCH_SIZE):
    for batch in batched(rows, batch_size):
        conn.executemany(INSERT_WORD_SQL, batch)

def load_book(conn: sqlite3.Connection, ingested: Dict[str, Any],
              batch_size: int = WORD_BATCH_SIZE) -> Dict[str, int]:
    """Write one ingested book, committing per chapter. Existing rows are left as they are."""
    book = ingested["book"]
    chapters = ingested["chapters"]
    upsert_book(conn, book)
    conn.commit()

    total_verses = 0
    total_words = 0
    last = len(chapters)
    for i, ch in enumerate(chapters, 1):
        insert_verses(conn, ch["verses"])
        insert_words(conn, ch["words"], batch_size)
        conn.commit()

        total_verses += len(ch["verses"])
        total_words += len(ch["words"])

        if i == 1 or ch["chapter"] % PROGRESS_EVERY == 0 or i == last:
            print(f"   Chapter {ch['chapter']}/{book['chapter_count']}: "
                  f"{len(ch['verses'])} verses, {len(ch['words'])} words "
                  f"(running total: {total_verses:,} verses, {total_words:,} words)")

    return {"verses": total_verses, "words": total_words}

def seed_book(book: Dict[str, Any], db_path: str, corpus_dir: str,
              batch_size: int = WORD_BATCH_SIZE) -> Optional[Dict[str, int]]:
    """
    Ingest and load one book on its own connection.
    Returns the counts, or None when the book was skipped.
    """
    print(f"\n📖 Seeding {book['name']} ({book['hebrew_name']}) …")
    xml_path = os.path.join(corpus_dir, book["xml_file"])
    try:
        ingested = ingest_book(book, xml_path)
    except (FileNotFoundError, CorpusError) as e:
        debug(f"   ❌ {e}. Skipping {book['name']}.")
        return None

    print(f"   Found {len(ingested['chapters'])} chapters")

    # Fresh connection per book, closed whether or not the load succeeds.
    try:
        with open_db(db_path) as conn:
            try:
                counts = load_book(conn, ingested, batch_size)
            except sqlite3.Error:
                conn.rollback()
                raise
    except sqlite3.Error as e:
        debug(f"   ❌ Database error while loading {book['name']}: {e}")
        return None

    print(f"   ✅ {book['name']}: {counts['verses']:,} verses, {counts['words']:,} words")
    return counts

def existing_book_ids(conn: sqlite3.Connection) -> Set[str]:
    """Books that already have verse data, not just a bible_books row."""
    rows = conn.execute("SELECT DISTINCT book_id FROM bible_verses").fetchall()
    return {r["book_id"] for r in rows}

def select_books(names: List[str], all_books: bool = False, remaining: bool = False,
                 existing_ids: Optional[Set[str]] = None) -> List[Dict[str, Any]]:
    if all_books:
        return list(ALL_BOOKS)
    if remaining:
        existing_ids = existing_ids or set()
        return [b for b in ALL_BOOKS if b["id"] not in existing_ids]

    selected = []
    for name in names:
        book = find_book(name)
        if not book:
            raise ValueError(f'Unknown book: "{name}". Run without arguments to see available books.')
        if book not in selected:
            selected.append(book)
    return selected

def print_usage():
    print("Hebrew Bible Seed Script")
    print("========================")
    print("Usage:")
    print("  python seed.py ruth              # Seed one book")
    print("  python seed.py exodus ruth       # Seed multiple books")
    print("  python seed.py --all             # Seed all 39 books")
    print("  python seed.py --remaining       # Seed only books not in DB")
    print("")
    print("Available books:")
    for book in ALL_BOOKS:
        print(f"  {book['id']:<18} {book['name']} ({book['chapter_count']} chapters)")

def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Seed OSHB Hebrew Bible books into SQLite.")
    ap.add_argument("books", nargs="*", help="Book ids (genesis, 1-samuel, …) or OSIS codes (Gen, 1Sam, …).")
    ap.add_argument("--all", action="store_true", help="Seed all known books.")
    ap.add_argument("--remaining", action="store_true", help="Seed only books with no verses in the DB yet.")
    ap.add_argument("--db", default=DB_PATH,
                    help=f"SQLite path (default: {DB_PATH} or $HEBREW_BIBLE_DB)")
    ap.add_argument("--corpus", default=DEFAULT_CORPUS,
                    help=f"Folder with morphhb wlc/*.xml (default: {DEFAULT_CORPUS} or $MORPHHB_DIR)")
    ap.add_argument("--batch-size", type=int, default=WORD_BATCH_SIZE,
                    help=f"Word rows per INSERT batch (default {WORD_BATCH_SIZE}).")
    return ap.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    if not (args.books or args.all or args.remaining):
        print_usage()
        return 0

    # Schema migration runs once, before any book is touched.
    with open_db(args.db) as conn:
        init_db(conn)
        existing = existing_book_ids(conn) if args.remaining else set()

    try:
        books = select_books(args.books, all_books=args.all, remaining=args.remaining,
                             existing_ids=existing)
    except ValueError as e:
        debug(f"❌ {e}")
        return 1

    if args.remaining:
        print(f"🚀 Seeding {len(books)} remaining books ({len(existing)} already have verse data) …")
        if not books:
            print("✅ All books already seeded!")
            return 0
    else:
        print(f"🚀 Seeding {len(books)} book(s) …")

    grand_verses = 0
    grand_words = 0
    skipped = []
    for book in books:
        counts = seed_book(book, args.db, args.corpus, args.batch_size)
        if counts is None:
            skipped.append(book["id"])
            continue
        grand_verses += counts["verses"]
        grand_words += counts["words"]

    print("\n" + "=" * 50)
    print("📊 Grand Total:")
    print(f"   Books seeded: {len(books) - len(skipped)}")
    print(f"   Verses: {grand_verses:,}")
    print(f"   Words: {grand_words:,}")
    if skipped:
        print(f"   Skipped: {', '.join(skipped)}")
    print("=" * 50)
    return 0

if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        print(f"❌ Seeding failed: {e}", file=sys.stderr)
        sys.exit(1)
