# tools/db_probe.py
# Sanity checks on a seeded DB: per-book counts and verse/word consistency.
import os, sys, sqlite3
from typing import Any, Dict, List

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from db import DB_PATH, open_db  # noqa: E402

def book_summary(conn: sqlite3.Connection) -> List[Dict[str, Any]]:
    rows = conn.execute("""
        SELECT b.id, b.name,
               COUNT(DISTINCT v.id) AS verses,
               COUNT(w.id)          AS words
          FROM bible_books b
     LEFT JOIN bible_verses v ON v.book_id = b.id
     LEFT JOIN bible_words  w ON w.verse_id = v.id
      GROUP BY b.id, b.name
      ORDER BY b.order_index
    """).fetchall()
    return [dict(r) for r in rows]

def verse_integrity_problems(conn: sqlite3.Connection) -> List[str]:
    """Verses whose word_count disagrees with their words, or whose positions aren't 0..n-1."""
    rows = conn.execute("""
        SELECT v.id, v.word_count,
               COUNT(w.id)                 AS n,
               COUNT(DISTINCT w.position)  AS distinct_pos,
               COALESCE(MIN(w.position), 0) AS min_pos,
               COALESCE(MAX(w.position), -1) AS max_pos
          FROM bible_verses v
     LEFT JOIN bible_words w ON w.verse_id = v.id
      GROUP BY v.id, v.word_count
    """).fetchall()

    problems = []
    for r in rows:
        if r["word_count"] != r["n"]:
            problems.append(f"{r['id']}: word_count={r['word_count']} but {r['n']} word rows")
        elif r["n"] and (r["min_pos"] != 0 or r["max_pos"] != r["n"] - 1 or r["distinct_pos"] != r["n"]):
            problems.append(f"{r['id']}: positions {r['min_pos']}..{r['max_pos']} not contiguous for {r['n']} words")
    return problems

def main():
    db_path = DB_PATH
    print("DB:", db_path)
    if not os.path.isfile(db_path):
        raise SystemExit("DB not found. Run seed.py first.")

    with open_db(db_path) as con:
        summary = book_summary(con)
        for b in summary:
            print(f"  {b['id']:<18} verses: {b['verses']:>6,}  words: {b['words']:>7,}")
        print("total verses:", sum(b["verses"] for b in summary))
        print("total words:", sum(b["words"] for b in summary))

        problems = verse_integrity_problems(con)
    if problems:
        print(f"⚠️ {len(problems)} verse(s) out of line:")
        for p in problems[:30]:
            print("  ", p)
        raise SystemExit(1)
    print("✅ verse/word counts and positions consistent")

if __name__ == "__main__":
    main()
