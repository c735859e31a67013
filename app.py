# app.py — read API over the seeded Hebrew Bible, morphology decoded per request

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from typing import Dict, Any, List
import sqlite3, os

import db
from morphology import decode_morphology

def db_path() -> str:
    return os.environ.get("HEBREW_BIBLE_DB") or db.DB_PATH

def get_conn():
    return db.get_conn(db_path())

# ---------- App ----------
app = FastAPI(title="Hebrew Bible API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)

def word_payload(row: sqlite3.Row) -> Dict[str, Any]:
    morph = row["morph"] or ""
    return {
        "id": row["id"],
        "position": int(row["position"]),
        "hebrew": row["hebrew"],
        "lemma": row["lemma"],
        "lemma_prefix": row["lemma_prefix"],
        "morph": row["morph"],
        "morph_decoded": decode_morphology(morph),
        "is_prefix_compound": bool(row["is_prefix_compound"]),
        "gloss": row["short_def"] or None,
        "transliteration": row["transliteration"] or None,
        "pronunciation": row["pronunciation"] or None,
        "full_def": row["strongs_def"] or None,
        "strongs_lemma": row["strongs_lemma"] or None,
    }

@app.get("/health")
def health():
    path = db_path()
    if not os.path.isfile(path):
        return {"ok": False, "db": path}
    try:
        with db.open_db(path) as c:
            counts = {
                t: c.execute(f"SELECT COUNT(*) FROM {t}").fetchone()[0]
                for t in ("bible_books", "bible_verses", "bible_words", "strongs_hebrew")
            }
    except sqlite3.Error as e:
        # e.g. the file exists but the schema was never created
        return {"ok": False, "db": path, "error": str(e)}
    return {"ok": True, "db": path, **counts}

@app.get("/books")
def list_books():
    with db.open_db(db_path()) as c:
        rows = c.execute("""
            SELECT id, name, hebrew_name, abbreviation, chapter_count, testament, order_index
            FROM bible_books
            ORDER BY order_index ASC
        """).fetchall()
    return {"books": [dict(r) for r in rows]}

@app.get("/morphology")
def morphology(code: str = ""):
    return {"code": code, "description": decode_morphology(code)}

@app.get("/bible/{book_id}/{chapter}")
def get_chapter(book_id: str, chapter: int):
    if chapter < 1:
        raise HTTPException(400, "Invalid chapter number")

    with db.open_db(db_path()) as c:
        book = c.execute(
            "SELECT id, name, hebrew_name, chapter_count FROM bible_books WHERE id=?",
            (book_id,)).fetchone()
        if not book:
            raise HTTPException(404, "Book not found")
        if chapter > book["chapter_count"]:
            raise HTTPException(
                404, f"Chapter {chapter} not found. {book['name']} has {book['chapter_count']} chapters.")

        verses = c.execute("""
            SELECT id, verse, hebrew_text, word_count
            FROM bible_verses
            WHERE book_id=? AND chapter=?
            ORDER BY verse ASC
        """, (book_id, chapter)).fetchall()
        if not verses:
            raise HTTPException(404, "No verses found for this chapter")

        words = c.execute("""
            SELECT bw.id, bw.verse_id, bw.position, bw.hebrew, bw.lemma, bw.lemma_prefix,
                   bw.morph, bw.is_prefix_compound,
                   sh.lemma AS strongs_lemma, sh.transliteration, sh.pronunciation,
                   sh.short_def, sh.strongs_def
            FROM bible_words bw
            JOIN bible_verses bv ON bv.id = bw.verse_id
            LEFT JOIN strongs_hebrew sh ON sh.number = bw.lemma
            WHERE bv.book_id=? AND bv.chapter=?
            ORDER BY bv.verse ASC, bw.position ASC
        """, (book_id, chapter)).fetchall()

    by_verse: Dict[str, List[Dict[str, Any]]] = {}
    for w in words:
        by_verse.setdefault(w["verse_id"], []).append(word_payload(w))

    return {
        "book": {
            "id": book["id"], "name": book["name"],
            "hebrew_name": book["hebrew_name"], "chapter_count": book["chapter_count"],
        },
        "chapter": chapter,
        "verses": [{
            "id": v["id"],
            "verse": v["verse"],
            "hebrew_text": v["hebrew_text"],
            "word_count": v["word_count"],
            "words": by_verse.get(v["id"], []),
        } for v in verses],
        "navigation": {
            "prev_chapter": chapter - 1 if chapter > 1 else None,
            "next_chapter": chapter + 1 if chapter < book["chapter_count"] else None,
            "total_chapters": book["chapter_count"],
        },
    }
