# strongs.py
# Seeds strongs_hebrew from the openscriptures Strong's Hebrew dictionary
# (strongs-hebrew-dictionary.js: `var strongsHebrewDictionary = {"H1": {...}, ...};`).
import os, re, sys, json, sqlite3, argparse
import urllib.request
from typing import Dict, Iterable, List
from bs4 import BeautifulSoup

from db import DB_PATH, open_db, init_db

STRONGS_URL = "https://raw.githubusercontent.com/openscriptures/strongs/master/hebrew/strongs-hebrew-dictionary.js"
SHORT_DEF_MAX = 80

INSERT_SQL = """
INSERT INTO strongs_hebrew (number, lemma, transliteration, pronunciation, short_def, strongs_def, kjv_def)
VALUES (:number, :lemma, :transliteration, :pronunciation, :short_def, :strongs_def, :kjv_def)
ON CONFLICT(number) DO NOTHING
"""

def clean(s):
    return re.sub(r"\s+", " ", (s or "").strip())

def read_source(source: str) -> str:
    if source.startswith(("http://", "https://")):
        with urllib.request.urlopen(source, timeout=60) as resp:
            return resp.read().decode("utf-8")
    if not os.path.isfile(source):
        raise FileNotFoundError(f"Strong's dictionary not found: {source}")
    with open(source, "r", encoding="utf-8-sig") as f:
        return f.read()

def parse_dictionary(text: str) -> Dict[str, Dict[str, str]]:
    # Strip the JS wrapper: decode the first {...} object literal, ignore what follows.
    start = text.find("{")
    if start < 0:
        raise ValueError("No JSON object found in Strong's dictionary source")
    entries, _ = json.JSONDecoder().raw_decode(text, start)
    return entries

def load_dictionary(source: str) -> Dict[str, Dict[str, str]]:
    return parse_dictionary(read_source(source))

def clean_definition(text: str) -> str:
    """Markup, {braces} and [bracketed refs] removed; whitespace collapsed."""
    if not text:
        return ""
    plain = BeautifulSoup(text, "html.parser").get_text()
    plain = plain.replace("{", "").replace("}", "")
    plain = re.sub(r"\[.*?\]", "", plain)
    return clean(plain)

def _first_pieces(text: str) -> str:
    return ",".join(text.split(",")[:3]).strip()[:SHORT_DEF_MAX]

def extract_short_def(strongs_def: str, kjv_def: str) -> str:
    """First few comma pieces of the first ';' phrase, falling back to the KJV gloss."""
    definition = clean_definition(strongs_def)
    if definition:
        first = _first_pieces(definition.split(";")[0])
        if first:
            return first

    kjv = clean_definition(kjv_def)
    if kjv:
        first = _first_pieces(kjv)
        if first:
            return first

    return definition[:SHORT_DEF_MAX]

def dictionary_rows(entries: Dict[str, Dict[str, str]]) -> Iterable[Dict[str, str]]:
    for number, entry in entries.items():
        strongs_def = entry.get("strongs_def") or ""
        kjv_def = entry.get("kjv_def") or ""
        yield {
            "number": number,
            "lemma": entry.get("lemma") or "",
            "transliteration": entry.get("xlit") or "",
            "pronunciation": entry.get("pron") or "",
            "short_def": extract_short_def(strongs_def, kjv_def),
            "strongs_def": strongs_def,
            "kjv_def": kjv_def,
        }

def seed_strongs(conn: sqlite3.Connection, entries: Dict[str, Dict[str, str]], batch_size: int = 200) -> int:
    rows: List[Dict[str, str]] = list(dictionary_rows(entries))
    done = 0
    for i in range(0, len(rows), batch_size):
        batch = rows[i:i + batch_size]
        conn.executemany(INSERT_SQL, batch)
        conn.commit()
        done += len(batch)
        if done % 2000 == 0:
            print(f"   {done}/{len(rows)} entries …")
    return done

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Seed Strong's Hebrew dictionary into SQLite.")
    ap.add_argument("--source", default=STRONGS_URL,
                    help="Path or URL of strongs-hebrew-dictionary.js (default: GitHub raw file)")
    ap.add_argument("--db", default=DB_PATH,
                    help=f"SQLite path (default: {DB_PATH} or $HEBREW_BIBLE_DB)")
    args = ap.parse_args(argv)

    print(f"📚 Loading Strong's Hebrew Dictionary from {args.source} …")
    entries = load_dictionary(args.source)
    print(f"✅ Loaded {len(entries):,} Strong's entries")

    with open_db(args.db) as conn:
        init_db(conn)
        inserted = seed_strongs(conn, entries)
    print(f"✅ Processed {inserted:,} Strong's dictionary entries → {args.db}")
    return 0

if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        print(f"❌ Strong's import failed: {e}", file=sys.stderr)
        sys.exit(1)
