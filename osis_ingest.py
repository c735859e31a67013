# osis_ingest.py
# Reads one OSHB OSIS book (morphhb wlc/*.xml) into row-ready book/verse/word records.
#   <chapter osisID="Gen.1"><verse osisID="Gen.1.1">
#     <w lemma="b/7225" morph="HR/Ncfsa" id="01xeN">בְּ/רֵאשִׁ֖ית</w> ...

import os, re
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional, Tuple

from hebrew_text import normalize_surface, parse_lemma

# Element name -> cardinality. Elements listed as "many" always come back as lists,
# even when a chapter has a single verse or a verse a single word.
OSIS_CARDINALITY = {
    "chapter": "many",
    "verse": "many",
    "w": "many",
    "seg": "many",
}

BOOK_COLUMNS = ("id", "name", "hebrew_name", "abbreviation", "chapter_count", "testament", "order_index")

class CorpusError(RuntimeError):
    """A corpus file exists but cannot be read as an OSIS book."""

def strip_ns(tag: str) -> str:
    return tag.split("}", 1)[-1]

def element_to_dict(el: ET.Element, cardinality: Dict[str, str] = OSIS_CARDINALITY) -> Dict[str, Any]:
    """
    Turn an element into a plain dict: attributes as "@name", text as "#text",
    children keyed by tag. Repeated tags become lists; tags marked "many" in
    `cardinality` are lists regardless of how often they occur.
    """
    node: Dict[str, Any] = {"@" + strip_ns(k): v for k, v in el.attrib.items()}
    children = list(el)

    text = "".join(el.itertext()) if not children else (el.text or "")
    if text.strip():
        node["#text"] = text.strip()

    for child in children:
        tag = strip_ns(child.tag)
        value = element_to_dict(child, cardinality)
        if cardinality.get(tag) == "many":
            node.setdefault(tag, []).append(value)
        elif tag in node:
            if not isinstance(node[tag], list):
                node[tag] = [node[tag]]
            node[tag].append(value)
        else:
            node[tag] = value
    return node

def parse_osis_file(path: str, cardinality: Dict[str, str] = OSIS_CARDINALITY) -> Dict[str, Any]:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Corpus file not found: {path}")
    try:
        root = ET.parse(path).getroot()
    except (ET.ParseError, OSError) as e:
        raise CorpusError(f"Could not read {path}: {e}") from e
    return {strip_ns(root.tag): element_to_dict(root, cardinality)}

def _as_list(value) -> List[Any]:
    if value is None:
        return []
    return value if isinstance(value, list) else [value]

def find_chapters(parsed: Dict[str, Any]) -> List[Dict[str, Any]]:
    """osis -> osisText -> div[type=book] -> chapter[]"""
    osis_text = (parsed.get("osis") or {}).get("osisText") or {}
    for div in _as_list(osis_text.get("div")):
        if div.get("chapter"):
            return div["chapter"]
    return []

def ref_number(osis_id: Optional[str], index: int) -> Optional[int]:
    # "Gen.1.2" -> index 1 is the chapter, index 2 the verse
    parts = (osis_id or "").split(".")
    if len(parts) <= index or not re.fullmatch(r"\d+", parts[index]):
        return None
    return int(parts[index])

def verse_records(book: Dict[str, Any], chapter_num: int, verse_num: int,
                  verse_node: Dict[str, Any]) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
    verse_id = f"{book['id_prefix']}-{chapter_num}-{verse_num}"

    tokens = [w for w in verse_node.get("w", []) if w.get("#text")]

    words, cleaned = [], []
    for pos, w in enumerate(tokens):
        raw = w["#text"]
        hebrew = normalize_surface(raw)
        lemma = parse_lemma(w.get("@lemma", ""))
        cleaned.append(hebrew)
        words.append({
            "id": w.get("@id") or f"{verse_id}-{pos}",
            "verse_id": verse_id,
            "position": pos,
            "hebrew": hebrew,
            "lemma": lemma["primary"],
            "lemma_prefix": lemma["prefix"],
            "morph": w.get("@morph") or None,
            "is_prefix_compound": "/" in raw,
        })

    verse = {
        "id": verse_id,
        "book_id": book["id"],
        "chapter": chapter_num,
        "verse": verse_num,
        "hebrew_text": " ".join(cleaned),
        "word_count": len(tokens),
    }
    return verse, words

def chapter_records(book: Dict[str, Any], chapter_node: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    chapter_num = ref_number(chapter_node.get("@osisID"), 1)
    if chapter_num is None:
        return None

    verses, words = [], []
    for v in chapter_node.get("verse", []):
        verse_num = ref_number(v.get("@osisID"), 2)
        if verse_num is None:
            continue
        verse, verse_words = verse_records(book, chapter_num, verse_num, v)
        verses.append(verse)
        words.extend(verse_words)
    return {"chapter": chapter_num, "verses": verses, "words": words}

def ingest_book(book: Dict[str, Any], xml_path: str) -> Dict[str, Any]:
    """
    Parse a whole book before anything is written, so a bad file never leaves
    partial chapters behind. Raises FileNotFoundError / CorpusError.
    """
    parsed = parse_osis_file(xml_path)
    chapter_nodes = find_chapters(parsed)
    if not chapter_nodes:
        raise CorpusError(f"No chapters found in {os.path.basename(xml_path)}")

    chapters = []
    for node in chapter_nodes:
        records = chapter_records(book, node)
        if records and records["verses"]:
            chapters.append(records)

    return {
        "book": {k: book[k] for k in BOOK_COLUMNS},
        "chapters": chapters,
    }
