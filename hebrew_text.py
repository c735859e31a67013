# hebrew_text.py
# Surface-text cleanup and lemma splitting for OSHB (morphhb) word tokens.
import re
from typing import Dict, Optional

# Taamim (cantillation accents). Nikkud and meteg sit above this block and are kept.
CANTILLATION_RE = re.compile(r"[\u0591-\u05AF]")

def strip_cantillation(text: Optional[str]) -> str:
    """Drop cantillation marks (U+0591–U+05AF), keep vowel points and letters."""
    return CANTILLATION_RE.sub("", text or "")

def remove_slashes(text: Optional[str]) -> str:
    """Remove OSHB morpheme separators, e.g. בְּ/רֵאשִׁית -> בְּרֵאשִׁית."""
    return (text or "").replace("/", "")

def normalize_surface(text: Optional[str]) -> str:
    return remove_slashes(strip_cantillation(text))

def _strongs_token(segment: str) -> Optional[str]:
    # "1254 a" -> "1254"; homograph letters after the space are dropped
    parts = segment.strip().split()
    if not parts:
        return None
    num = parts[0]
    if not num[0].isdigit():
        return None
    return num

def parse_lemma(lemma: Optional[str]) -> Dict[str, Optional[str]]:
    """
    Split an OSHB lemma attribute into the head word's Strong's id and its prefix chain.
      "7225"    -> {"primary": "H7225", "prefix": None}
      "b/7225"  -> {"primary": "H7225", "prefix": "b"}
      "c/d/776" -> {"primary": "H776",  "prefix": "c/d"}
    Prefix particles come first, the head word's number is always the last segment.
    """
    if not lemma:
        return {"primary": None, "prefix": None}

    parts = lemma.split("/")
    num = _strongs_token(parts[-1])
    primary = f"H{num}" if num else None

    if len(parts) == 1:
        return {"primary": primary, "prefix": None}

    prefix = "/".join(parts[:-1])
    return {"primary": primary, "prefix": prefix or None}
