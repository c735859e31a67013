# books.py
# Hebrew Bible books in English Bible order, keyed to the morphhb wlc file names.
from typing import Any, Dict, List, Optional

def _book(id, name, hebrew_name, abbreviation, chapter_count, order_index, id_prefix):
    return {
        "id": id,
        "name": name,
        "hebrew_name": hebrew_name,
        "abbreviation": abbreviation,
        "chapter_count": chapter_count,
        "testament": "OT",
        "order_index": order_index,
        "xml_file": f"{abbreviation}.xml",
        "id_prefix": id_prefix,
    }

ALL_BOOKS: List[Dict[str, Any]] = [
    # Torah
    _book("genesis", "Genesis", "בְּרֵאשִׁית", "Gen", 50, 1, "gen"),
    _book("exodus", "Exodus", "שְׁמוֹת", "Exod", 40, 2, "exod"),
    _book("leviticus", "Leviticus", "וַיִּקְרָא", "Lev", 27, 3, "lev"),
    _book("numbers", "Numbers", "בְּמִדְבַּר", "Num", 36, 4, "num"),
    _book("deuteronomy", "Deuteronomy", "דְּבָרִים", "Deut", 34, 5, "deut"),
    # Historical books
    _book("joshua", "Joshua", "יְהוֹשֻׁעַ", "Josh", 24, 6, "josh"),
    _book("judges", "Judges", "שׁוֹפְטִים", "Judg", 21, 7, "judg"),
    _book("ruth", "Ruth", "רוּת", "Ruth", 4, 8, "ruth"),
    _book("1-samuel", "1 Samuel", "שְׁמוּאֵל א", "1Sam", 31, 9, "1sam"),
    _book("2-samuel", "2 Samuel", "שְׁמוּאֵל ב", "2Sam", 24, 10, "2sam"),
    _book("1-kings", "1 Kings", "מְלָכִים א", "1Kgs", 22, 11, "1kgs"),
    _book("2-kings", "2 Kings", "מְלָכִים ב", "2Kgs", 25, 12, "2kgs"),
    _book("1-chronicles", "1 Chronicles", "דִּבְרֵי הַיָּמִים א", "1Chr", 29, 13, "1chr"),
    _book("2-chronicles", "2 Chronicles", "דִּבְרֵי הַיָּמִים ב", "2Chr", 36, 14, "2chr"),
    _book("ezra", "Ezra", "עֶזְרָא", "Ezra", 10, 15, "ezra"),
    _book("nehemiah", "Nehemiah", "נְחֶמְיָה", "Neh", 13, 16, "neh"),
    _book("esther", "Esther", "אֶסְתֵּר", "Esth", 10, 17, "esth"),
    # Poetry and wisdom
    _book("job", "Job", "אִיּוֹב", "Job", 42, 18, "job"),
    _book("psalms", "Psalms", "תְּהִלִּים", "Ps", 150, 19, "ps"),
    _book("proverbs", "Proverbs", "מִשְׁלֵי", "Prov", 31, 20, "prov"),
    _book("ecclesiastes", "Ecclesiastes", "קֹהֶלֶת", "Eccl", 12, 21, "eccl"),
    _book("song-of-solomon", "Song of Solomon", "שִׁיר הַשִּׁירִים", "Song", 8, 22, "song"),
    # Major prophets
    _book("isaiah", "Isaiah", "יְשַׁעְיָהוּ", "Isa", 66, 23, "isa"),
    _book("jeremiah", "Jeremiah", "יִרְמְיָהוּ", "Jer", 52, 24, "jer"),
    _book("lamentations", "Lamentations", "אֵיכָה", "Lam", 5, 25, "lam"),
    _book("ezekiel", "Ezekiel", "יְחֶזְקֵאל", "Ezek", 48, 26, "ezek"),
    _book("daniel", "Daniel", "דָּנִיֵּאל", "Dan", 12, 27, "dan"),
    # Minor prophets
    _book("hosea", "Hosea", "הוֹשֵׁעַ", "Hos", 14, 28, "hos"),
    _book("joel", "Joel", "יוֹאֵל", "Joel", 4, 29, "joel"),
    _book("amos", "Amos", "עָמוֹס", "Amos", 9, 30, "amos"),
    _book("obadiah", "Obadiah", "עֹבַדְיָה", "Obad", 1, 31, "obad"),
    _book("jonah", "Jonah", "יוֹנָה", "Jonah", 4, 32, "jonah"),
    _book("micah", "Micah", "מִיכָה", "Mic", 7, 33, "mic"),
    _book("nahum", "Nahum", "נַחוּם", "Nah", 3, 34, "nah"),
    _book("habakkuk", "Habakkuk", "חֲבַקּוּק", "Hab", 3, 35, "hab"),
    _book("zephaniah", "Zephaniah", "צְפַנְיָה", "Zeph", 3, 36, "zeph"),
    _book("haggai", "Haggai", "חַגַּי", "Hag", 2, 37, "hag"),
    _book("zechariah", "Zechariah", "זְכַרְיָה", "Zech", 14, 38, "zech"),
    _book("malachi", "Malachi", "מַלְאָכִי", "Mal", 4, 39, "mal"),
]

BOOKS_BY_ID = {b["id"]: b for b in ALL_BOOKS}

# OSIS book codes (Gen, 1Sam, ...) are accepted as aliases on the command line.
_ALIASES = {b["abbreviation"].lower(): b["id"] for b in ALL_BOOKS}

def find_book(name: str) -> Optional[Dict[str, Any]]:
    key = (name or "").strip().lower()
    if key in BOOKS_BY_ID:
        return BOOKS_BY_ID[key]
    if key in _ALIASES:
        return BOOKS_BY_ID[_ALIASES[key]]
    return None
