# morphology.py
# Decodes OSHB morphology codes ("HVqp3ms", "HR/Ncfsa") into readable descriptions.
# Code reference: https://hb.openscriptures.org/parsing/HebrewMorphologyCodes.html
from enum import Enum
from typing import Dict, List, Optional, Union

LANGUAGE = {"H": "Hebrew", "A": "Aramaic"}

class PartOfSpeech(Enum):
    ADJECTIVE = "A"
    CONJUNCTION = "C"
    ADVERB = "D"
    NOUN = "N"
    PRONOUN = "P"
    PREPOSITION = "R"
    SUFFIX = "S"
    PARTICLE = "T"
    VERB = "V"

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_code(cls, ch: str) -> Optional["PartOfSpeech"]:
        try:
            return cls(ch)
        except ValueError:
            return None

VERB_STEM_HEBREW = {
    "q": "Qal", "N": "Niphal", "p": "Piel", "P": "Pual", "h": "Hiphil",
    "H": "Hophal", "t": "Hithpael", "o": "Polel", "O": "Polal", "r": "Hithpolel",
    "m": "Poel", "M": "Poal", "k": "Palel", "K": "Pulal", "Q": "Qal Passive",
    "l": "Pilpel", "L": "Polpal", "f": "Hithpalpel", "D": "Nithpael", "j": "Pealal",
    "i": "Pilel", "u": "Hothpaal", "c": "Tiphil", "v": "Hishtaphel", "w": "Nithpalel",
    "y": "Nithpoel", "z": "Hithpoel",
}

VERB_STEM_ARAMAIC = {
    "q": "Peal", "Q": "Peil", "u": "Hithpeel", "p": "Pael", "P": "Ithpaal",
    "M": "Hithpaal", "a": "Aphel", "h": "Haphel", "s": "Saphel", "e": "Shaphel",
    "H": "Hophal", "i": "Ithpeel", "t": "Hishtaphel", "v": "Ishtaphel", "w": "Hithaphel",
}

VERB_TYPE = {
    "p": "Perfect", "q": "Sequential Perfect", "i": "Imperfect",
    "w": "Sequential Imperfect", "h": "Cohortative", "j": "Jussive",
    "v": "Imperative", "r": "Participle Active", "s": "Participle Passive",
    "a": "Infinitive Absolute", "c": "Infinitive Construct",
}

PERSON = {"1": "1st", "2": "2nd", "3": "3rd"}
GENDER = {"m": "masc.", "f": "fem.", "b": "both", "c": "common"}
NUMBER = {"s": "sing.", "p": "plur.", "d": "dual"}
STATE = {"a": "absolute", "c": "construct", "d": "determined"}
NOUN_TYPE = {"c": "common", "g": "gentilic", "p": "proper"}

PRONOUN_TYPE = {
    "d": "demonstrative", "f": "indefinite", "i": "interrogative",
    "p": "personal", "r": "relative",
}

PARTICLE_TYPE = {
    "d": "definite article", "a": "accusative", "e": "exhortation",
    "i": "interrogative", "j": "interjection", "m": "demonstrative",
    "n": "negative", "o": "direct object", "r": "relative",
}

# Placeholder slot, resolved to the stem table of the code's language in _slots().
VERB_STEM = "stem"
STEM_TABLES = {"H": VERB_STEM_HEBREW, "A": VERB_STEM_ARAMAIC}

Slot = Union[str, Dict[str, str]]

# Ordered field slots per part of speech. A slot whose table lacks the next
# character is skipped without consuming it.
FIELD_GRAMMAR: Dict[PartOfSpeech, List[Slot]] = {
    PartOfSpeech.VERB: [VERB_STEM, VERB_TYPE, PERSON, GENDER, NUMBER],
    PartOfSpeech.NOUN: [NOUN_TYPE, GENDER, NUMBER, STATE],
    # Adjectives carry no type slot here; codes such as "HAamsa" decode only partially.
    PartOfSpeech.ADJECTIVE: [GENDER, NUMBER, STATE],
    PartOfSpeech.PRONOUN: [PRONOUN_TYPE, PERSON, GENDER, NUMBER],
    PartOfSpeech.PARTICLE: [PARTICLE_TYPE],
    PartOfSpeech.SUFFIX: [PERSON, GENDER, NUMBER],
    PartOfSpeech.CONJUNCTION: [],
    PartOfSpeech.ADVERB: [],
    PartOfSpeech.PREPOSITION: [],
}

def _slots(pos: PartOfSpeech, language: str) -> List[Dict[str, str]]:
    stems = STEM_TABLES.get(language, VERB_STEM_HEBREW)
    return [stems if slot == VERB_STEM else slot for slot in FIELD_GRAMMAR[pos]]

def decode_fields(pos: PartOfSpeech, language: str, fields: str) -> List[str]:
    """Greedily match `fields` against the slot tables of `pos`, in order."""
    out = []
    idx = 0
    for table in _slots(pos, language):
        if idx < len(fields) and fields[idx] in table:
            out.append(table[fields[idx]])
            idx += 1
    return out

def decode_single(code: str, language: Optional[str] = None) -> str:
    """
    Decode one morphology segment.

    Without `language` the first character is read as the language letter
    ("HVqp3ms"); with it the segment starts at the part of speech ("Ncfsa"),
    which is how the later pieces of a compound code are written.
    Unknown language or part-of-speech letters return `code` unchanged.
    """
    if not code:
        return code or ""
    body = code
    if language is None:
        language, body = code[0], code[1:]
    if language not in LANGUAGE or not body:
        return code

    pos = PartOfSpeech.from_code(body[0])
    if pos is None:
        return code

    return ", ".join([pos.label] + decode_fields(pos, language, body[1:]))

def decode_morphology(morph: Optional[str]) -> str:
    """
    Decode a full OSHB morphology attribute.
      "HVqp3ms"  -> "Verb, Qal, Perfect, 3rd, masc., sing."
      "HR/Ncfsa" -> "Preposition + Noun, common, fem., sing., absolute"
    The language letter leads the whole code and applies to every "/" segment.
    Anything malformed is returned as given.
    """
    if not morph:
        return ""

    language = morph[0]
    if language not in LANGUAGE:
        return morph

    decoded = []
    for segment in morph[1:].split("/"):
        pos = PartOfSpeech.from_code(segment[:1]) if segment else None
        if pos is None:
            return morph
        decoded.append(decode_single(segment, language))
    return " + ".join(decoded)
