"""
English inflection helpers for permission names.

snake():  SuperUser -> super user (with a ' ' delimiter)
plural(): super user -> super users
"""

import re
from typing import Dict, List, Tuple

_LOWER_WORD = re.compile(r'^[a-z]+$')
_WORD_START = re.compile(r'(^|\s)(\S)')
_WHITESPACE = re.compile(r'\s+')
_BEFORE_UPPER = re.compile(r'(.)(?=[A-Z])')
_TRAILING_WORD = re.compile(r'[A-Za-z0-9]+$')

UNCOUNTABLE = frozenset({
    "audio", "bison", "chassis", "compensation", "coreopsis", "data", "deer",
    "education", "emoji", "equipment", "evidence", "feedback", "firmware",
    "fish", "furniture", "gold", "hardware", "information", "jedi", "kin",
    "knowledge", "love", "metadata", "money", "moose", "news", "nutrition",
    "offspring", "plankton", "pokemon", "police", "rain", "recommended",
    "related", "rice", "series", "sheep", "software", "species", "swine",
    "traffic", "wheat",
})

IRREGULAR: Dict[str, str] = {
    "atlas": "atlases",
    "child": "children",
    "cookie": "cookies",
    "criterion": "criteria",
    "foot": "feet",
    "goose": "geese",
    "man": "men",
    "move": "moves",
    "mouse": "mice",
    "ox": "oxen",
    "person": "people",
    "tooth": "teeth",
    "woman": "women",
}

# First match wins
PLURAL_RULES: List[Tuple[re.Pattern, str]] = [
    (re.compile(r'(quiz)$', re.I), r'\1zes'),
    (re.compile(r'(matr|vert|ind)(ix|ex)$', re.I), r'\1ices'),
    (re.compile(r'(alias|status|campus|bus|virus)$', re.I), r'\1es'),
    (re.compile(r'(x|ch|ss|sh|z)$', re.I), r'\1es'),
    (re.compile(r'([^aeiouy]|qu)y$', re.I), r'\1ies'),
    (re.compile(r'(hive)$', re.I), r'\1s'),
    (re.compile(r'([^f])fe$', re.I), r'\1ves'),
    (re.compile(r'([lr])f$', re.I), r'\1ves'),
    (re.compile(r'sis$', re.I), 'ses'),
    (re.compile(r'([ti])um$', re.I), r'\1a'),
    (re.compile(r'(buffal|tomat|potat|her|ech)o$', re.I), r'\1oes'),
    (re.compile(r's$', re.I), 's'),
    (re.compile(r'$'), 's'),
]


def _ucwords(value: str) -> str:
    return _WORD_START.sub(lambda m: m.group(1) + m.group(2).upper(), value)


def snake(value: str, delimiter: str = "_") -> str:
    """
    Convert CamelCase / camelCase to lower-cased words joined by delimiter.

    Already lower-cased single words are returned as is; spaced words are
    re-joined with the delimiter ("view any" -> "view-any" for '-').
    """
    if _LOWER_WORD.match(value):
        return value

    value = _WHITESPACE.sub('', _ucwords(value))
    return _BEFORE_UPPER.sub(lambda m: m.group(1) + delimiter, value).lower()


def _match_case(value: str, comparison: str) -> str:
    if comparison.isupper() and len(comparison) > 1:
        return value.upper()
    if comparison[:1].isupper():
        return value[:1].upper() + value[1:]
    return value


def pluralize_word(word: str) -> str:
    """Pluralize a single English word, keeping its case"""
    lower = word.lower()

    if lower in UNCOUNTABLE:
        return word

    if lower in IRREGULAR:
        return _match_case(IRREGULAR[lower], word)

    for pattern, replacement in PLURAL_RULES:
        if pattern.search(lower):
            return _match_case(pattern.sub(replacement, lower, count=1), word)

    return word


def plural(value: str) -> str:
    """Pluralize the trailing word of a phrase (super user -> super users)"""
    match = _TRAILING_WORD.search(value)
    if not match:
        return value
    return value[:match.start()] + pluralize_word(match.group(0))
