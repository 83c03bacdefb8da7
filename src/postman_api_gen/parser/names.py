"""Name sanitization for collection folders, requests and fields.

Every name coming from a collection goes through the same pipeline before it
is used as a key in the canonical tree: Cyrillic is transliterated, the result
is camel-cased on non-alphanumeric separators, and names that cannot be used
as a JavaScript binding get an escape prefix.
"""

import re

ESCAPE_PREFIX = "_"

RESERVED_WORDS = frozenset({
    "arguments", "await", "break", "case", "catch", "class", "const",
    "continue", "debugger", "default", "delete", "do", "else", "enum",
    "eval", "export", "extends", "false", "finally", "for", "function",
    "if", "implements", "import", "in", "instanceof", "interface", "let",
    "new", "null", "package", "private", "protected", "public", "return",
    "static", "super", "switch", "this", "throw", "true", "try", "typeof",
    "undefined", "var", "void", "while", "with", "yield",
})

CYRILLIC_TO_LATIN = {
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "yo",
    "ж": "zh", "з": "z", "и": "i", "й": "y", "к": "k", "л": "l", "м": "m",
    "н": "n", "о": "o", "п": "p", "р": "r", "с": "s", "т": "t", "у": "u",
    "ф": "f", "х": "kh", "ц": "ts", "ч": "ch", "ш": "sh", "щ": "shch",
    "ъ": "", "ы": "y", "ь": "", "э": "e", "ю": "yu", "я": "ya",
    "є": "ye", "і": "i", "ї": "yi", "ґ": "g",
}

_SEPARATOR_RE = re.compile(r"[\W_]+")
_IDENTIFIER_RE = re.compile(r"[^\W\d][\w$]*|\$[\w$]*")


def transliterate_cyrillic(text: str) -> str:
    """Replace Cyrillic letters with their Latin phonetic equivalents.

    Case is carried over to the first Latin letter. Other scripts are left
    untouched.
    """
    result = []
    for char in text:
        latin = CYRILLIC_TO_LATIN.get(char.lower())
        if latin is None:
            result.append(char)
        elif char.isupper():
            result.append(latin.capitalize())
        else:
            result.append(latin)
    return "".join(result)


def _recase_first(word: str, convert) -> str:
    # "İ".lower() is two characters; keep such letters as they are
    first = convert(word[0])
    if len(first) != 1:
        first = word[0]
    return first + word[1:]


def to_camel(text: str) -> str:
    """Camel-case ``text`` on runs of non-word characters and underscores.

    ``"Get user list"`` becomes ``"getUserList"``. Characters inside a word
    keep their case, so an already camel-cased name comes back unchanged.
    """
    words = [w for w in _SEPARATOR_RE.split(text) if w]
    if not words:
        return ""
    head, *tail = words
    return _recase_first(head, str.lower) + "".join(_recase_first(w, str.upper) for w in tail)


def is_identifier(name: str) -> bool:
    """Whether ``name`` can be used verbatim as a JavaScript property key."""
    return bool(_IDENTIFIER_RE.fullmatch(name))


def needs_escape(name: str) -> bool:
    return name in RESERVED_WORDS or name[:1].isdigit()


def escape_reserved(name: str) -> str:
    """Prefix ``name`` with the escape marker when it is not a usable binding."""
    if needs_escape(name):
        return ESCAPE_PREFIX + name
    return name


def public_name(binding: str) -> str:
    """The user-facing name of a binding.

    Reserved words get their escape prefix back off (they are valid as
    property and export names). Digit-leading names keep it.
    """
    if binding.startswith(ESCAPE_PREFIX):
        unescaped = binding[len(ESCAPE_PREFIX):]
        if unescaped in RESERVED_WORDS:
            return unescaped
    return binding


def sanitize_name(name: str) -> str:
    """Turn a raw collection name into a canonical tree key."""
    return escape_reserved(to_camel(transliterate_cyrillic(name)))
