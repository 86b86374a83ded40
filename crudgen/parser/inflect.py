"""Identifier casing and English pluralisation.

Mirrors the handful of ``Illuminate\\Support\\Str`` helpers the generated
code relies on (``studly``, ``camel``, ``snake``, ``kebab``, ``title`` and
``plural``).  Pluralisation covers the regular English rules plus a short
irregular table; anything more exotic is best-effort.
"""

from __future__ import annotations

import re


# ---------------------------------------------------------------------------
# Casing
# ---------------------------------------------------------------------------

def studly(value: str) -> str:
    """Convert ``blog_post``, ``blog-post`` or ``blogPost`` to ``BlogPost``."""
    parts = re.split(r"[-_\s]+", value.strip())
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


def camel(value: str) -> str:
    """Convert ``blog_post`` or ``BlogPost`` to ``blogPost``."""
    pascal = studly(value)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


def snake(value: str, delimiter: str = "_") -> str:
    """Convert ``BlogPost`` or ``blog-post`` to ``blog_post``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", rf"\1{delimiter}\2", value.strip())
    s2 = re.sub(r"([a-z0-9])([A-Z])", rf"\1{delimiter}\2", s1)
    return re.sub(r"[-_\s]+", delimiter, s2).lower()


def kebab(value: str) -> str:
    """Convert ``BlogPost`` to ``blog-post``."""
    return snake(value, delimiter="-")


def title(value: str) -> str:
    """Capitalise every whitespace-separated word: ``due date`` -> ``Due Date``."""
    return " ".join(word.capitalize() for word in value.split(" "))


# ---------------------------------------------------------------------------
# Pluralisation
# ---------------------------------------------------------------------------

_UNCOUNTABLE: frozenset[str] = frozenset({
    "audio", "data", "equipment", "feedback", "information", "media",
    "metadata", "money", "news", "rice", "series", "sheep", "species",
    "staff", "software", "fish", "deer", "police",
})

_IRREGULAR: dict[str, str] = {
    "person": "people",
    "man": "men",
    "woman": "women",
    "child": "children",
    "tooth": "teeth",
    "foot": "feet",
    "mouse": "mice",
    "goose": "geese",
    "ox": "oxen",
    "leaf": "leaves",
    "criterion": "criteria",
    "analysis": "analyses",
}

# Ordered: the first matching rule wins.
_PLURAL_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"(quiz)$"), r"\1zes"),
    (re.compile(r"(matr|vert|ind)(?:ix|ex)$"), r"\1ices"),
    (re.compile(r"(x|ch|ss|sh|s|z)$"), r"\1es"),
    (re.compile(r"([^aeiouy]|qu)y$"), r"\1ies"),
    (re.compile(r"([^f])fe$"), r"\1ves"),
    (re.compile(r"([lr])f$"), r"\1ves"),
    (re.compile(r"(tomat|potat|ech|her|vet)o$"), r"\1oes"),
]

# Last "word" of an identifier: a capitalised chunk, an all-caps run or a
# lowercase run, so that only the tail of ``BlogPost``/``blog_post`` inflects.
_LAST_WORD = re.compile(r"([A-Z]?[a-z]+|[A-Z]+|[0-9]+)$")


def _plural_word(word: str) -> str:
    lower = word.lower()
    if lower in _UNCOUNTABLE:
        return lower
    if lower in _IRREGULAR:
        return _IRREGULAR[lower]
    for pattern, replacement in _PLURAL_RULES:
        if pattern.search(lower):
            return pattern.sub(replacement, lower)
    return lower + "s"


def _match_case(value: str, reference: str) -> str:
    if len(reference) > 1 and reference.isupper():
        return value.upper()
    if reference[:1].isupper():
        return value[:1].upper() + value[1:]
    return value


def plural(value: str) -> str:
    """Pluralise the last word of *value*, keeping its casing.

    Examples::

        plural("Category")  -> "Categories"
        plural("BlogPost")  -> "BlogPosts"
        plural("blog_post") -> "blog_posts"
        plural("Person")    -> "People"
    """
    match = _LAST_WORD.search(value)
    if match is None:
        return value
    word = match.group(1)
    if word.isdigit():
        return value
    return value[: match.start()] + _match_case(_plural_word(word), word)
