"""Regex escaping and whole-word matching.

A "word" is a run of ASCII letters, digits and underscore. A term matches
when it sits between ``\\b`` boundaries of that class, case-insensitively,
so "cat" never matches inside "category" or "concatenate".
"""

from __future__ import annotations

import re
from functools import lru_cache

_FLAGS = re.IGNORECASE | re.ASCII


def escape_regex(text: str) -> str:
    """Escape ``text`` for literal use inside a regular expression."""
    return re.escape(text)


@lru_cache(maxsize=1024)
def word_pattern(term: str) -> re.Pattern[str]:
    """Compiled case-insensitive whole-word pattern for a literal term."""
    return re.compile(r"\b" + escape_regex(term) + r"\b", _FLAGS)


def contains_word(text: str, term: str) -> bool:
    return word_pattern(term).search(text) is not None


def find_words(text: str, terms: list[str] | tuple[str, ...]) -> list[str]:
    """Terms that occur as whole words in ``text``, in the order given."""
    return [term for term in terms if contains_word(text, term)]


def replace_word(text: str, term: str, replacement: str) -> str:
    """Replace every whole-word occurrence of ``term`` (any case)."""
    return word_pattern(term).sub(lambda _m: replacement, text)
