"""Small string helpers shared by the extractors.

Locale matching (accents, word boundaries, punctuation) is the most hand-tuned part of the parser,
so every rule lives here as a pure function.
"""

from __future__ import annotations

import re
import string
import unicodedata

# Currency signs the money patterns always accept; any other Unicode `Sc` character is accepted too.
KNOWN_CURRENCY_SYMBOLS = "€£$¥₹₩₽₺₴₦₫"

# A "letter" is any Unicode word character that is not a digit or underscore.
_LETTER = r"[^\W\d_]"


def strip_accents(value: str) -> str:
    """Remove combining diacritics (`dólares` -> `dolares`)."""

    decomposed = unicodedata.normalize("NFD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def contains_word(haystack: str, needle: str) -> bool:
    """Whether `needle` occurs in `haystack` as a whole word (case-insensitive).

    A match must not touch another letter on either side, accented Latin letters included, so
    `pay` is found in `pay me` but not in `payment` or `épay`.
    """

    pattern = rf"(?<!{_LETTER}){re.escape(needle)}(?!{_LETTER})"
    return re.search(pattern, haystack, flags=re.IGNORECASE) is not None


def _is_punct_char(ch: str) -> bool:
    return ch in string.punctuation or unicodedata.category(ch).startswith("P")


def is_punctuation(word: str) -> bool:
    """Whether a token consists only of punctuation (`.`, `?!`, `¿`, `@`)."""

    return bool(word) and all(_is_punct_char(ch) for ch in word)


def is_currency_symbol(ch: str) -> bool:
    """Whether a single character is a currency sign."""

    return len(ch) == 1 and (ch in KNOWN_CURRENCY_SYMBOLS or unicodedata.category(ch) == "Sc")


def _is_trimmable(ch: str) -> bool:
    return ch.isspace() or _is_punct_char(ch)


def trim_punctuation(value: str, *, leading: bool = True) -> str:
    """Strip trailing (and optionally leading) punctuation and whitespace."""

    end = len(value)
    while end > 0 and _is_trimmable(value[end - 1]):
        end -= 1
    start = 0
    if leading:
        while start < end and _is_trimmable(value[start]):
            start += 1
    return value[start:end]


def parse_number(raw: str) -> float | None:
    """Parse a dot-decimal number with optional comma thousands separators.

    Returns:
        The float value, or `None` if the text is not a number.
    """

    try:
        return float(raw.replace(",", ""))
    except ValueError:
        return None
