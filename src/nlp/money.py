"""Money span detection and normalization.

A money span is picked from the first MONEY entity of the sentence, else from a regex scan over the
raw input. The span is then normalized into a float value and an ISO currency code using two
patterns, tried in order:
    - symbol first: `$15`, `about € 20.50`, `~£3`,
    - number then word: `20 dollars`, `15 dólares`, `3 pesos`.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from src.nlp.annotations import EntityType, Sentence
from src.nlp.dictionaries import CURRENCY_WORD_PATTERN, currency_for_symbol, currency_for_word
from src.nlp.normalize import is_currency_symbol, parse_number


@dataclass(frozen=True)
class Amount:
    """A money span and whatever could be normalized from it."""

    text: str
    value: float | None = None
    currency: str | None = None


_HEDGE = r"(?:(?:about|around|approximately)\s+|~)?"

# A number must not run into another digit or a comma-digit group ("1234.50" is not "123",
# "1,2345" is malformed rather than "1").
_NUMBER = (
    r"(?P<number>[0-9]{1,3}(?:,[0-9]{3})*(?:\.[0-9]+)?|[0-9]+(?:\.[0-9]+)?)"
    r"(?![0-9]|,[0-9])"
)

# Any non-word, non-space character; currency-sign membership is checked in code.
_SYMBOL_FIRST = rf"{_HEDGE}(?P<symbol>[^\w\s])\s*{_NUMBER}"

_NUMBER_WORD = rf"{_NUMBER}\s*(?P<word>{CURRENCY_WORD_PATTERN})(?![^\W\d_])"

_SYMBOL_FIRST_RE = re.compile(_SYMBOL_FIRST, flags=re.IGNORECASE)
_NUMBER_WORD_RE = re.compile(_NUMBER_WORD, flags=re.IGNORECASE)


def _symbol_matches(text: str, *, anchored: bool) -> Iterator[re.Match[str]]:
    if anchored:
        match = _SYMBOL_FIRST_RE.match(text)
        candidates = [match] if match else []
    else:
        candidates = _SYMBOL_FIRST_RE.finditer(text)
    for match in candidates:
        if is_currency_symbol(match.group("symbol")):
            yield match


def normalize_amount(text: str) -> Amount | None:
    """Normalize a money span into value and currency.

    Returns:
        An `Amount` carrying the original span if either pattern matches at the start of the span;
        otherwise `None`. Inside a matched span an unknown sign/word leaves `currency` unset and a
        malformed number leaves `value` unset.
    """

    value = unicodedata.normalize("NFC", text).strip()

    symbol_match = next(_symbol_matches(value, anchored=True), None)
    if symbol_match is not None:
        return Amount(
            text=text,
            value=parse_number(symbol_match.group("number")),
            currency=currency_for_symbol(symbol_match.group("symbol")),
        )

    word_match = _NUMBER_WORD_RE.match(value)
    if word_match is not None:
        return Amount(
            text=text,
            value=parse_number(word_match.group("number")),
            currency=currency_for_word(word_match.group("word")),
        )

    return None


def find_money_in_text(text: str) -> str | None:
    """Find the first money-like span anywhere in `text`.

    Symbol-first spans win over number-then-word spans regardless of position. A word span is
    re-assembled as `<number> <word>` with a single space.
    """

    if not text:
        return None
    value = unicodedata.normalize("NFC", text)

    symbol_match = next(_symbol_matches(value, anchored=False), None)
    if symbol_match is not None:
        return symbol_match.group(0).strip()

    word_match = _NUMBER_WORD_RE.search(value)
    if word_match is not None:
        return f"{word_match.group('number')} {word_match.group('word')}"

    return None


SpanRule = Callable[[Sentence, str], str | None]


def span_from_entities(sentence: Sentence, _text: str) -> str | None:
    mention = sentence.first_mention(EntityType.MONEY)
    return mention.text if mention is not None else None


def span_from_text(_sentence: Sentence, text: str) -> str | None:
    # Scans the whole raw input, not only the first sentence.
    return find_money_in_text(text)


SPAN_RULES: tuple[SpanRule, ...] = (
    span_from_entities,
    span_from_text,
)


def extract_amount(sentence: Sentence, text: str) -> Amount | None:
    """Locate and normalize the amount of a payment sentence (`text` is the full raw input)."""

    span = None
    for rule in SPAN_RULES:
        span = rule(sentence, text)
        if span:
            break
    if not span:
        return None

    amount = normalize_amount(span)
    if amount is not None:
        return amount

    # The entity span did not look like money; fall back to any money-like span in the input.
    rescanned = find_money_in_text(text)
    if rescanned is not None:
        amount = normalize_amount(rescanned)
        if amount is not None:
            return amount

    return Amount(text=span)
