"""English/Spanish vocabularies for intents, currencies and recipient prepositions.

These mappings drive the rules in `intent`, `money` and `recipient` and should stay small and
deterministic.
"""

from __future__ import annotations

from src.nlp.normalize import strip_accents
from src.nlp.schema import PaymentIntent

INTENT_LEXICON: dict[str, PaymentIntent] = {
    "pay": PaymentIntent.pay,
    "send": PaymentIntent.send,
    "transfer": PaymentIntent.transfer,
    # Spanish
    "pagar": PaymentIntent.pay,
    "enviar": PaymentIntent.send,
    "transferir": PaymentIntent.transfer,
}

# Raw-text keyword scan order: Spanish verbs first, then English.
INTENT_KEYWORD_ORDER: tuple[str, ...] = ("enviar", "transferir", "pagar", "send", "transfer", "pay")

RECIPIENT_PREPOSITIONS: frozenset[str] = frozenset({"to", "a", "para"})

# Leading prepositions removed from a recipient phrase (at most one, first match wins).
LEADING_PREPOSITIONS: tuple[str, ...] = ("to ", "a ", "para ")

CURRENCY_SYMBOL_CODES: dict[str, str] = {
    "$": "USD",
    "€": "EUR",
    "£": "GBP",
    "¥": "JPY",
    "₹": "INR",
    "₩": "KRW",
    "₽": "RUB",
}

# Alternation used by the number-then-word money pattern. Longer forms come first.
CURRENCY_WORD_PATTERN = "|".join(
    (
        r"dollars?",
        r"d[oó]lar(?:es)?",
        r"bucks",
        r"usd",
        r"euros?",
        r"eur",
        r"pounds?",
        r"libras?",
        r"gbp",
        r"yen",
        r"jpy",
        r"rupees?",
        r"rupias?",
        r"inr",
        r"pesos?",
        r"mxn",
        r"cop",
        r"ars",
        r"clp",
        r"pen",
        r"sol(?:es)?",
        r"cad",
        r"aud",
        r"chf",
        r"francs?",
        r"real(?:es)?",
        r"brl",
    )
)

CURRENCY_WORD_CODES: dict[str, str] = {
    "bucks": "USD",
    "usd": "USD",
    "eur": "EUR",
    "gbp": "GBP",
    "yen": "JPY",
    "jpy": "JPY",
    "inr": "INR",
    "chf": "CHF",
    "mxn": "MXN",
    "cop": "COP",
    "ars": "ARS",
    "clp": "CLP",
    "pen": "PEN",
    "brl": "BRL",
    "cad": "CAD",
    "aud": "AUD",
}

CURRENCY_WORD_PREFIXES: tuple[tuple[str, str], ...] = (
    ("dollar", "USD"),
    ("dolar", "USD"),
    ("euro", "EUR"),
    ("pound", "GBP"),
    ("libra", "GBP"),
    ("rupee", "INR"),
    ("rupia", "INR"),
    ("franc", "CHF"),
    # Generic "pesos" is ambiguous across countries; MXN is the default.
    ("peso", "MXN"),
    ("sol", "PEN"),
    ("real", "BRL"),
)


def lookup_intent(word: str | None) -> PaymentIntent | None:
    """Map a lemma or surface form (any case) to its canonical intent."""

    if not word:
        return None
    return INTENT_LEXICON.get(word.lower())


def currency_for_symbol(symbol: str) -> str | None:
    """Map a currency sign to its ISO code (`None` for signs outside the table)."""

    return CURRENCY_SYMBOL_CODES.get(symbol)


def currency_for_word(word: str) -> str | None:
    """Map a currency word in EN/ES to its ISO code, ignoring case and accents."""

    base = strip_accents(word).lower()
    if base in CURRENCY_WORD_CODES:
        return CURRENCY_WORD_CODES[base]
    for prefix, code in CURRENCY_WORD_PREFIXES:
        if base.startswith(prefix):
            return code
    return None
