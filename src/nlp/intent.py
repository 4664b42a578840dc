"""Payment intent detection.

Rules are tried in a fixed order and the first hit wins:
    1) the lemma of the dependency root,
    2) the lemma of the first verb in the sentence,
    3) a whole-word keyword scan over the raw input (Spanish verbs first).
"""

from __future__ import annotations

from collections.abc import Callable

from src.nlp.annotations import Sentence
from src.nlp.dictionaries import INTENT_KEYWORD_ORDER, INTENT_LEXICON, lookup_intent
from src.nlp.normalize import contains_word
from src.nlp.schema import PaymentIntent

IntentRule = Callable[[Sentence, str], PaymentIntent | None]


def intent_from_root(sentence: Sentence, _text: str) -> PaymentIntent | None:
    if sentence.graph is None:
        return None
    root = sentence.graph.root_token()
    if root is None:
        return None
    return lookup_intent(root.lemma)


def intent_from_first_verb(sentence: Sentence, _text: str) -> PaymentIntent | None:
    """Scan verbs left to right; the first verb whose lemma is in the lexicon wins."""

    for tok in sentence.tokens:
        if not tok.is_verb:
            continue
        intent = lookup_intent(tok.lemma)
        if intent is not None:
            return intent
    return None


def intent_from_keywords(_sentence: Sentence, text: str) -> PaymentIntent | None:
    low = text.lower()
    for keyword in INTENT_KEYWORD_ORDER:
        if contains_word(low, keyword):
            return INTENT_LEXICON[keyword]
    return None


INTENT_RULES: tuple[IntentRule, ...] = (
    intent_from_root,
    intent_from_first_verb,
    intent_from_keywords,
)


def extract_intent(sentence: Sentence, text: str) -> PaymentIntent | None:
    """Detect the canonical intent of `sentence` (`text` is the full raw input)."""

    for rule in INTENT_RULES:
        intent = rule(sentence, text)
        if intent is not None:
            return intent
    return None
