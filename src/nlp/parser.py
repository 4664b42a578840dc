"""Payment sentence parser orchestration.

`PaymentParser.parse` never raises: blank input short-circuits, and a failure inside one extractor
only leaves that extractor's fields unset.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from src.nlp.annotations import Annotator, Sentence
from src.nlp.dictionaries import RECIPIENT_PREPOSITIONS
from src.nlp.intent import extract_intent
from src.nlp.money import Amount, extract_amount
from src.nlp.recipient import extract_recipient
from src.nlp.schema import ParseResult, PaymentIntent

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _contained(name: str, func: Callable[[], T]) -> T | None:
    """Run one extraction step; any failure degrades it to `None`."""

    try:
        return func()
    except Exception:  # noqa: BLE001 - one bad field must not abort the whole parse
        logger.exception("extraction failed step=%s", name)
        return None


class PaymentParser:
    """Extract intent, amount and recipient from free text.

    The annotator is injected so one heavyweight NLP pipeline can be shared by every caller (and
    replaced by a fake in tests). The parser itself keeps no per-call state.
    """

    def __init__(
            self,
            annotator: Annotator,
            *,
            prepositions: Iterable[str] = RECIPIENT_PREPOSITIONS,
    ) -> None:
        self._annotator = annotator
        self._prepositions = frozenset(p.lower() for p in prepositions)

    def parse(self, text: str | None) -> ParseResult:
        """Parse the first sentence of `text` into a `ParseResult`."""

        if text is None or not text.strip():
            return ParseResult()

        sentences = _contained("annotate", lambda: self._annotator.annotate(text))
        if not sentences:
            return ParseResult()

        return self._parse_sentence(sentences[0], text)

    def _parse_sentence(self, sentence: Sentence, text: str) -> ParseResult:
        intent: PaymentIntent | None = _contained("intent", lambda: extract_intent(sentence, text))
        amount: Amount | None = _contained("amount", lambda: extract_amount(sentence, text))
        recipient: str | None = _contained(
            "recipient",
            lambda: extract_recipient(sentence, prepositions=self._prepositions),
        )
        graph = sentence.graph
        debug = _contained("render", graph.render) if graph is not None else None

        logger.debug(
            "parsed intent=%s amount_text=%r amount_value=%s currency=%s recipient=%r",
            intent,
            amount.text if amount else None,
            amount.value if amount else None,
            amount.currency if amount else None,
            recipient,
        )

        return ParseResult(
            intent=intent,
            amount_text=amount.text if amount else None,
            amount_value=amount.value if amount else None,
            currency=amount.currency if amount else None,
            recipient=recipient,
            debug_dependencies=debug,
        )


def parse_payment(text: str | None, *, annotator: Annotator) -> ParseResult:
    """Parse text with a one-off parser (convenience wrapper)."""

    return PaymentParser(annotator).parse(text)
