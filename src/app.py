"""Application composition root.

This module wires together configuration and the payment parser for the bot runtime.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.config.settings import Settings
from src.nlp.parser import PaymentParser
from src.nlp.spacy_annotator import SpacyAnnotator


@dataclass(frozen=True)
class App:
    """Shared application dependencies for handlers."""

    settings: Settings
    parser: PaymentParser


def create_app(settings: Settings) -> App:
    """Create the application container.

    Note:
        Loading the spaCy model is slow; do it once at startup and share the parser.
    """

    annotator = SpacyAnnotator.load(settings.spacy_model)
    parser = PaymentParser(annotator, prepositions=settings.recipient_prepositions)
    return App(settings=settings, parser=parser)
