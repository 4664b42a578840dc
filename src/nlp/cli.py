"""Command-line diagnostics: parse sentences and print one JSON object per input.

Usage:
    python -m src.nlp.cli "send $10 to the coffee shop." --debug
"""

from __future__ import annotations

import argparse
import json
import os

from dotenv import load_dotenv

from src.config.logging import configure_logging
from src.nlp.parser import PaymentParser
from src.nlp.schema import ParseResult, response_payload
from src.nlp.spacy_annotator import SpacyAnnotator

DEFAULT_SPACY_MODEL = "en_core_web_sm"


def render_result(result: ParseResult, *, debug: bool) -> str:
    """Serialize a result as a single JSON line."""

    payload = response_payload(result)
    if debug:
        payload["debugDependencies"] = result.debug_dependencies
    return json.dumps(payload, ensure_ascii=False)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""

    load_dotenv(".env")

    parser = argparse.ArgumentParser(description="Extract payment intent, amount and recipient.")
    parser.add_argument("texts", nargs="+", help="Sentences to parse (one result per argument).")
    parser.add_argument(
        "--model",
        default=os.getenv("SPACY_MODEL") or DEFAULT_SPACY_MODEL,
        help="spaCy model package or path (default: $SPACY_MODEL or en_core_web_sm).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Include the dependency graph rendering in the output.",
    )
    args = parser.parse_args(argv)

    configure_logging()
    payment_parser = PaymentParser(SpacyAnnotator.load(args.model))
    for text in args.texts:
        print(render_result(payment_parser.parse(text), debug=args.debug))


if __name__ == "__main__":
    main()
