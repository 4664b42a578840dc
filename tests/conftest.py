"""Pytest configuration.

The repository uses a flat `src/` layout. This conftest ensures tests can import from the `src.*`
namespace when running `pytest` locally, and provides hand-built annotations so no test needs a
spaCy model.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

# Ensure `import src...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from src.nlp.annotations import DependencyGraph, Edge, Mention, Sentence, Token  # noqa: E402

TaggedWord = tuple[str, str, str]
SentenceBuilder = Callable[..., Sentence]


def build_sentence(
        text: str,
        tagged: Iterable[TaggedWord],
        *,
        mentions: Iterable[tuple[str, str]] = (),
        root: int | None = None,
        edges: Iterable[tuple[int, int, str]] = (),
) -> Sentence:
    """Build a `Sentence` from `(word, lemma, pos)` triples; a graph is attached if `root` is set."""

    tokens = tuple(
        Token(index=i, word=word, lemma=lemma, pos=pos) for i, (word, lemma, pos) in enumerate(tagged)
    )
    graph = None
    if root is not None:
        graph = DependencyGraph(
            tokens=tokens,
            edges=tuple(Edge(governor=g, dependent=d, relation=r) for g, d, r in edges),
            root=root,
        )
    return Sentence(
        text=text,
        tokens=tokens,
        mentions=tuple(Mention(text=t, entity_type=e) for t, e in mentions),
        graph=graph,
    )


class FakeAnnotator:
    """Annotator returning canned sentences; unknown text yields no sentences."""

    def __init__(self, sentences: dict[str, list[Sentence]]) -> None:
        self._sentences = sentences
        self.calls: list[str] = []

    def annotate(self, text: str) -> list[Sentence]:
        self.calls.append(text)
        return list(self._sentences.get(text, []))


GABY = "could you please send  $15  to gaby?"
JOHN = "send 20 dollars to John."
ALEX = "transfer €1,234.50 to @alex99"
JUAN = "enviar 20 euros a Juan."
COFFEE = "send $10 to the coffee shop."


def _canned_sentences() -> dict[str, Sentence]:
    return {
        # No MONEY entity: the amount comes from the raw-text scan.
        GABY: build_sentence(
            GABY,
            [
                ("could", "could", "MD"),
                ("you", "you", "PRP"),
                ("please", "please", "UH"),
                ("send", "send", "VB"),
                ("$", "$", "$"),
                ("15", "15", "CD"),
                ("to", "to", "TO"),
                ("gaby", "gaby", "NN"),
                ("?", "?", "."),
            ],
            root=3,
            edges=[
                (3, 0, "aux"),
                (3, 1, "nsubj"),
                (3, 2, "discourse"),
                (3, 4, "dobj"),
                (4, 5, "nummod"),
                (3, 7, "nmod:to"),
                (7, 6, "case"),
                (3, 8, "punct"),
            ],
        ),
        JOHN: build_sentence(
            JOHN,
            [
                ("send", "send", "VB"),
                ("20", "20", "CD"),
                ("dollars", "dollar", "NNS"),
                ("to", "to", "TO"),
                ("John", "John", "NNP"),
                (".", ".", "."),
            ],
            mentions=[("20 dollars", "MONEY"), ("John", "PERSON")],
            root=0,
            edges=[
                (0, 2, "dobj"),
                (2, 1, "nummod"),
                (0, 4, "nmod:to"),
                (4, 3, "case"),
                (0, 5, "punct"),
            ],
        ),
        # No graph and no entities: first-verb intent, regex amount, preposition-scan recipient.
        ALEX: build_sentence(
            ALEX,
            [
                ("transfer", "transfer", "VB"),
                ("€", "€", "$"),
                ("1,234.50", "1,234.50", "CD"),
                ("to", "to", "TO"),
                ("@alex99", "@alex99", "NN"),
            ],
        ),
        # An English model misreads the Spanish verb: the keyword scan has to find it.
        JUAN: build_sentence(
            JUAN,
            [
                ("enviar", "enviar", "FW"),
                ("20", "20", "CD"),
                ("euros", "euro", "NNS"),
                ("a", "a", "DT"),
                ("Juan", "Juan", "NNP"),
                (".", ".", "."),
            ],
            mentions=[("20 euros", "MONEY"), ("Juan", "PERSON")],
            root=2,
            edges=[(2, 0, "compound"), (2, 1, "nummod"), (2, 4, "nmod"), (2, 5, "punct")],
        ),
        COFFEE: build_sentence(
            COFFEE,
            [
                ("send", "send", "VB"),
                ("$", "$", "$"),
                ("10", "10", "CD"),
                ("to", "to", "TO"),
                ("the", "the", "DT"),
                ("coffee", "coffee", "NN"),
                ("shop", "shop", "NN"),
                (".", ".", "."),
            ],
            mentions=[("$10", "MONEY")],
            root=0,
            edges=[
                (0, 1, "dobj"),
                (1, 2, "nummod"),
                (0, 6, "nmod:to"),
                (6, 3, "case"),
                (6, 4, "det"),
                (6, 5, "compound"),
                (0, 7, "punct"),
            ],
        ),
    }


@pytest.fixture
def make_sentence() -> SentenceBuilder:
    return build_sentence


@pytest.fixture
def canned_sentences() -> dict[str, Sentence]:
    return _canned_sentences()


@pytest.fixture
def fake_annotator(canned_sentences: dict[str, Sentence]) -> FakeAnnotator:
    return FakeAnnotator({text: [sentence] for text, sentence in canned_sentences.items()})
