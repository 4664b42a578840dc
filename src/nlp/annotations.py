"""Typed view of the linguistic annotations the extractors consume.

The extractors never touch an NLP library directly. A concrete annotator (see `spacy_annotator`)
converts its own document model into these frozen dataclasses, and tests build them by hand.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol


class AnnotationError(RuntimeError):
    """Raised when an annotator cannot be constructed."""


class EntityType(StrEnum):
    """Entity mention types the extractors look for (annotators may emit others)."""

    MONEY = "MONEY"
    PERSON = "PERSON"
    ORGANIZATION = "ORGANIZATION"
    EMAIL = "EMAIL"


@dataclass(frozen=True)
class Token:
    """One token of a sentence; `index` is its 0-based position in the sentence."""

    index: int
    word: str
    lemma: str = ""
    pos: str = ""

    @property
    def is_verb(self) -> bool:
        # Penn tags (VB, VBD, ...) and the universal VERB tag.
        return self.pos.upper().startswith("V")

    @property
    def is_preposition(self) -> bool:
        pos = self.pos.upper()
        return pos.startswith("IN") or pos == "ADP"


@dataclass(frozen=True)
class Mention:
    """A named-entity mention (surface text plus type)."""

    text: str
    entity_type: str


@dataclass(frozen=True)
class Edge:
    """A labeled dependency arc between two token indices."""

    governor: int
    dependent: int
    relation: str


@dataclass(frozen=True)
class DependencyGraph:
    """Directed dependency graph over a sentence's tokens."""

    tokens: tuple[Token, ...]
    edges: tuple[Edge, ...] = ()
    root: int | None = None

    def token(self, index: int) -> Token | None:
        for tok in self.tokens:
            if tok.index == index:
                return tok
        return None

    def root_token(self) -> Token | None:
        if self.root is None:
            return None
        return self.token(self.root)

    def outgoing(self, index: int) -> list[Edge]:
        """Edges governed by `index`, in graph order."""

        return [edge for edge in self.edges if edge.governor == index]

    def descendants(self, index: int) -> set[int]:
        """All token indices reachable from `index` (the node itself excluded)."""

        seen: set[int] = set()
        queue = deque([index])
        while queue:
            current = queue.popleft()
            for edge in self.outgoing(current):
                if edge.dependent not in seen and edge.dependent != index:
                    seen.add(edge.dependent)
                    queue.append(edge.dependent)
        return seen

    def render(self) -> str:
        """Readable one-arc-per-line dump, for diagnostics only."""

        def label(index: int) -> str:
            tok = self.token(index)
            word = tok.word if tok is not None else "?"
            return f"{word}-{index + 1}"

        lines: list[str] = []
        if self.root is not None:
            lines.append(f"root(ROOT-0, {label(self.root)})")
        lines.extend(
            f"{edge.relation}({label(edge.governor)}, {label(edge.dependent)})" for edge in self.edges
        )
        return "\n".join(lines)


@dataclass(frozen=True)
class Sentence:
    """One annotated sentence."""

    text: str
    tokens: tuple[Token, ...] = ()
    mentions: tuple[Mention, ...] = ()
    graph: DependencyGraph | None = field(default=None)

    def first_mention(self, *entity_types: str) -> Mention | None:
        """Return the first mention whose type is any of `entity_types`."""

        for mention in self.mentions:
            if mention.entity_type in entity_types and mention.text.strip():
                return mention
        return None


class Annotator(Protocol):
    """Port for sentence annotation (tokens, lemmas, POS, NER, dependencies).

    Implementations are built once per process and must tolerate concurrent `annotate` calls.
    """

    def annotate(self, text: str) -> list[Sentence]:
        """Split `text` into sentences and annotate each of them."""
        ...
