"""Recipient (payee) detection.

Candidates are produced in a fixed order and the first one that is still non-empty after cleanup
wins:
    1) the first PERSON entity,
    2) the `nmod:to` subtree hanging off the dependency root,
    3) the first ORGANIZATION or EMAIL entity,
    4) the words following the first preposition (`to`, `a`, `para`).
"""

from __future__ import annotations

from collections.abc import Callable, Collection
from dataclasses import dataclass

from src.nlp.annotations import EntityType, Sentence
from src.nlp.dictionaries import LEADING_PREPOSITIONS, RECIPIENT_PREPOSITIONS
from src.nlp.normalize import is_punctuation, trim_punctuation

_TO_RELATION_PREFIX = "nmod:to"


def recipient_from_person(sentence: Sentence, _prepositions: Collection[str]) -> str | None:
    mention = sentence.first_mention(EntityType.PERSON)
    return mention.text if mention is not None else None


def recipient_from_dependencies(sentence: Sentence, _prepositions: Collection[str]) -> str | None:
    """Join the words of the root's first `nmod:to` dependent and its subtree, in surface order."""

    graph = sentence.graph
    if graph is None or graph.root is None:
        return None

    for edge in graph.outgoing(graph.root):
        if not edge.relation.startswith(_TO_RELATION_PREFIX):
            continue
        indices = graph.descendants(edge.dependent) | {edge.dependent}
        words = [tok.word for index in sorted(indices) if (tok := graph.token(index)) is not None]
        return " ".join(words)
    return None


def recipient_from_organization(sentence: Sentence, _prepositions: Collection[str]) -> str | None:
    mention = sentence.first_mention(EntityType.ORGANIZATION, EntityType.EMAIL)
    return mention.text if mention is not None else None


def recipient_from_preposition(sentence: Sentence, prepositions: Collection[str]) -> str | None:
    """Collect the words after the first preposition up to punctuation, a preposition or a verb.

    A lone `@` is allowed as the first word so handles split by the tokenizer survive.
    """

    tokens = sentence.tokens
    for position, tok in enumerate(tokens):
        if tok.word.lower() not in prepositions and tok.lemma.lower() not in prepositions:
            continue

        words: list[str] = []
        for following in tokens[position + 1:]:
            word = following.word
            if not word:
                break
            if is_punctuation(word) and not (word == "@" and not words):
                break
            if following.is_preposition or following.is_verb:
                break
            words.append(word)

        phrase = " ".join(words).strip()
        return phrase or None
    return None


def clean_recipient(value: str, *, strip_preposition: bool = True) -> str:
    """Normalize a recipient phrase.

    Handles (`@alex99`) only lose trailing punctuation. Anything else is trimmed on both sides and
    loses at most one leading `to `, `a ` or `para `.
    """

    trimmed = value.strip()
    if trimmed.startswith("@"):
        return trim_punctuation(trimmed, leading=False)

    cleaned = trim_punctuation(trimmed)
    if strip_preposition:
        lowered = cleaned.lower()
        for prefix in LEADING_PREPOSITIONS:
            if lowered.startswith(prefix):
                cleaned = cleaned[len(prefix):].strip()
                break
    return cleaned


@dataclass(frozen=True)
class RecipientRule:
    """A candidate source plus whether it is an entity mention (kept verbatim apart from trimming)."""

    find: Callable[[Sentence, Collection[str]], str | None]
    from_entity: bool


RECIPIENT_RULES: tuple[RecipientRule, ...] = (
    RecipientRule(recipient_from_person, from_entity=True),
    RecipientRule(recipient_from_dependencies, from_entity=False),
    RecipientRule(recipient_from_organization, from_entity=True),
    RecipientRule(recipient_from_preposition, from_entity=False),
)


def extract_recipient(
        sentence: Sentence,
        *,
        prepositions: Collection[str] = RECIPIENT_PREPOSITIONS,
) -> str | None:
    """Detect the payee of a payment sentence."""

    for rule in RECIPIENT_RULES:
        candidate = rule.find(sentence, prepositions)
        if not candidate:
            continue
        cleaned = clean_recipient(candidate, strip_preposition=not rule.from_entity)
        if cleaned:
            return cleaned
    return None
