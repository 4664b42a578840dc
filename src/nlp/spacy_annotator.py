"""spaCy-backed annotator.

Converts spaCy documents into the typed `Sentence` model. spaCy's English arcs (`prep` + `pobj`)
are collapsed into enhanced-style relations (`nmod:to`) so the recipient rules can follow
"send ... to X" the same way for every model.
"""

from __future__ import annotations

import logging

import spacy
from spacy.language import Language
from spacy.tokens import Doc, Span
from spacy.tokens import Token as SpacyToken

from src.nlp.annotations import (
    AnnotationError,
    DependencyGraph,
    Edge,
    EntityType,
    Mention,
    Sentence,
    Token,
)

logger = logging.getLogger(__name__)

_PREP_LABELS = {"prep", "dative"}
_OBLIQUE_LABELS = {"obl", "nmod", "iobj"}

_ENTITY_LABELS: dict[str, str] = {
    "PER": EntityType.PERSON,
    "PERSON": EntityType.PERSON,
    "ORG": EntityType.ORGANIZATION,
    "MONEY": EntityType.MONEY,
}


def _pobj(tok: SpacyToken) -> SpacyToken | None:
    return next((child for child in tok.children if child.dep_ == "pobj"), None)


def _case(tok: SpacyToken) -> SpacyToken | None:
    return next((child for child in tok.children if child.dep_ == "case"), None)


def _edge(tok: SpacyToken, sent: Span) -> Edge:
    governor = tok.head
    relation = tok.dep_

    if tok.dep_ == "pobj" and tok.head.dep_ in _PREP_LABELS and tok.head.head.i != tok.head.i:
        # head --prep--> "to" --pobj--> X  becomes  head --nmod:to--> X
        governor = tok.head.head
        relation = f"nmod:{tok.head.lower_}"
    elif tok.dep_ in _PREP_LABELS and (obj := _pobj(tok)) is not None:
        # The preposition hangs off its object as a case marker.
        governor = obj
        relation = "case"
    elif tok.dep_ in _OBLIQUE_LABELS and (case := _case(tok)) is not None:
        relation = f"{tok.dep_}:{case.lower_}"

    return Edge(
        governor=governor.i - sent.start,
        dependent=tok.i - sent.start,
        relation=relation,
    )


def _mentions(sent: Span) -> tuple[Mention, ...]:
    mentions = [
        Mention(text=ent.text, entity_type=_ENTITY_LABELS.get(ent.label_, ent.label_))
        for ent in sent.ents
    ]
    mentions.extend(
        Mention(text=tok.text, entity_type=EntityType.EMAIL) for tok in sent if tok.like_email
    )
    return tuple(mentions)


def sentence_from_span(sent: Span) -> Sentence:
    """Convert one spaCy sentence span into a `Sentence`."""

    tokens = tuple(
        Token(
            index=tok.i - sent.start,
            word=tok.text,
            lemma=tok.lemma_,
            pos=tok.tag_ or tok.pos_,
        )
        for tok in sent
        if not tok.is_space
    )
    edges = tuple(
        _edge(tok, sent) for tok in sent if tok.head.i != tok.i and not tok.is_space
    )
    graph = DependencyGraph(tokens=tokens, edges=edges, root=sent.root.i - sent.start)
    return Sentence(text=sent.text, tokens=tokens, mentions=_mentions(sent), graph=graph)


def merge_handles(doc: Doc) -> Doc:
    """Re-join `@` + word tokens the tokenizer split apart (`@`, `alex99` -> `@alex99`)."""

    spans = [
        doc[tok.i: tok.i + 2]
        for tok in doc[:-1]
        if tok.text == "@"
        and not tok.whitespace_
        and not doc[tok.i + 1].is_punct
        and not doc[tok.i + 1].is_space
        and not doc[tok.i + 1].ent_type_
    ]
    if spans:
        with doc.retokenize() as retokenizer:
            for span in spans:
                retokenizer.merge(span)
    return doc


class SpacyAnnotator:
    """`Annotator` implementation over a loaded spaCy pipeline."""

    def __init__(self, nlp: Language) -> None:
        self._nlp = nlp

    @classmethod
    def load(cls, model: str) -> SpacyAnnotator:
        """Load a spaCy pipeline by package name or path.

        Raises:
            AnnotationError: If the model is not installed or cannot be loaded.
        """

        try:
            nlp = spacy.load(model)
        except OSError as exc:
            raise AnnotationError(f"spaCy model {model!r} could not be loaded: {exc}") from exc

        missing = {"parser", "ner"} - set(nlp.pipe_names)
        if missing:
            logger.warning("spacy model=%s lacks components=%s", model, sorted(missing))
        logger.info("spacy model loaded model=%s pipes=%s", model, nlp.pipe_names)
        return cls(nlp)

    def annotate(self, text: str) -> list[Sentence]:
        doc = merge_handles(self._nlp(text))
        return [sentence_from_span(sent) for sent in doc.sents]
